#    Copyright 2025 FAO
#
#    Licensed under the Apache License, Version 2.0 (the "License");
#    you may not use this file except in compliance with the License.
#    You may obtain a copy of the License at
#
#        http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.
#
#    Author: Carlo Cancellieri (ccancellieri@gmail.com)
#    Company: FAO, Viale delle Terme di Caracalla, 00100 Rome, Italy
#    Contact: copyright@fao.org - http://fao.org/contact-us/terms/en/


"""
shapeindex: geo shape indexing for column-oriented secondary indexes.

Parses WKT column values, folds them through a composable pipeline of
geometric transformations and emits two-tier index entries: S2 grid-cell
terms for coarse filtering plus the exact serialized geometry.
"""

from shapeindex.exceptions import (
    ConfigurationError,
    GeometryError,
    GeometryOperationError,
    GeometryParseError,
    ShapeIndexError,
    UnsupportedOperationError,
)
from shapeindex.models import Distance, DistanceUnit, EntryKind, IndexEntry
from shapeindex.modules.shapes import evaluate, parse_shape, transform
from shapeindex.modules.mapping import GeoShapeMapper, GeoShapeMapperConfig, MapperRegistry

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "GeometryError",
    "GeometryOperationError",
    "GeometryParseError",
    "ShapeIndexError",
    "UnsupportedOperationError",
    "Distance",
    "DistanceUnit",
    "EntryKind",
    "IndexEntry",
    "evaluate",
    "parse_shape",
    "transform",
    "GeoShapeMapper",
    "GeoShapeMapperConfig",
    "MapperRegistry",
]

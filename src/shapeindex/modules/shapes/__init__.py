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
Shape transformation algebra.

- shape_config: the closed set of shape variants and their configuration surface
- algebra: evaluation of shape trees and of mapper pipeline steps
"""

from shapeindex.modules.shapes.shape_config import (
    SHAPE_TYPES,
    BBoxShape,
    BufferShape,
    CentroidShape,
    ConvexHullShape,
    DifferenceShape,
    FoldShapeConfig,
    IntersectionShape,
    Shape,
    ShapeConfig,
    UnaryShapeConfig,
    UnionShape,
    WktShape,
    parse_shape,
)
from shapeindex.modules.shapes.algebra import evaluate, transform

__all__ = [
    "SHAPE_TYPES",
    "BBoxShape",
    "BufferShape",
    "CentroidShape",
    "ConvexHullShape",
    "DifferenceShape",
    "FoldShapeConfig",
    "IntersectionShape",
    "Shape",
    "ShapeConfig",
    "UnaryShapeConfig",
    "UnionShape",
    "WktShape",
    "parse_shape",
    "evaluate",
    "transform",
]

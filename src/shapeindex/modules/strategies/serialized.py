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
Exact tier of the spatial index: the full geometry serialized as a binary
doc value, so query execution can re-test coarse candidates against their
true shape.
"""

from typing import Callable, Dict, List

from shapely.geometry.base import BaseGeometry

from shapeindex.models.entries import EntryKind, IndexEntry
from shapeindex.modules.strategies.base import SpatialOperation, SpatialStrategy
from shapeindex.tools.geospatial import deserialize_geometry, serialize_geometry

_PREDICATES: Dict[SpatialOperation, Callable[[BaseGeometry, BaseGeometry], bool]] = {
    SpatialOperation.INTERSECTS: lambda stored, query: stored.intersects(query),
    SpatialOperation.IS_WITHIN: lambda stored, query: stored.within(query),
    SpatialOperation.CONTAINS: lambda stored, query: stored.contains(query),
}


class SerializedGeometryStrategy(SpatialStrategy):
    """Doc-value strategy storing the WKB of each document's geometry."""

    def create_entries(self, geometry: BaseGeometry) -> List[IndexEntry]:
        return [IndexEntry(name=self.field, kind=EntryKind.BINARY_DOC_VALUE, value=serialize_geometry(geometry))]

    def verify(self, value: bytes, geometry: BaseGeometry, operation: SpatialOperation) -> bool:
        """Evaluates `operation` between the stored geometry and the query geometry."""
        stored = deserialize_geometry(value)
        return _PREDICATES[SpatialOperation(operation)](stored, geometry)

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
Composite spatial strategy.

Combines the S2 prefix tree in front of the serialized geometry: the tree
quickly prunes documents that cannot match, and the stored geometry removes
the false positives left by the tree's limited precision.
"""

import logging
from typing import FrozenSet, Iterable, List

from shapeindex.models.entries import EntryKind, IndexEntry
from shapeindex.models.protocols.kernel import Geometry
from shapeindex.modules.strategies.base import SpatialOperation, SpatialStrategy
from shapeindex.modules.strategies.prefix_tree import S2PrefixTreeStrategy
from shapeindex.modules.strategies.serialized import SerializedGeometryStrategy

logger = logging.getLogger(__name__)


class SpatialFilter:
    """
    Query-time filter built from a query geometry. Candidates come from the
    prefix tree terms, and only candidates are re-tested exactly.
    """

    def __init__(
        self,
        strategy: "CompositeSpatialStrategy",
        geometry: Geometry,
        operation: SpatialOperation,
        terms: FrozenSet[str]
    ):
        self.strategy = strategy
        self.geometry = geometry
        self.operation = operation
        self.terms = terms

    def is_candidate(self, entries: Iterable[IndexEntry]) -> bool:
        index_strategy = self.strategy.index_strategy
        return any(entry.value in self.terms for entry in index_strategy.own_entries(entries, EntryKind.TERM))

    def matches(self, entries: Iterable[IndexEntry]) -> bool:
        entries = list(entries)
        if not self.is_candidate(entries):
            return False
        geometry_strategy = self.strategy.geometry_strategy
        for entry in geometry_strategy.own_entries(entries, EntryKind.BINARY_DOC_VALUE):
            return geometry_strategy.verify(entry.value, self.geometry, self.operation)
        logger.warning(f"Candidate document has no stored geometry for field '{self.strategy.field}'.")
        return False


class CompositeSpatialStrategy(SpatialStrategy):
    """Two-tier strategy: coarse grid terms followed by the exact geometry."""

    def __init__(
        self,
        field: str,
        index_strategy: S2PrefixTreeStrategy,
        geometry_strategy: SerializedGeometryStrategy
    ):
        super().__init__(field)
        self.index_strategy = index_strategy
        self.geometry_strategy = geometry_strategy

    def create_entries(self, geometry: Geometry) -> List[IndexEntry]:
        return self.index_strategy.create_entries(geometry) + self.geometry_strategy.create_entries(geometry)

    def make_filter(
        self,
        geometry: Geometry,
        operation: SpatialOperation = SpatialOperation.INTERSECTS
    ) -> SpatialFilter:
        return SpatialFilter(self, geometry, SpatialOperation(operation), self.index_strategy.query_terms(geometry))

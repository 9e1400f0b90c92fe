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
Coarse tier of the spatial index: a recursive prefix tree of S2 cells.

Each document is indexed by the cells covering its geometry down to
`max_levels`, plus all their ancestors. The tree trades precision for
compactness: shapes straddling cell boundaries match queries they do not
really satisfy, which the exact tier later discards. Raising `max_levels`
reduces those false positives at the cost of more terms per shape.
"""

import logging
from typing import FrozenSet, List, Optional

from shapeindex.config import settings
from shapeindex.exceptions import ConfigurationError
from shapeindex.models.entries import EntryKind, IndexEntry
from shapeindex.models.protocols.kernel import Geometry
from shapeindex.modules.strategies.base import SpatialStrategy
from shapeindex.tools.geospatial import (
    S2_MAX_LEVEL,
    cell_terms,
    cover_geometry,
    query_cell_terms,
)

logger = logging.getLogger(__name__)


class S2PrefixTreeStrategy(SpatialStrategy):
    """Grid-cell search tree strategy producing `term` entries."""

    MIN_LEVELS = 1
    MAX_LEVELS = S2_MAX_LEVEL

    def __init__(self, field: str, max_levels: Optional[int] = None, max_cells: Optional[int] = None):
        super().__init__(field)
        self.max_levels = self.validate_max_levels(max_levels)
        self.max_cells = max_cells or settings.MAX_CELLS

    @classmethod
    def validate_max_levels(cls, max_levels: Optional[int]) -> int:
        """
        Checks the tree depth against the levels the grid supports, returning
        the configured default when it is not set.

        Raises:
            ConfigurationError: if `max_levels` is outside [MIN_LEVELS, MAX_LEVELS].
        """
        if max_levels is None:
            return settings.DEFAULT_MAX_LEVELS
        if isinstance(max_levels, bool) or not isinstance(max_levels, int):
            raise ConfigurationError(f"max_levels must be an integer, but found '{max_levels}'")
        if not cls.MIN_LEVELS <= max_levels <= cls.MAX_LEVELS:
            raise ConfigurationError(
                f"max_levels must be in range [{cls.MIN_LEVELS}, {cls.MAX_LEVELS}], but found {max_levels}"
            )
        return max_levels

    def create_entries(self, geometry: Geometry) -> List[IndexEntry]:
        cells = cover_geometry(geometry, self.max_levels, self.max_cells)
        if not cells:
            logger.warning(f"Geometry for field '{self.field}' is empty, no grid cells will be indexed.")
        terms = cell_terms(cells)
        logger.debug(f"Field '{self.field}': {len(cells)} covering cells, {len(terms)} terms.")
        return [IndexEntry(name=self.field, kind=EntryKind.TERM, value=term) for term in terms]

    def query_terms(self, geometry: Geometry) -> FrozenSet[str]:
        """Terms shared by every indexed document whose geometry may intersect `geometry`."""
        cells = cover_geometry(geometry, self.max_levels, self.max_cells)
        return frozenset(query_cell_terms(cells))

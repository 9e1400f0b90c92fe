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
Spatial Strategy Base Protocol.

A spatial strategy decides which index entries represent a geometry for a
given field, and how those entries are used back at query time.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable, List

from shapeindex.models.entries import EntryKind, IndexEntry
from shapeindex.models.protocols.kernel import Geometry


class SpatialOperation(str, Enum):
    """Spatial relations a query may ask for, relative to the stored shape."""
    INTERSECTS = "intersects"
    IS_WITHIN = "is_within"  # Stored shape lies within the query shape
    CONTAINS = "contains"    # Stored shape contains the query shape


class SpatialStrategy(ABC):
    """
    Abstract base class for spatial indexing strategies.

    Strategies are built once per indexed column and are read-only afterwards,
    so a single instance may serve concurrent indexing calls.
    """

    def __init__(self, field: str):
        self.field = field

    @abstractmethod
    def create_entries(self, geometry: Geometry) -> List[IndexEntry]:
        """
        Returns the index entries representing `geometry` for this strategy's field.

        Args:
            geometry: The final, fully transformed geometry of a document.

        Returns:
            Entries ordered as the strategy's own format requires.
        """
        pass

    def own_entries(self, entries: Iterable[IndexEntry], kind: EntryKind) -> List[IndexEntry]:
        """Selects the entries of a document belonging to this strategy's field."""
        return [entry for entry in entries if entry.name == self.field and entry.kind == kind]

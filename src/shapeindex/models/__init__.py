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
Value types shared by the shape algebra, the spatial strategies and the mappers:
- distance.py: Distance and DistanceUnit
- entries.py: IndexEntry and EntryKind
- protocols/: capability interfaces of the external collaborators
"""

from shapeindex.models.distance import Distance, DistanceUnit
from shapeindex.models.entries import EntryKind, IndexEntry

__all__ = [
    "Distance",
    "DistanceUnit",
    "EntryKind",
    "IndexEntry",
]

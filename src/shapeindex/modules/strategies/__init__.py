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
Spatial indexing strategies.

- prefix_tree: S2 grid-cell terms for coarse candidate generation
- serialized: exact WKB doc values for false-positive elimination
- composite: both tiers combined behind a single strategy
"""

from shapeindex.modules.strategies.base import SpatialOperation, SpatialStrategy
from shapeindex.modules.strategies.prefix_tree import S2PrefixTreeStrategy
from shapeindex.modules.strategies.serialized import SerializedGeometryStrategy
from shapeindex.modules.strategies.composite import CompositeSpatialStrategy, SpatialFilter

__all__ = [
    "SpatialOperation",
    "SpatialStrategy",
    "S2PrefixTreeStrategy",
    "SerializedGeometryStrategy",
    "CompositeSpatialStrategy",
    "SpatialFilter",
]

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
Geometry kernel protocol definitions.
"""

from typing import Any, Protocol, runtime_checkable

# Geometries are opaque to the algebra; only the kernel interprets them.
Geometry = Any


@runtime_checkable
class GeometryKernelProtocol(Protocol):
    """
    Capability set of the planar geometry engine consumed by the shape
    algebra. Implementations raise GeometryParseError for unparseable WKT and
    GeometryOperationError when an operation is rejected.
    """

    def parse_wkt(self, text: str) -> Geometry:
        """Parses a Well-Known Text string into a geometry."""
        ...

    def bounding_box(self, geometry: Geometry) -> Geometry:
        """Returns the minimal axis-aligned rectangle enclosing the geometry."""
        ...

    def buffer(self, geometry: Geometry, degrees: float) -> Geometry:
        """Returns the region within the given angular distance of the geometry."""
        ...

    def centroid(self, geometry: Geometry) -> Geometry:
        ...

    def convex_hull(self, geometry: Geometry) -> Geometry:
        ...

    def difference(self, left: Geometry, right: Geometry) -> Geometry:
        ...

    def intersection(self, left: Geometry, right: Geometry) -> Geometry:
        ...

    def union(self, left: Geometry, right: Geometry) -> Geometry:
        ...

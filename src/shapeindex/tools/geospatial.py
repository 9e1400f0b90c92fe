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


import logging
from typing import Callable, List, Set

import s2sphere
from shapely import wkb, wkt
from shapely.errors import GEOSException
from shapely.geometry.base import BaseGeometry

from shapeindex.exceptions import GeometryOperationError, GeometryParseError

logger = logging.getLogger(__name__)

# Suffix distinguishing the cells of a covering from their ancestors
LEAF_MARKER = "+"

S2_MIN_LEVEL = 0
S2_MAX_LEVEL = 30


class ShapelyKernel:
    """
    Geometry kernel backed by Shapely (GEOS). Coordinates are planar
    (lon, lat) decimal degrees, pole wrapping is not supported.
    """

    def parse_wkt(self, text: str) -> BaseGeometry:
        if not isinstance(text, str):
            raise GeometryParseError(text)
        try:
            geometry = wkt.loads(text)
        except Exception as e:
            raise GeometryParseError(text, e) from e
        if geometry is None:
            raise GeometryParseError(text)
        return geometry

    def bounding_box(self, geometry: BaseGeometry) -> BaseGeometry:
        # A point (or an axis-parallel line) degenerates to itself
        return _apply("bounding_box", lambda: geometry.envelope)

    def buffer(self, geometry: BaseGeometry, degrees: float) -> BaseGeometry:
        return _apply("buffer", lambda: geometry.buffer(degrees))

    def centroid(self, geometry: BaseGeometry) -> BaseGeometry:
        return _apply("centroid", lambda: geometry.centroid)

    def convex_hull(self, geometry: BaseGeometry) -> BaseGeometry:
        return _apply("convex_hull", lambda: geometry.convex_hull)

    def difference(self, left: BaseGeometry, right: BaseGeometry) -> BaseGeometry:
        return _apply("difference", lambda: left.difference(right))

    def intersection(self, left: BaseGeometry, right: BaseGeometry) -> BaseGeometry:
        return _apply("intersection", lambda: left.intersection(right))

    def union(self, left: BaseGeometry, right: BaseGeometry) -> BaseGeometry:
        return _apply("union", lambda: left.union(right))


def _apply(operation: str, func: Callable[[], BaseGeometry]) -> BaseGeometry:
    try:
        return func()
    except (GEOSException, ValueError) as e:
        raise GeometryOperationError(operation, e) from e


_DEFAULT_KERNEL = ShapelyKernel()


def default_kernel() -> ShapelyKernel:
    """Returns the shared, stateless Shapely kernel."""
    return _DEFAULT_KERNEL


def serialize_geometry(geometry: BaseGeometry) -> bytes:
    """Serializes a geometry to WKB for exact per-document storage."""
    return wkb.dumps(geometry)


def deserialize_geometry(data: bytes) -> BaseGeometry:
    try:
        return wkb.loads(data)
    except Exception as e:
        raise GeometryOperationError("deserialize", e) from e


def _lat_lng(lon: float, lat: float) -> s2sphere.LatLng:
    # Clamp into the valid domain, S2 cells are undefined beyond the poles
    lat = max(-90.0, min(90.0, lat))
    lon = max(-180.0, min(180.0, lon))
    return s2sphere.LatLng.from_degrees(lat, lon)


def cover_geometry(geom: BaseGeometry, max_level: int, max_cells: int) -> List[s2sphere.CellId]:
    """
    Calculates the S2 cells, down to `max_level`, covering the given geometry.
    Points map to their single enclosing cell. Any other geometry is covered
    through its bounding box, which always yields a superset of the cells the
    geometry touches.
    The geometry is expected to be in EPSG:4326 (lon, lat).
    """
    if geom.is_empty:
        return []

    if geom.geom_type == "Point":
        latlng = _lat_lng(geom.x, geom.y)
        return [s2sphere.CellId.from_lat_lng(latlng).parent(max_level)]

    xmin, ymin, xmax, ymax = geom.bounds
    # S2 S2LatLngRect.from_point_pair is the robust way to create a rect from corners
    s2_rect = s2sphere.LatLngRect.from_point_pair(_lat_lng(xmin, ymin), _lat_lng(xmax, ymax))

    rc = s2sphere.RegionCoverer()
    rc.min_level = S2_MIN_LEVEL
    rc.max_level = max_level
    rc.max_cells = max_cells
    return list(rc.get_covering(s2_rect))


def _lineage(cell: s2sphere.CellId) -> List[s2sphere.CellId]:
    """The strict ancestors of a cell, coarsest first."""
    return [cell.parent(level) for level in range(S2_MIN_LEVEL, cell.level())]


def cell_terms(cells: List[s2sphere.CellId]) -> List[str]:
    """
    Flattens a covering into the prefix-tree terms stored for a document.
    Every covering cell yields its token plus LEAF_MARKER, every strict
    ancestor yields its plain token. Terms are unique and ordered from the
    coarsest ancestor to the leaf, cell by cell.
    """
    terms: List[str] = []
    seen = set()
    for cell in cells:
        for term in [ancestor.to_token() for ancestor in _lineage(cell)] + [cell.to_token() + LEAF_MARKER]:
            if term not in seen:
                seen.add(term)
                terms.append(term)
    return terms


def query_cell_terms(cells: List[s2sphere.CellId]) -> Set[str]:
    """
    Terms any intersecting document is guaranteed to share with a query
    covering. Two cells holding a common point are either equal or nested, so
    a document matches when one of its leaves is a query cell or a query
    ancestor (leaf-marked tokens), or when one of its ancestors is a query
    cell (plain tokens). Shared ancestors alone never match.
    """
    terms: Set[str] = set()
    for cell in cells:
        terms.add(cell.to_token())
        terms.add(cell.to_token() + LEAF_MARKER)
        terms.update(ancestor.to_token() + LEAF_MARKER for ancestor in _lineage(cell))
    return terms

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


import os
# Pin the process defaults so tests do not depend on the caller's environment
os.environ.pop("SHAPEINDEX_DEFAULT_MAX_LEVELS", None)
os.environ.pop("SHAPEINDEX_MAX_CELLS", None)

import pytest
from typing import List

from shapeindex.exceptions import GeometryParseError
from shapeindex.models.entries import EntryKind, IndexEntry
from shapeindex.modules.mapping import GeoShapeMapper, GeoShapeMapperConfig
from shapeindex.modules.strategies.base import SpatialStrategy
from shapeindex.tools.geospatial import ShapelyKernel


class FakeKernel:
    """
    Kernel whose geometries are expression strings, so that evaluation order
    and associativity are directly observable.
    """

    def parse_wkt(self, text):
        if not isinstance(text, str) or text.startswith("BAD"):
            raise GeometryParseError(text)
        return f"wkt({text})"

    def bounding_box(self, geometry):
        return f"bbox({geometry})"

    def buffer(self, geometry, degrees):
        return f"buffer({geometry},{degrees:g})"

    def centroid(self, geometry):
        return f"centroid({geometry})"

    def convex_hull(self, geometry):
        return f"hull({geometry})"

    def difference(self, left, right):
        return f"({left} - {right})"

    def intersection(self, left, right):
        return f"({left} & {right})"

    def union(self, left, right):
        return f"({left} | {right})"


class FakeStrategy(SpatialStrategy):
    """Strategy indexing the fake geometry expression as a single term."""

    def create_entries(self, geometry) -> List[IndexEntry]:
        return [IndexEntry(name=self.field, kind=EntryKind.TERM, value=geometry)]


@pytest.fixture
def kernel():
    """The Shapely geometry kernel."""
    return ShapelyKernel()


@pytest.fixture
def fake_kernel():
    return FakeKernel()


@pytest.fixture
def mapper_factory():
    """Builds GeoShape mappers from keyword configuration."""
    def _build(field="shape", **kwargs):
        return GeoShapeMapper(GeoShapeMapperConfig(field=field, **kwargs))
    return _build


@pytest.fixture
def fake_mapper_factory(fake_kernel):
    """Builds GeoShape mappers running on the fake kernel and strategy."""
    def _build(field="shape", **kwargs):
        return GeoShapeMapper(
            GeoShapeMapperConfig(field=field, **kwargs),
            kernel=fake_kernel,
            strategy=FakeStrategy(field)
        )
    return _build

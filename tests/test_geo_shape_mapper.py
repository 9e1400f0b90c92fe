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


import random
from concurrent.futures import ThreadPoolExecutor

import pytest
from pydantic import ValidationError
from shapely import wkb
from shapely.geometry import Point

from shapeindex.exceptions import ConfigurationError, GeometryParseError, UnsupportedOperationError
from shapeindex.models.entries import EntryKind
from shapeindex.modules.mapping import GeoShapeMapper, GeoShapeMapperConfig
from shapeindex.modules.shapes import BBoxShape, BufferShape, CentroidShape, DifferenceShape, WktShape
from shapeindex.modules.strategies import CompositeSpatialStrategy, SpatialOperation


def test_point_produces_both_entry_kinds(mapper_factory):
    entries = mapper_factory().indexable_fields("POINT(0 0)")
    kinds = {entry.kind for entry in entries}
    assert kinds == {EntryKind.TERM, EntryKind.BINARY_DOC_VALUE}
    assert all(entry.name == "shape" for entry in entries)
    stored = [entry.value for entry in entries if entry.kind == EntryKind.BINARY_DOC_VALUE]
    assert len(stored) == 1
    assert wkb.loads(stored[0]).equals(Point(0, 0))


def test_bbox_transformation_of_point_is_the_point(mapper_factory):
    plain = mapper_factory().indexable_fields("POINT(0 0)")
    boxed = mapper_factory(transformations=[BBoxShape()]).indexable_fields("POINT(0 0)")
    assert wkb.loads(boxed[-1].value).equals(Point(0, 0))
    assert [entry.value for entry in boxed[:-1]] == [entry.value for entry in plain[:-1]]


def test_none_value_produces_no_entries(mapper_factory, fake_mapper_factory):
    assert mapper_factory().indexable_fields(None) == []
    assert fake_mapper_factory(transformations=[BBoxShape()]).indexable_fields(None) == []


def test_bytes_values_are_decoded(mapper_factory):
    mapper = mapper_factory()
    assert mapper.indexable_fields(b"POINT(1 2)") == mapper.indexable_fields("POINT(1 2)")


def test_undecodable_bytes_are_a_parse_error(mapper_factory):
    mapper = mapper_factory(validated=True)
    with pytest.raises(GeometryParseError) as excinfo:
        mapper.indexable_fields(b"\xff\xfe")
    assert excinfo.value.text == b"\xff\xfe"
    assert isinstance(excinfo.value.original_exception, UnicodeDecodeError)
    with pytest.raises(GeometryParseError):
        mapper.validate(b"\xff\xfe")
    with pytest.raises(GeometryParseError):
        mapper.query_filter(b"\xff\xfe")


def test_malformed_wkt_is_a_parse_error(mapper_factory):
    with pytest.raises(GeometryParseError) as excinfo:
        mapper_factory().indexable_fields("POINT(0")
    assert excinfo.value.text == "POINT(0"


def test_column_defaults_to_field(mapper_factory):
    assert mapper_factory(field="location").column == "location"
    assert mapper_factory(field="location", column="geom").column == "geom"


@pytest.mark.parametrize("column", ["", " ", "\t\n"])
def test_whitespace_column_is_rejected(mapper_factory, column):
    with pytest.raises(ConfigurationError, match="Column must not be whitespace"):
        mapper_factory(column=column)


@pytest.mark.parametrize("field", ["", "   "])
def test_blank_field_is_rejected(mapper_factory, field):
    with pytest.raises(ConfigurationError, match="Field name is required"):
        mapper_factory(field=field)


@pytest.mark.parametrize("max_levels", [0, 31])
def test_out_of_range_levels_are_rejected(mapper_factory, max_levels):
    with pytest.raises(ConfigurationError):
        mapper_factory(max_levels=max_levels)


@pytest.mark.parametrize("max_levels, expected", [(1, 1), (30, 30), (None, 11)])
def test_levels(mapper_factory, max_levels, expected):
    mapper = mapper_factory(max_levels=max_levels)
    assert mapper.max_levels == expected
    assert isinstance(mapper.strategy, CompositeSpatialStrategy)
    assert mapper.strategy.index_strategy.max_levels == expected


@pytest.mark.parametrize("reverse", [False, True])
@pytest.mark.parametrize("name", ["shape", "other"])
def test_sorting_is_unsupported(mapper_factory, name, reverse):
    with pytest.raises(UnsupportedOperationError) as excinfo:
        mapper_factory().sort_field(name, reverse)
    assert excinfo.value.field == name
    assert name in str(excinfo.value)


def test_validation_parses_only_when_enabled(mapper_factory):
    mapper_factory().validate("not a shape")
    validated = mapper_factory(validated=True)
    validated.validate("POINT(0 0)")
    validated.validate(None)
    with pytest.raises(GeometryParseError):
        validated.validate("not a shape")


@pytest.mark.parametrize("column_type, supported", [
    ("text", True),
    ("VARCHAR", True),
    ("ascii", True),
    ("int", False),
    ("blob", False),
])
def test_supported_column_types(mapper_factory, column_type, supported):
    mapper = mapper_factory()
    assert mapper.supports(column_type) is supported
    if supported:
        mapper.validate_column_type(column_type)
    else:
        with pytest.raises(ConfigurationError):
            mapper.validate_column_type(column_type)


def test_repr(mapper_factory):
    text = repr(mapper_factory(field="location", column="geom", max_levels=5))
    assert text.startswith("GeoShapeMapper(")
    assert "field='location'" in text
    assert "column='geom'" in text
    assert "max_levels=5" in text
    assert "transformations=()" in text
    assert "supported_types" not in text


def test_transformations_run_in_order(fake_mapper_factory):
    mapper = fake_mapper_factory(transformations=[BBoxShape(), CentroidShape()])
    (entry,) = mapper.indexable_fields("POINT(0 0)")
    assert entry.value == "centroid(bbox(wkt(POINT(0 0))))"

    reordered = fake_mapper_factory(transformations=[CentroidShape(), BBoxShape()])
    assert reordered.indexable_fields("POINT(0 0)")[0].value == "bbox(centroid(wkt(POINT(0 0))))"


def test_fold_transformation_starts_from_the_column_geometry(fake_mapper_factory):
    mapper = fake_mapper_factory(transformations=[
        DifferenceShape(shapes=[WktShape(value="A"), BufferShape(max_distance="1deg")])
    ])
    (entry,) = mapper.indexable_fields("G")
    assert entry.value == "((wkt(G) - wkt(A)) - buffer(wkt(G),1))"


def test_transformations_from_config_mapping(fake_mapper_factory):
    mapper = fake_mapper_factory(fields=[{"type": "convex_hull"}, {"type": "bbox", "shape": {"value": "Z"}}])
    assert mapper.indexable_fields("G")[0].value == "bbox(wkt(Z))"


def test_indexing_does_not_mutate_the_mapper(mapper_factory):
    mapper = mapper_factory(transformations=[BufferShape(max_distance="2km")])
    before = repr(mapper)
    first = mapper.indexable_fields("LINESTRING(0 0, 0.1 0.1)")
    second = mapper.indexable_fields("LINESTRING(0 0, 0.1 0.1)")
    assert first == second
    assert repr(mapper) == before


def test_query_filter(mapper_factory):
    mapper = mapper_factory()
    entries = mapper.indexable_fields("POLYGON((0 0,0 1,1 1,1 0,0 0))")
    assert mapper.query_filter("POINT(0.5 0.5)").matches(entries)
    assert not mapper.query_filter("POINT(20 20)").matches(entries)
    assert mapper.query_filter("POINT(0.5 0.5)", SpatialOperation.CONTAINS).matches(entries)
    assert not mapper.query_filter("POINT(0.5 0.5)", SpatialOperation.IS_WITHIN).matches(entries)


def test_query_filter_rejects_malformed_wkt(mapper_factory):
    with pytest.raises(GeometryParseError):
        mapper_factory().query_filter("POLYGON((")


def test_config_is_immutable():
    config = GeoShapeMapperConfig(field="shape")
    with pytest.raises(ValidationError):
        config.field = "other"
    assert GeoShapeMapper(config).config is config


def test_concurrent_indexing_equals_sequential(mapper_factory):
    mapper = mapper_factory(
        max_levels=14,
        transformations=[BufferShape(min_distance="1km", max_distance="5km")]
    )
    values = [f"POINT({x * 0.37 % 10} {x * 0.53 % 10})" for x in range(40)]
    values += [f"LINESTRING({x} 0, {x + 0.5} 0.5)" for x in range(10)]

    sequential = {value: mapper.indexable_fields(value) for value in values}

    shuffled = values * 3
    random.Random(7).shuffle(shuffled)
    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(mapper.indexable_fields, shuffled))

    for value, entries in zip(shuffled, results):
        assert entries == sequential[value]

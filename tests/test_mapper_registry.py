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


from typing import Literal

import pytest
from shapely import wkb

from shapeindex.exceptions import ConfigurationError
from shapeindex.models.entries import EntryKind
from shapeindex.modules.mapping import GeoShapeMapper, MapperConfig, MapperProtocol, MapperRegistry
from shapeindex.modules.shapes import BBoxShape, UnionShape


def test_from_dict_defaults_to_geo_shape():
    mapper = MapperRegistry.from_dict({"field": "shape", "max_levels": 8})
    assert isinstance(mapper, GeoShapeMapper)
    assert mapper.max_levels == 8
    assert mapper.column == "shape"


def test_from_dict_accepts_fields_alias():
    mapper = MapperRegistry.from_dict({
        "type": "geo_shape",
        "field": "shape",
        "column": "geom",
        "fields": [{"type": "bbox"}],
    })
    assert mapper.column == "geom"
    assert mapper.transformations == (BBoxShape(),)


def test_from_dict_parses_nested_shapes():
    mapper = MapperRegistry.from_dict({
        "field": "shape",
        "transformations": [{
            "type": "union",
            "shapes": [{"type": "wkt", "value": "POLYGON((2 2,2 3,3 3,3 2,2 2))"}]
        }]
    })
    assert isinstance(mapper.transformations[0], UnionShape)
    entries = mapper.indexable_fields("POLYGON((0 0,0 1,1 1,1 0,0 0))")
    assert entries[-1].kind == EntryKind.BINARY_DOC_VALUE
    assert wkb.loads(entries[-1].value).area == pytest.approx(2.0)


@pytest.mark.parametrize("data, message", [
    ({"type": "geo_point", "field": "shape"}, "geo_point"),
    ({"type": 3, "field": "shape"}, "Unknown mapper type"),
    ({"field": "shape", "transformations": [{"type": "rotate"}]}, "Invalid 'geo_shape'"),
    ({"field": "shape", "transformations": [{"type": "union", "shapes": []}]}, "Invalid 'geo_shape'"),
    ({"field": "shape", "precision": 3}, "Invalid 'geo_shape'"),
    ({"column": "shape"}, "Invalid 'geo_shape'"),
    ({"field": "shape", "max_levels": 31}, "max_levels"),
    ({"field": "shape", "max_levels": True}, "Invalid 'geo_shape'"),
    ({"field": "shape", "max_levels": "11"}, "Invalid 'geo_shape'"),
    ({"field": "shape", "max_levels": 11.0}, "Invalid 'geo_shape'"),
    ({"field": " "}, "Field name is required"),
    (["shape"], "must be a mapping"),
])
def test_from_dict_rejects_invalid_configurations(data, message):
    with pytest.raises(ConfigurationError, match=message):
        MapperRegistry.from_dict(data)


def test_get_mapper_rejects_unregistered_configs():
    class OrphanConfig(MapperConfig):
        type: Literal["orphan"] = "orphan"

    with pytest.raises(ConfigurationError, match="OrphanConfig"):
        MapperRegistry.get_mapper(OrphanConfig(field="shape"))


def test_register_new_mapper_type(monkeypatch):
    class CustomConfig(MapperConfig):
        type: Literal["custom_shape"] = "custom_shape"

    class CustomMapper(GeoShapeMapper):
        pass

    monkeypatch.setattr(MapperRegistry, "_registry", dict(MapperRegistry._registry))
    monkeypatch.setattr(MapperRegistry, "_config_types", dict(MapperRegistry._config_types))

    MapperRegistry.register(CustomConfig, CustomMapper)
    assert MapperRegistry._config_types["custom_shape"] is CustomConfig
    assert MapperRegistry._registry[CustomConfig] is CustomMapper


def test_mappers_must_implement_validation():
    class PartialMapper(MapperProtocol):
        def base(self, value):
            return value

        def indexable_fields(self, value):
            return []

        def sort_field(self, name, reverse=False):
            return None

    with pytest.raises(TypeError):
        PartialMapper(MapperConfig(type="partial", field="shape"))

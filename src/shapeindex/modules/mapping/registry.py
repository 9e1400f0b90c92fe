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


from typing import Any, Dict, Type

from pydantic import ValidationError

from shapeindex.exceptions import ConfigurationError
from shapeindex.modules.mapping.base import MapperConfig, MapperProtocol
from shapeindex.modules.mapping.geo_shape import GeoShapeMapper
from shapeindex.modules.mapping.geo_shape_config import GeoShapeMapperConfig

DEFAULT_MAPPER_TYPE = "geo_shape"


class MapperRegistry:
    """
    Centralized registry for resolving Mapper Configurations to their
    Implementation classes.
    """

    # Map Config Type -> Implementation Class
    _registry: Dict[Type[MapperConfig], Type[MapperProtocol]] = {
        GeoShapeMapperConfig: GeoShapeMapper,
    }

    # Map discriminator -> Config Type
    _config_types: Dict[str, Type[MapperConfig]] = {
        "geo_shape": GeoShapeMapperConfig,
    }

    @classmethod
    def get_mapper(cls, config: MapperConfig) -> MapperProtocol:
        """
        Factory method to instantiate the correct MapperProtocol implementation
        for a given configuration object.
        """
        config_type = type(config)
        mapper_cls = cls._registry.get(config_type)

        if not mapper_cls:
            raise ConfigurationError(f"No mapper implementation registered for config type: {config_type.__name__}")

        return mapper_cls(config)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> MapperProtocol:
        """
        Validates a raw field specification, such as
        `{"field": "shape", "max_levels": 11, "transformations": [{"type": "bbox"}]}`,
        and builds its mapper.

        Raises:
            ConfigurationError: on unknown mapper types and on any validation failure.
        """
        if not isinstance(data, dict):
            raise ConfigurationError(f"Mapper configuration must be a mapping, found {type(data).__name__}")
        mapper_type = data.get("type", DEFAULT_MAPPER_TYPE)
        config_cls = cls._config_types.get(mapper_type) if isinstance(mapper_type, str) else None
        if config_cls is None:
            raise ConfigurationError(
                f"Unknown mapper type '{mapper_type}', expected one of: {', '.join(cls._config_types)}"
            )
        try:
            config = config_cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid '{mapper_type}' mapper configuration", e) from e
        return cls.get_mapper(config)

    @classmethod
    def register(cls, config_cls: Type[MapperConfig], impl_cls: Type[MapperProtocol]):
        """Register a new mapper type dynamically."""
        cls._registry[config_cls] = impl_cls
        cls._config_types[config_cls.model_fields["type"].default] = config_cls

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
Geo Shape Mapper Configuration.

This module is extracted to avoid circular dependencies between:
- mapping/geo_shape
- mapping/registry
"""

from typing import Any, Literal, Optional, Tuple

from pydantic import AliasChoices, Field, StrictInt, field_validator

from shapeindex.modules.mapping.base import MapperConfig
from shapeindex.modules.shapes.shape_config import Shape


class GeoShapeMapperConfig(MapperConfig):
    """Configuration for GeoShapeMapper."""
    type: Literal["geo_shape"] = "geo_shape"

    max_levels: Optional[StrictInt] = Field(
        None,
        description=(
            "Maximum number of precision levels of the search tree, the configured default when omitted. "
            "False positives are discarded using the stored geometry, so this is not a precision loss: "
            "higher values produce fewer false positives at the expense of more index terms."
        )
    )
    transformations: Tuple[Shape, ...] = Field(
        default_factory=tuple,
        validation_alias=AliasChoices("transformations", "fields"),
        description="Transformations applied in order to the column geometry before indexing"
    )

    @field_validator("transformations", mode="before")
    @classmethod
    def _absent_transformations(cls, value: Any) -> Any:
        return () if value is None else value

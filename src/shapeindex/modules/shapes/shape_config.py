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
Shape Configuration Models.

A shape is a closed, immutable tree of geometric operations. Each variant is
selected by its `type` discriminator, `wkt` being the default when the
discriminator is omitted:

    {"type": "difference", "shapes": [
        {"type": "buffer", "max_distance": "10km", "shape": {"value": "POINT(0 0)"}},
        {"type": "bbox", "shape": {"value": "LINESTRING(0 0, 0.01 0.01)"}}
    ]}

Unary variants may omit their operand when used as a mapper transformation;
the omitted operand stands for the geometry being indexed.
"""

from typing import Annotated, Any, Dict, Literal, Optional, Tuple, Type, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    ValidationError,
)

from shapeindex.exceptions import ConfigurationError
from shapeindex.models.distance import Distance

DEFAULT_SHAPE_TYPE = "wkt"


class ShapeConfig(BaseModel):
    """Base model of every shape variant."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str  # Discriminator field


class WktShape(ShapeConfig):
    """Leaf shape parsed from Well-Known Text."""
    type: Literal["wkt"] = "wkt"
    value: str = Field(validation_alias=AliasChoices("value", "text"))


class UnaryShapeConfig(ShapeConfig):
    shape: Optional["Shape"] = Field(None, description="Operand, the indexed geometry when omitted")


class BBoxShape(UnaryShapeConfig):
    """Minimal axis-aligned rectangle enclosing the operand."""
    type: Literal["bbox"] = "bbox"


class BufferShape(UnaryShapeConfig):
    """
    Region within `max_distance` of the operand minus the region within
    `min_distance`. Both bounds are optional: without `max_distance` the
    operand itself is the outer region.
    """
    type: Literal["buffer"] = "buffer"
    min_distance: Optional[Distance] = None
    max_distance: Optional[Distance] = None


class CentroidShape(UnaryShapeConfig):
    type: Literal["centroid"] = "centroid"


class ConvexHullShape(UnaryShapeConfig):
    type: Literal["convex_hull"] = "convex_hull"


class FoldShapeConfig(ShapeConfig):
    """Base of the n-ary variants, folded left to right in declaration order."""
    shapes: Tuple["Shape", ...] = Field(..., min_length=1)


class DifferenceShape(FoldShapeConfig):
    type: Literal["difference"] = "difference"


class IntersectionShape(FoldShapeConfig):
    type: Literal["intersection"] = "intersection"


class UnionShape(FoldShapeConfig):
    type: Literal["union"] = "union"


# Tag -> variant lookup table, the single source of truth for the discriminator
SHAPE_TYPES: Dict[str, Type[ShapeConfig]] = {
    "wkt": WktShape,
    "bbox": BBoxShape,
    "buffer": BufferShape,
    "centroid": CentroidShape,
    "convex_hull": ConvexHullShape,
    "difference": DifferenceShape,
    "intersection": IntersectionShape,
    "union": UnionShape,
}


def _shape_tag(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        return value.get("type", DEFAULT_SHAPE_TYPE)
    return getattr(value, "type", None)


Shape = Annotated[
    Union[
        Annotated[WktShape, Tag("wkt")],
        Annotated[BBoxShape, Tag("bbox")],
        Annotated[BufferShape, Tag("buffer")],
        Annotated[CentroidShape, Tag("centroid")],
        Annotated[ConvexHullShape, Tag("convex_hull")],
        Annotated[DifferenceShape, Tag("difference")],
        Annotated[IntersectionShape, Tag("intersection")],
        Annotated[UnionShape, Tag("union")],
    ],
    Discriminator(_shape_tag),
]

# Rebuild models to resolve the recursive forward references
for _shape_cls in SHAPE_TYPES.values():
    _shape_cls.model_rebuild()


def parse_shape(data: Any) -> ShapeConfig:
    """
    Builds a shape from its configuration mapping.

    Raises:
        ConfigurationError: if the discriminator is unknown or the body fails validation.
    """
    if isinstance(data, ShapeConfig):
        return data
    if not isinstance(data, dict):
        raise ConfigurationError(f"Shape configuration must be a mapping, found {type(data).__name__}")

    tag = data.get("type", DEFAULT_SHAPE_TYPE)
    if not isinstance(tag, str) or tag not in SHAPE_TYPES:
        raise ConfigurationError(
            f"Unknown shape type '{tag}', expected one of: {', '.join(SHAPE_TYPES)}"
        )
    try:
        return SHAPE_TYPES[tag].model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid '{tag}' shape configuration", e) from e

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
Geo Shape Mapper Implementation.

Maps a text column holding Well-Known Text geometries. Each value is parsed,
folded through the configured transformations and indexed with a composite
strategy: an S2 prefix tree in front of the serialized geometry. The tree
filters quickly at a bounded precision level and the stored geometry removes
its false positives. Pole wrapping is not supported.
"""

import logging
from typing import Any, List, Optional, Tuple

from shapeindex.exceptions import GeometryParseError, UnsupportedOperationError
from shapeindex.models.entries import IndexEntry
from shapeindex.models.protocols.kernel import Geometry, GeometryKernelProtocol
from shapeindex.modules.mapping.base import MapperProtocol
from shapeindex.modules.mapping.geo_shape_config import GeoShapeMapperConfig
from shapeindex.modules.shapes.algebra import transform
from shapeindex.modules.shapes.shape_config import ShapeConfig
from shapeindex.modules.strategies.base import SpatialOperation, SpatialStrategy
from shapeindex.modules.strategies.composite import CompositeSpatialStrategy, SpatialFilter
from shapeindex.modules.strategies.prefix_tree import S2PrefixTreeStrategy
from shapeindex.modules.strategies.serialized import SerializedGeometryStrategy
from shapeindex.tools.geospatial import default_kernel

logger = logging.getLogger(__name__)

TEXT_TYPES = frozenset({"ascii", "text", "varchar"})


class GeoShapeMapper(MapperProtocol):
    """
    Mapper for geographical shapes in WKT format.

    Args:
        config: The validated mapper configuration.
        kernel: Geometry kernel, Shapely when omitted.
        strategy: Spatial strategy, the S2/WKB composite built from `config` when omitted.
    """

    supported_types = TEXT_TYPES

    max_levels: int
    transformations: Tuple[ShapeConfig, ...]

    def __init__(
        self,
        config: GeoShapeMapperConfig,
        kernel: Optional[GeometryKernelProtocol] = None,
        strategy: Optional[SpatialStrategy] = None
    ):
        super().__init__(config)
        self.max_levels = S2PrefixTreeStrategy.validate_max_levels(config.max_levels)
        self.transformations = tuple(config.transformations)
        self.kernel = kernel if kernel is not None else default_kernel()

        if strategy is None:
            strategy = CompositeSpatialStrategy(
                self.field,
                S2PrefixTreeStrategy(self.field, self.max_levels),
                SerializedGeometryStrategy(self.field)
            )
        self.strategy = strategy

        logger.info(
            f"GeoShape mapper for field '{self.field}' on column '{self.column}': "
            f"max_levels={self.max_levels}, {len(self.transformations)} transformation(s)."
        )

    def base(self, value: Any) -> str:
        if isinstance(value, bytes):
            try:
                return value.decode("utf-8")
            except UnicodeDecodeError as e:
                raise GeometryParseError(value, e) from e
        return str(value)

    def validate(self, value: Any) -> None:
        """Parses the WKT of `value` when the mapper is validated, raising GeometryParseError."""
        if self.validated and value is not None:
            self.kernel.parse_wkt(self.base(value))

    def geometry(self, value: Any) -> Geometry:
        """Parses `value` and applies the transformations, returning the geometry to index."""
        geometry = self.kernel.parse_wkt(self.base(value))
        for transformation in self.transformations:
            geometry = transform(transformation, geometry, self.kernel)
        return geometry

    def indexable_fields(self, value: Any) -> List[IndexEntry]:
        if value is None:
            return []
        entries = self.strategy.create_entries(self.geometry(value))
        logger.debug(f"Field '{self.field}': {len(entries)} index entries.")
        return entries

    def query_filter(
        self,
        value: Any,
        operation: SpatialOperation = SpatialOperation.INTERSECTS
    ) -> SpatialFilter:
        """Builds the two-tier filter matching documents related to the WKT `value` by `operation`."""
        geometry = self.kernel.parse_wkt(self.base(value))
        return self.strategy.make_filter(geometry, operation)

    def sort_field(self, name: str, reverse: bool = False) -> Any:
        raise UnsupportedOperationError(f"GeoShape mapper '{name}' does not support simple sorting", field=name)

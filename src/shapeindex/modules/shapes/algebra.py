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
Evaluation of shape trees.

Evaluation is post-order: every operand is reduced to a concrete geometry
before the node's own operation runs, and n-ary nodes fold strictly left to
right, so `union(A, B, C)` is `union(union(A, B), C)`. No variant mutates its
operands; the only cost is the kernel's computation.
"""

import logging
from typing import Callable, Dict, List, Optional

from shapeindex.exceptions import ConfigurationError
from shapeindex.models.protocols.kernel import Geometry, GeometryKernelProtocol
from shapeindex.modules.shapes.shape_config import (
    BBoxShape,
    BufferShape,
    CentroidShape,
    ConvexHullShape,
    FoldShapeConfig,
    ShapeConfig,
    UnaryShapeConfig,
    WktShape,
)
from shapeindex.tools.geospatial import default_kernel

logger = logging.getLogger(__name__)

Evaluator = Callable[[ShapeConfig, GeometryKernelProtocol, Optional[Geometry]], Geometry]


def evaluate(
    shape: ShapeConfig,
    kernel: Optional[GeometryKernelProtocol] = None,
    source: Optional[Geometry] = None
) -> Geometry:
    """
    Evaluates a shape tree into a single geometry.

    Args:
        shape: The root of the tree.
        kernel: Geometry kernel, Shapely when omitted.
        source: Geometry standing in for omitted unary operands, anywhere in the tree.

    Raises:
        GeometryParseError: a WKT leaf is malformed.
        GeometryOperationError: the kernel rejects an operation.
        ConfigurationError: an operand is missing and there is no source geometry.
    """
    if kernel is None:
        kernel = default_kernel()
    evaluator = _EVALUATORS.get(shape.type)
    if evaluator is None:
        raise ConfigurationError(f"Unknown shape type '{shape.type}'")
    return evaluator(shape, kernel, source)


def transform(
    shape: ShapeConfig,
    geometry: Geometry,
    kernel: Optional[GeometryKernelProtocol] = None
) -> Geometry:
    """
    Applies one pipeline step to `geometry`.

    Unary steps use `geometry` as their omitted operand. N-ary steps fold
    `geometry` followed by their own operands, so a `difference` step removes
    its operands from the indexed shape. A `wkt` step replaces the geometry.
    """
    if kernel is None:
        kernel = default_kernel()
    logger.debug(f"Applying '{shape.type}' transformation")
    if isinstance(shape, FoldShapeConfig):
        operands = [evaluate(operand, kernel, geometry) for operand in shape.shapes]
        return _fold(shape.type, [geometry] + operands, kernel)
    return evaluate(shape, kernel, geometry)


def _operand(shape: UnaryShapeConfig, kernel: GeometryKernelProtocol, source: Optional[Geometry]) -> Geometry:
    if shape.shape is not None:
        return evaluate(shape.shape, kernel, source)
    if source is None:
        raise ConfigurationError(
            f"Shape '{shape.type}' has no operand and there is no input geometry to apply it to"
        )
    return source


def _evaluate_wkt(shape: WktShape, kernel, source) -> Geometry:
    return kernel.parse_wkt(shape.value)


def _evaluate_bbox(shape: BBoxShape, kernel, source) -> Geometry:
    return kernel.bounding_box(_operand(shape, kernel, source))


def _evaluate_buffer(shape: BufferShape, kernel, source) -> Geometry:
    geometry = _operand(shape, kernel, source)
    if shape.max_distance is None:
        outer = geometry
    else:
        outer = kernel.buffer(geometry, shape.max_distance.degrees)

    if shape.min_distance is None:
        return outer
    # min > max yields whatever the kernel's difference gives (usually empty)
    inner = kernel.buffer(geometry, shape.min_distance.degrees)
    return kernel.difference(outer, inner)


def _evaluate_centroid(shape: CentroidShape, kernel, source) -> Geometry:
    return kernel.centroid(_operand(shape, kernel, source))


def _evaluate_convex_hull(shape: ConvexHullShape, kernel, source) -> Geometry:
    return kernel.convex_hull(_operand(shape, kernel, source))


def _evaluate_fold(shape: FoldShapeConfig, kernel, source) -> Geometry:
    if not shape.shapes:
        raise ConfigurationError(f"Shape '{shape.type}' requires at least one operand")
    operands = [evaluate(operand, kernel, source) for operand in shape.shapes]
    return _fold(shape.type, operands, kernel)


# Binary kernel operation backing each n-ary variant
_FOLD_OPERATIONS: Dict[str, Callable[[GeometryKernelProtocol], Callable[[Geometry, Geometry], Geometry]]] = {
    "difference": lambda kernel: kernel.difference,
    "intersection": lambda kernel: kernel.intersection,
    "union": lambda kernel: kernel.union,
}


def _fold(tag: str, geometries: List[Geometry], kernel: GeometryKernelProtocol) -> Geometry:
    combine = _FOLD_OPERATIONS[tag](kernel)
    result = geometries[0]
    for geometry in geometries[1:]:
        result = combine(result, geometry)
    return result


_EVALUATORS: Dict[str, Evaluator] = {
    "wkt": _evaluate_wkt,
    "bbox": _evaluate_bbox,
    "buffer": _evaluate_buffer,
    "centroid": _evaluate_centroid,
    "convex_hull": _evaluate_convex_hull,
    "difference": _evaluate_fold,
    "intersection": _evaluate_fold,
    "union": _evaluate_fold,
}

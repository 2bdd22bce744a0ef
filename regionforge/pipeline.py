"""Region simplification pipeline.

Runs the seven stages in order, each consuming the previous stage's output:

    regions -> boundaries -> network -> simplified -> faces -> reduced
            -> matched -> valid

Every stage is timed and, unless disabled, its output is kept on the
result so it can be inspected or serialized afterwards. The lossy steps
(unclosed edges, collapsed faces, unowned faces) never raise; they are
counted on :class:`PipelineResult` instead.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from shapely.geometry.base import BaseGeometry

from .boundaries import extract_boundaries
from .core.errors import ConfigurationError
from .core.types import Stage
from .core.validation import check_regions
from .match import MAJORITY_THRESHOLD, assign_faces, check_threshold, group_faces
from .metrics import total_area, vertex_count
from .network import build_network, polygonize_network_full, simplify_network
from .orient import orient_regions
from .precision import reduce_precision

logger = logging.getLogger(__name__)


@dataclass
class SimplifyConfig:
    """Tunable parameters of a pipeline run.

    Attributes:
        tolerance: Simplification distance in source coordinate units
        precision: Grid scale factor for coordinate snapping (1000 snaps to 0.001)
        overlap_threshold: Face-to-region overlap ratio that must be exceeded
            for a region to own a face
        validate_input: Reject invalid input geometries up front instead of
            letting the geometry engine fail later
        keep_stages: Keep every intermediate stage output on the result
    """

    tolerance: float = 0.01
    precision: float = 1000.0
    overlap_threshold: float = MAJORITY_THRESHOLD
    validate_input: bool = False
    keep_stages: bool = True

    def validate(self) -> None:
        if not math.isfinite(self.tolerance) or self.tolerance < 0:
            raise ConfigurationError(f"tolerance must be >= 0, got {self.tolerance}")
        if not math.isfinite(self.precision) or self.precision <= 0:
            raise ConfigurationError(f"precision must be > 0, got {self.precision}")
        check_threshold(self.overlap_threshold)


@dataclass
class StageResult:
    """Outcome of running a single pipeline stage."""

    stage: Stage
    output: Any
    elapsed: float
    count: int


@dataclass
class PipelineResult:
    """Final regions of a run plus per-stage records and loss diagnostics."""

    regions: Dict[str, BaseGeometry]
    stages: List[StageResult] = field(default_factory=list)
    input_ids: List[str] = field(default_factory=list)
    face_count: int = 0
    collapsed_face_count: int = 0
    dropped_face_count: int = 0
    dropped_face_area: float = 0.0
    unclosed_edge_count: int = 0
    input_area: float = 0.0
    output_area: float = 0.0
    input_vertices: int = 0
    output_vertices: int = 0

    @property
    def missing_ids(self) -> List[str]:
        """Input ids that own no face in the output, in input order."""
        return [region_id for region_id in self.input_ids if region_id not in self.regions]

    @property
    def elapsed(self) -> float:
        return sum(stage.elapsed for stage in self.stages)

    def stage(self, stage: Stage) -> Optional[StageResult]:
        for result in self.stages:
            if result.stage == stage:
                return result
        return None

    def output(self, stage: Stage) -> Any:
        """Return the retained output of ``stage``, or None if not kept."""
        result = self.stage(stage)
        return None if result is None else result.output


def _count(value: Any) -> int:
    if isinstance(value, BaseGeometry):
        return len(getattr(value, "geoms", [value])) if not value.is_empty else 0
    return len(value)


def _run_stage(
    stage: Stage,
    func: Callable[[], Any],
    result: PipelineResult,
    keep: bool,
) -> Any:
    start = time.perf_counter()
    output = func()
    elapsed = time.perf_counter() - start
    count = _count(output)

    result.stages.append(StageResult(stage, output if keep else None, elapsed, count))
    logger.debug("%s: %d item(s) in %.3f seconds", stage.value, count, elapsed)
    return output


def run_pipeline(
    regions: Mapping[str, BaseGeometry],
    config: Optional[SimplifyConfig] = None,
) -> PipelineResult:
    """Simplify a set of adjacent regions while keeping shared boundaries shared.

    Args:
        regions: Mapping of unique string id to Polygon or MultiPolygon in a
            planar coordinate system. The mapping's iteration order is the
            candidate order used when matching faces back to ids.
        config: Run parameters (defaults to ``SimplifyConfig()``)

    Returns:
        PipelineResult whose ``regions`` maps ids to simplified, CCW-oriented
        geometries. Ids with no matching face are absent; see ``missing_ids``.

    Raises:
        ConfigurationError: If a parameter is out of range
        RegionTypeError: If an id is not a string or a geometry not polygonal
        ValidationError: If ``validate_input`` is set and a geometry is invalid
        shapely.errors.GEOSException: Propagated unchanged from the engine

    Examples:
        >>> a = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        >>> b = Polygon([(1, 0), (2, 0), (2, 1), (1, 1)])
        >>> result = run_pipeline({'A': a, 'B': b})
        >>> sorted(result.regions)
        ['A', 'B']
    """
    config = config or SimplifyConfig()
    config.validate()
    check_regions(regions, require_valid=config.validate_input)

    keep = config.keep_stages
    result = PipelineResult(regions={}, input_ids=list(regions.keys()))
    result.input_area = total_area(regions.values())
    result.input_vertices = vertex_count(regions.values())

    boundaries = _run_stage(
        Stage.BOUNDARIES, lambda: extract_boundaries(regions), result, keep)
    network = _run_stage(
        Stage.NETWORK, lambda: build_network(boundaries), result, keep)
    simplified = _run_stage(
        Stage.SIMPLIFIED, lambda: simplify_network(network, config.tolerance), result, keep)

    def polygonize():
        polygonized = polygonize_network_full(simplified)
        result.unclosed_edge_count = polygonized.dropped_edge_count
        return polygonized.faces

    faces = _run_stage(Stage.FACES, polygonize, result, keep)
    result.face_count = len(faces)

    reduced = _run_stage(
        Stage.REDUCED, lambda: reduce_precision(faces, config.precision), result, keep)
    result.collapsed_face_count = len(faces) - len(reduced)

    def match():
        owners = assign_faces(reduced, regions, config.overlap_threshold)
        dropped = [face for face, owner in zip(reduced, owners) if owner is None]
        result.dropped_face_count = len(dropped)
        result.dropped_face_area = total_area(dropped)
        return group_faces(reduced, owners)

    matched = _run_stage(Stage.MATCHED, match, result, keep)

    valid = _run_stage(Stage.VALID, lambda: orient_regions(matched), result, keep)
    result.regions = valid
    result.output_area = total_area(valid.values())
    result.output_vertices = vertex_count(valid.values())

    logger.info(
        "Simplified %d region(s) into %d (%d face(s), %d dropped, %d collapsed, "
        "%d unclosed edge(s)); vertices %d -> %d in %.3f seconds",
        len(result.input_ids),
        len(valid),
        result.face_count,
        result.dropped_face_count,
        result.collapsed_face_count,
        result.unclosed_edge_count,
        result.input_vertices,
        result.output_vertices,
        result.elapsed,
    )
    if result.missing_ids:
        logger.info("Regions without a matching face: %s", ", ".join(result.missing_ids))

    return result


def simplify_regions(
    regions: Mapping[str, BaseGeometry],
    tolerance: float = 0.01,
    precision: float = 1000.0,
) -> Dict[str, BaseGeometry]:
    """Simplify regions and return only the final id to geometry mapping.

    Args:
        regions: Mapping of unique string id to Polygon or MultiPolygon
        tolerance: Simplification distance in source coordinate units
        precision: Grid scale factor for coordinate snapping

    Returns:
        Mapping of id to simplified Polygon or MultiPolygon

    Examples:
        >>> simplified = simplify_regions(districts, tolerance=0.01, precision=1000)
    """
    config = SimplifyConfig(tolerance=tolerance, precision=precision, keep_stages=False)
    return run_pipeline(regions, config).regions


__all__ = [
    "SimplifyConfig",
    "StageResult",
    "PipelineResult",
    "run_pipeline",
    "simplify_regions",
]

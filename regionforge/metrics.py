"""Shared measurement helpers for region collections.

The pipeline reports a handful of scalar figures so callers can see how
much detail and area each run gave up. Keeping them here keeps the stage
modules free of ad-hoc area and vertex counting.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np
import shapely
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union


def _non_empty(geometries: Iterable[BaseGeometry]) -> list:
    return [geom for geom in geometries if geom is not None and not geom.is_empty]


def total_area(geometries: Iterable[BaseGeometry]) -> float:
    """Sum of the areas of ``geometries``."""
    geometries = _non_empty(geometries)
    if not geometries:
        return 0.0
    return float(np.sum(shapely.area(geometries)))


def vertex_count(geometries: Iterable[BaseGeometry]) -> int:
    """Total number of coordinates across ``geometries``."""
    geometries = _non_empty(geometries)
    if not geometries:
        return 0
    return int(np.sum(shapely.get_num_coordinates(geometries)))


def total_overlap_area(geometries: Iterable[BaseGeometry]) -> float:
    """Compute the total overlapping area within ``geometries``."""
    geometries = _non_empty(geometries)
    if len(geometries) < 2:
        return 0.0
    union = unary_union(geometries)
    combined_area = sum(getattr(geom, "area", 0.0) for geom in geometries)
    return combined_area - getattr(union, "area", 0.0)


__all__ = [
    "total_area",
    "vertex_count",
    "total_overlap_area",
]

"""Coordinate precision reduction.

Snaps geometry coordinates onto a regular grid to remove the floating-point
jitter left behind by union, simplification and polygonization.
"""

import math
from typing import List, Sequence

import shapely
from shapely.geometry.base import BaseGeometry

from .core.errors import ConfigurationError


def snap_to_grid(geometry: BaseGeometry, precision: float) -> BaseGeometry:
    """Snap all coordinates of a geometry to a grid of ``1 / precision``.

    Each coordinate becomes ``round(c * precision) / precision``. GEOS keeps
    the output valid, so a polygon thinner than one grid cell collapses to
    an empty geometry.

    Args:
        geometry: Geometry to snap
        precision: Grid scale factor, e.g. 1000 for a 0.001 unit grid

    Returns:
        Snapped geometry

    Examples:
        >>> poly = Polygon([(0, 0), (1.00049, 0), (1.00049, 1), (0, 1)])
        >>> snap_to_grid(poly, 1000).bounds
        (0.0, 0.0, 1.0, 1.0)
    """
    if not math.isfinite(precision) or precision <= 0:
        raise ConfigurationError(f"precision must be a positive number, got {precision}")
    return shapely.set_precision(geometry, grid_size=1.0 / precision)


def reduce_precision(
    faces: Sequence[BaseGeometry],
    precision: float
) -> List[BaseGeometry]:
    """Snap every face to the precision grid, removing collapsed faces.

    Args:
        faces: Faces from polygonization
        precision: Grid scale factor

    Returns:
        Snapped faces in input order. Faces that collapse to empty are left
        out, so the result may be shorter than the input.
    """
    reduced = [snap_to_grid(face, precision) for face in faces]
    return [face for face in reduced if not face.is_empty]


__all__ = [
    'snap_to_grid',
    'reduce_precision',
]

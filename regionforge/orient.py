"""Ring orientation normalization.

Output polygons follow the right-hand rule: exterior rings wind
counter-clockwise, interior rings clockwise. Polygons that already comply
are returned unchanged, which makes normalization idempotent.
"""

from typing import Dict, Mapping

from shapely.geometry import LinearRing, Polygon, MultiPolygon
from shapely.geometry.base import BaseGeometry


def _reversed_ring(ring: LinearRing) -> LinearRing:
    return LinearRing(list(ring.coords)[::-1])


def _polygon_is_normalized(polygon: Polygon) -> bool:
    if polygon.is_empty:
        return True
    if not polygon.exterior.is_ccw:
        return False
    return all(not interior.is_ccw for interior in polygon.interiors)


def orient_polygon(polygon: Polygon) -> Polygon:
    """Return ``polygon`` with a CCW exterior ring and CW interior rings.

    A polygon that already satisfies this is returned as the same object.
    Otherwise each offending ring is replaced by its reversal.

    Args:
        polygon: Polygon to normalize

    Returns:
        Normalized Polygon

    Examples:
        >>> cw = Polygon([(0, 0), (0, 1), (1, 1), (1, 0)])
        >>> orient_polygon(cw).exterior.is_ccw
        True
    """
    if _polygon_is_normalized(polygon):
        return polygon

    exterior = polygon.exterior
    if not exterior.is_ccw:
        exterior = _reversed_ring(exterior)

    holes = [
        _reversed_ring(interior) if interior.is_ccw else interior
        for interior in polygon.interiors
    ]
    return Polygon(exterior, holes=holes)


def orient_geometry(geometry: BaseGeometry) -> BaseGeometry:
    """Normalize ring orientation of a Polygon or MultiPolygon.

    MultiPolygon components are normalized one by one and reassembled in
    their original order; they are never merged or reordered.

    Args:
        geometry: Polygon or MultiPolygon

    Returns:
        Geometry of the same type with normalized rings

    Raises:
        TypeError: If geometry is neither a Polygon nor a MultiPolygon
    """
    if isinstance(geometry, Polygon):
        return orient_polygon(geometry)

    elif isinstance(geometry, MultiPolygon):
        if all(_polygon_is_normalized(polygon) for polygon in geometry.geoms):
            return geometry
        return MultiPolygon([orient_polygon(polygon) for polygon in geometry.geoms])

    else:
        raise TypeError("Input geometry must be a Polygon or MultiPolygon.")


def is_normalized(geometry: BaseGeometry) -> bool:
    """Check whether every polygon in ``geometry`` follows the right-hand rule."""
    if isinstance(geometry, Polygon):
        return _polygon_is_normalized(geometry)
    elif isinstance(geometry, MultiPolygon):
        return all(_polygon_is_normalized(polygon) for polygon in geometry.geoms)
    return False


def orient_regions(matched: Mapping[str, BaseGeometry]) -> Dict[str, BaseGeometry]:
    """Normalize ring orientation of every matched region.

    Args:
        matched: Mapping of region id to Polygon or MultiPolygon

    Returns:
        New mapping with the same keys, in the same order
    """
    return {region_id: orient_geometry(geometry) for region_id, geometry in matched.items()}


__all__ = [
    'orient_polygon',
    'orient_geometry',
    'orient_regions',
    'is_normalized',
]

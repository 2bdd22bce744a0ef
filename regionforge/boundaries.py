"""Boundary extraction for region polygons.

Each region contributes the linework of its outer ring(s). The region id is
deliberately not carried along: the boundaries of two neighbours must become
plain, coincident lines so that the network builder can merge their shared
edges into one.

Interior rings (holes) of source regions are ignored and never appear as
boundaries.
"""

from typing import List, Mapping

from shapely.geometry import LineString, MultiLineString, Polygon, MultiPolygon
from shapely.geometry.base import BaseGeometry


def extract_boundary(geometry: BaseGeometry) -> BaseGeometry:
    """Return the outer-ring linework of a Polygon or MultiPolygon.

    Args:
        geometry: Region geometry

    Returns:
        LineString for a Polygon, MultiLineString for a MultiPolygon, or an
        empty LineString when the geometry has no boundary

    Examples:
        >>> square = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)], holes=[[(0.2, 0.2), (0.4, 0.2), (0.4, 0.4)]])
        >>> extract_boundary(square).wkt
        'LINESTRING (0 0, 1 0, 1 1, 0 1, 0 0)'
    """
    if geometry.is_empty:
        return LineString()

    if isinstance(geometry, Polygon):
        return LineString(geometry.exterior.coords)

    elif isinstance(geometry, MultiPolygon):
        rings = [
            polygon.exterior.coords
            for polygon in geometry.geoms
            if not polygon.is_empty
        ]
        return MultiLineString(rings)

    else:
        raise TypeError("Input geometry must be a Polygon or MultiPolygon.")


def extract_boundaries(regions: Mapping[str, BaseGeometry]) -> List[BaseGeometry]:
    """Extract one boundary per region, discarding region ids.

    Args:
        regions: Mapping of region id to Polygon or MultiPolygon

    Returns:
        List of boundary geometries in the mapping's iteration order. A
        degenerate region still contributes an (empty) entry.
    """
    return [extract_boundary(geometry) for geometry in regions.values()]


__all__ = [
    'extract_boundary',
    'extract_boundaries',
]

"""Shared boundary network construction, simplification and polygonization.

These functions are thin wrappers over GEOS (through Shapely). Together they
turn a bag of region boundaries into a single noded line network, simplify
that network without changing its topology, and rebuild closed faces from
the simplified edges.
"""

from typing import List, NamedTuple, Sequence

import shapely
from shapely.geometry import GeometryCollection, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union


class PolygonizeResult(NamedTuple):
    """Faces rebuilt from a line network plus the edges that formed none.

    Attributes:
        faces: Closed polygons, in the order GEOS returns them
        cut_edges: Edges with a face on both sides of the same edge
        dangles: Edges with at least one free endpoint
        invalid_rings: Closed rings that do not form a valid polygon
    """
    faces: List[Polygon]
    cut_edges: List[BaseGeometry]
    dangles: List[BaseGeometry]
    invalid_rings: List[BaseGeometry]

    @property
    def dropped_edge_count(self) -> int:
        return len(self.cut_edges) + len(self.dangles) + len(self.invalid_rings)


def build_network(boundaries: Sequence[BaseGeometry]) -> BaseGeometry:
    """Union all boundaries into one noded network and merge edge chains.

    The union nodes every intersection and collapses segments shared by
    neighbouring regions into a single edge. Runs of degree-2 vertices are
    then merged so each edge spans from one junction (or free endpoint) to
    the next.

    Args:
        boundaries: Boundary line geometries (LineString / MultiLineString)

    Returns:
        LineString or MultiLineString network. An empty GeometryCollection is
        returned when there is no linework at all.

    Examples:
        >>> a = LineString([(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)])
        >>> b = LineString([(1, 0), (2, 0), (2, 1), (1, 1), (1, 0)])
        >>> network = build_network([a, b])
        >>> len(network.geoms)  # shared edge plus one chain per square
        3
    """
    lines = [geometry for geometry in boundaries if not geometry.is_empty]
    if not lines:
        return GeometryCollection()

    noded = unary_union(lines)
    return shapely.line_merge(noded)


def simplify_network(network: BaseGeometry, tolerance: float) -> BaseGeometry:
    """Simplify every network edge without altering topology.

    Uses the GEOS topology-preserving simplifier on the whole network at
    once, so a simplified edge can neither cross itself nor any other edge.
    Edge endpoints (junctions) never move.

    Args:
        network: Line network from build_network
        tolerance: Maximum vertex displacement, in coordinate units

    Returns:
        Simplified network of the same geometry type
    """
    if network.is_empty or tolerance == 0:
        return network
    return shapely.simplify(network, tolerance, preserve_topology=True)


def polygonize_network_full(network: BaseGeometry) -> PolygonizeResult:
    """Rebuild all faces bounded by the network edges.

    The network is treated as already noded. Edges that do not close a
    cycle produce no face; they are returned separately instead of raising.

    Args:
        network: Noded line network

    Returns:
        PolygonizeResult with faces and leftover edges
    """
    if network.is_empty:
        return PolygonizeResult([], [], [], [])

    edges = shapely.get_parts(network)
    faces, cuts, dangles, invalids = shapely.polygonize_full(edges)

    return PolygonizeResult(
        faces=list(faces.geoms),
        cut_edges=list(cuts.geoms),
        dangles=list(dangles.geoms),
        invalid_rings=list(invalids.geoms),
    )


def polygonize_network(network: BaseGeometry) -> List[Polygon]:
    """Rebuild the faces bounded by the network, dropping unclosed edges."""
    return polygonize_network_full(network).faces


__all__ = [
    'PolygonizeResult',
    'build_network',
    'simplify_network',
    'polygonize_network',
    'polygonize_network_full',
]

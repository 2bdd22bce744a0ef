"""Reassignment of simplified faces to their original region ids.

Faces rebuilt from the simplified network carry no identity. Each face is
given to the first region, in the region mapping's iteration order, that
covers more than half of the face's area. Faces with no such region are
dropped without error.

Matching is first-qualifying, not best-overlap. With a threshold of at least
one half two disjoint regions can never both qualify, but the scan order is
still part of the contract: a face is always tested against candidates in
the same fixed order.
"""

from typing import Dict, List, Mapping, Optional, Sequence

from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union
from shapely.strtree import STRtree

from .core.errors import ConfigurationError


MAJORITY_THRESHOLD = 0.5


def check_threshold(threshold: float) -> None:
    """Raise ConfigurationError unless threshold is in [0.5, 1.0)."""
    if not MAJORITY_THRESHOLD <= threshold < 1.0:
        raise ConfigurationError(
            f"overlap threshold must be in [{MAJORITY_THRESHOLD}, 1.0), got {threshold}"
        )


def overlap_ratio(region: BaseGeometry, face: BaseGeometry) -> float:
    """Fraction of ``face``'s area covered by ``region``.

    Returns 0.0 for a face without area or a region that does not touch it.
    """
    face_area = face.area
    if face_area <= 0 or not region.intersects(face):
        return 0.0
    return _covered_fraction(region, face, face_area)


def _covered_fraction(region: BaseGeometry, face: BaseGeometry, face_area: float) -> float:
    return region.intersection(face).area / face_area


def assign_faces(
    faces: Sequence[BaseGeometry],
    regions: Mapping[str, BaseGeometry],
    threshold: float = MAJORITY_THRESHOLD
) -> List[Optional[str]]:
    """Find the owning region id of every face.

    For each face, candidate regions are scanned in the mapping's iteration
    order and the first one with ``overlap_ratio > threshold`` wins. An
    STRtree query narrows the candidates to regions that intersect the face;
    the surviving candidates are visited in their original mapping order.

    Args:
        faces: Faces without identity, in processing order
        regions: Original mapping of region id to geometry
        threshold: Minimum overlap ratio (exclusive) for ownership

    Returns:
        List parallel to ``faces`` holding the owner id, or None for a face
        no region qualifies for

    Examples:
        >>> a = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        >>> b = Polygon([(1, 0), (2, 0), (2, 1), (1, 1)])
        >>> face = Polygon([(0.4, 0), (1.4, 0), (1.4, 1), (0.4, 1)])
        >>> assign_faces([face], {'A': a, 'B': b})
        ['A']
    """
    check_threshold(threshold)

    if not faces:
        return []

    region_ids = list(regions.keys())
    region_geometries = list(regions.values())
    if not region_ids:
        return [None] * len(faces)

    tree = STRtree(region_geometries)
    owners: List[Optional[str]] = []

    for face in faces:
        owner = None
        face_area = face.area

        if face_area > 0:
            # query() returns indices in tree order; sort to restore mapping order
            candidate_indices = sorted(tree.query(face, predicate='intersects'))

            for index in candidate_indices:
                if _covered_fraction(region_geometries[index], face, face_area) > threshold:
                    owner = region_ids[index]
                    break

        owners.append(owner)

    return owners


def group_faces(
    faces: Sequence[BaseGeometry],
    owners: Sequence[Optional[str]]
) -> Dict[str, BaseGeometry]:
    """Combine faces sharing an owner into one geometry per id.

    Faces are unioned in face order. A single face is returned as-is, so an
    id matched once keeps its Polygon unchanged; several faces become their
    union (Polygon or MultiPolygon). Faces without an owner are skipped.
    """
    grouped: Dict[str, List[BaseGeometry]] = {}
    for face, owner in zip(faces, owners):
        if owner is None:
            continue
        grouped.setdefault(owner, []).append(face)

    matched: Dict[str, BaseGeometry] = {}
    for region_id, parts in grouped.items():
        if len(parts) == 1:
            matched[region_id] = parts[0]
        else:
            matched[region_id] = unary_union(parts)
    return matched


def match_regions(
    faces: Sequence[BaseGeometry],
    regions: Mapping[str, BaseGeometry],
    threshold: float = MAJORITY_THRESHOLD
) -> Dict[str, BaseGeometry]:
    """Reassign faces to region ids by majority area overlap.

    Args:
        faces: Faces without identity, in processing order
        regions: Original mapping of region id to geometry (not modified)
        threshold: Minimum overlap ratio (exclusive) for ownership

    Returns:
        Sparse mapping of region id to matched geometry. Regions that own no
        face are absent; faces owned by no region are lost.

    Examples:
        >>> matched = match_regions(faces, regions)
        >>> set(matched) <= set(regions)
        True
    """
    owners = assign_faces(faces, regions, threshold)
    return group_faces(faces, owners)


__all__ = [
    'MAJORITY_THRESHOLD',
    'check_threshold',
    'overlap_ratio',
    'assign_faces',
    'group_faces',
    'match_regions',
]

"""Input checks for region mappings.

These run before any geometry work so that a bad region is reported by id
instead of surfacing later as an anonymous engine failure.
"""

from typing import Mapping

from shapely.geometry import Polygon, MultiPolygon
from shapely.geometry.base import BaseGeometry
from shapely.validation import explain_validity

from .errors import RegionTypeError, ValidationError


def check_regions(
    regions: Mapping[str, BaseGeometry],
    require_valid: bool = False
) -> None:
    """Check that every region has a string id and a polygonal geometry.

    Args:
        regions: Mapping of region id to Polygon or MultiPolygon
        require_valid: If True, also require each geometry to be valid
            according to GEOS

    Raises:
        RegionTypeError: If an id is not a string or a geometry is not a
            Polygon or MultiPolygon
        ValidationError: If require_valid is True and a geometry is invalid

    Examples:
        >>> square = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        >>> check_regions({'A': square})
        >>> bowtie = Polygon([(0, 0), (1, 1), (1, 0), (0, 1)])
        >>> check_regions({"B": bowtie}, require_valid=True)  # raises ValidationError
    """
    for region_id, geometry in regions.items():
        if not isinstance(region_id, str):
            raise RegionTypeError(
                f"Region ids must be strings, got {type(region_id).__name__}",
                region_id=region_id,
            )
        if not isinstance(geometry, (Polygon, MultiPolygon)):
            raise RegionTypeError(
                f"Region {region_id!r} must be a Polygon or MultiPolygon, "
                f"got {type(geometry).__name__}",
                region_id=region_id,
            )
        if require_valid and not geometry.is_valid:
            raise ValidationError(region_id, explain_validity(geometry))


__all__ = [
    'check_regions',
]

"""Tests for region input checks."""

import pytest
from shapely.geometry import MultiPolygon, Point, Polygon, box

from regionforge.core import RegionTypeError, ValidationError
from regionforge.core.validation import check_regions


class TestCheckRegions:
    """Tests for check_regions function."""

    def test_accepts_polygons(self):
        """Test that polygonal regions pass."""
        check_regions({
            'A': box(0, 0, 1, 1),
            'B': MultiPolygon([box(2, 0, 3, 1), box(4, 0, 5, 1)]),
        })

    def test_rejects_point(self):
        with pytest.raises(RegionTypeError) as excinfo:
            check_regions({'P': Point(0, 0)})
        assert excinfo.value.region_id == 'P'
        assert isinstance(excinfo.value, TypeError)

    def test_rejects_non_string_id(self):
        with pytest.raises(RegionTypeError):
            check_regions({('a', 1): box(0, 0, 1, 1)})

    def test_invalid_geometry_ignored_by_default(self):
        """Test that validity is only checked when requested."""
        bowtie = Polygon([(0, 0), (1, 1), (1, 0), (0, 1)])
        check_regions({'X': bowtie})

    def test_invalid_geometry_rejected(self):
        bowtie = Polygon([(0, 0), (1, 1), (1, 0), (0, 1)])
        with pytest.raises(ValidationError) as excinfo:
            check_regions({'X': bowtie}, require_valid=True)

        assert excinfo.value.region_id == 'X'
        assert "Self-intersection" in excinfo.value.reason

"""End-to-end tests for the region simplification pipeline."""

import logging

import numpy as np
import pytest
import shapely
from shapely.geometry import MultiPolygon, Polygon, box

from regionforge import (
    ConfigurationError,
    RegionTypeError,
    SimplifyConfig,
    Stage,
    ValidationError,
    run_pipeline,
    simplify_regions,
)
from regionforge import pipeline as pipeline_module
from regionforge.metrics import total_overlap_area


def _wavy_regions(points=200, amplitude=0.05):
    """Bottom and top regions sharing a sine wave, plus a right-hand block."""
    x = np.linspace(0, 2, points)
    wave = list(zip(x, 1 + amplitude * np.sin(8 * x)))
    return {
        'bottom': Polygon([(0, 0), (2, 0)] + wave[::-1]),
        'top': Polygon(wave + [(2, 2), (0, 2)]),
        'right': box(2, 0, 3, 2),
    }


def _polygons(geometry):
    return list(shapely.get_parts(geometry))


class TestTwoSquares:
    """Two unit squares sharing the edge x = 1."""

    @pytest.fixture
    def result(self):
        regions = {'A': box(0, 0, 1, 1), 'B': box(1, 0, 2, 1)}
        return run_pipeline(regions, SimplifyConfig(tolerance=0.001))

    def test_ids(self, result):
        assert sorted(result.regions) == ['A', 'B']
        assert result.missing_ids == []

    def test_shapes(self, result):
        assert result.regions['A'].equals(box(0, 0, 1, 1))
        assert result.regions['B'].equals(box(1, 0, 2, 1))

    def test_shared_boundary(self, result):
        shared = result.regions['A'].intersection(result.regions['B'])
        assert shared.length == pytest.approx(1.0)
        assert shared.area == 0.0

    def test_area_and_orientation(self, result):
        total = sum(geom.area for geom in result.regions.values())
        assert total == pytest.approx(2.0, abs=1e-9)
        assert all(geom.exterior.is_ccw for geom in result.regions.values())

    def test_diagnostics(self, result):
        assert result.face_count == 2
        assert result.dropped_face_count == 0
        assert result.collapsed_face_count == 0
        assert result.unclosed_edge_count == 0


class TestPipelineProperties:
    """Partition, identifier and orientation properties on a dense input."""

    @pytest.fixture
    def regions(self):
        return _wavy_regions()

    @pytest.fixture
    def result(self, regions):
        return run_pipeline(regions, SimplifyConfig(tolerance=0.01, precision=1000))

    def test_partition(self, result):
        """Test that output regions do not overlap."""
        assert total_overlap_area(result.regions.values()) == pytest.approx(0.0, abs=1e-6)

    def test_identifier_subset(self, result, regions):
        assert set(result.regions) <= set(regions)
        assert set(result.regions) == set(regions)

    def test_orientation(self, result):
        for geometry in result.regions.values():
            for polygon in _polygons(geometry):
                assert polygon.exterior.is_ccw

    def test_fewer_vertices(self, result):
        assert result.output_vertices < result.input_vertices

    def test_area_preserved(self, result):
        assert result.output_area == pytest.approx(result.input_area, abs=1e-2)

    def test_regions_follow_originals(self, result, regions):
        for region_id, geometry in result.regions.items():
            overlap = geometry.intersection(regions[region_id]).area
            assert overlap / geometry.area > 0.9

    def test_clockwise_input(self):
        """Test that CW input rings still come out CCW."""
        regions = {
            'A': Polygon([(0, 0), (0, 1), (1, 1), (1, 0)]),
            'B': Polygon([(1, 0), (1, 1), (2, 1), (2, 0)]),
        }
        result = run_pipeline(regions)
        assert all(geom.exterior.is_ccw for geom in result.regions.values())


class TestLossyOutcomes:
    """Faces and regions that silently disappear."""

    def test_face_outside_all_regions_is_dropped(self):
        """Test that a courtyard enclosed by four regions is not assigned."""
        regions = {
            'south': box(0, 0, 3, 1),
            'north': box(0, 2, 3, 3),
            'west': box(0, 1, 1, 2),
            'east': box(2, 1, 3, 2),
        }
        result = run_pipeline(regions)

        assert set(result.regions) == set(regions)
        assert result.face_count == 5
        assert result.dropped_face_count == 1
        assert result.dropped_face_area == pytest.approx(1.0)
        assert sum(geom.area for geom in result.regions.values()) == pytest.approx(8.0)

    def test_duplicate_region_goes_missing(self):
        """Test that a region owning no face is absent without error."""
        regions = {'first': box(0, 0, 1, 1), 'copy': box(0, 0, 1, 1)}
        result = run_pipeline(regions)

        assert list(result.regions) == ['first']
        assert result.missing_ids == ['copy']

    def test_split_region_is_merged(self):
        """Test that several faces of one region are merged under its id."""
        regions = {
            'C': MultiPolygon([box(0, 0, 1, 1), box(1, 1, 2, 2)]),
            'D': box(5, 0, 6, 1),
        }
        result = run_pipeline(regions)

        assert result.face_count == 3
        assert isinstance(result.regions['C'], MultiPolygon)
        assert result.regions['C'].area == pytest.approx(2.0)
        assert all(part.exterior.is_ccw for part in result.regions['C'].geoms)

    def test_empty_input(self):
        result = run_pipeline({})
        assert result.regions == {}
        assert result.face_count == 0


class TestStages:
    """Stage bookkeeping on the result."""

    def test_stage_order(self):
        result = run_pipeline({'A': box(0, 0, 1, 1)})
        assert [stage.stage for stage in result.stages] == list(Stage)
        assert all(stage.elapsed >= 0 for stage in result.stages)

    def test_stage_outputs_kept(self):
        result = run_pipeline({'A': box(0, 0, 1, 1), 'B': box(1, 0, 2, 1)})

        assert len(result.output(Stage.BOUNDARIES)) == 2
        assert len(result.output(Stage.FACES)) == 2
        assert result.stage(Stage.NETWORK).count == 3
        assert result.output(Stage.VALID) is result.regions

    def test_stage_outputs_dropped(self):
        config = SimplifyConfig(keep_stages=False)
        result = run_pipeline({'A': box(0, 0, 1, 1)}, config)

        assert all(stage.output is None for stage in result.stages)
        assert result.stage(Stage.FACES).count == 1
        assert list(result.regions) == ['A']

    def test_logging(self, caplog):
        caplog.set_level(logging.INFO, logger="regionforge.pipeline")
        run_pipeline({'A': box(0, 0, 1, 1), 'copy': box(0, 0, 1, 1)})

        assert "Simplified 2 region(s) into 1" in caplog.text
        assert "copy" in caplog.text


class TestConfiguration:
    """Config validation and input checks."""

    @pytest.mark.parametrize("kwargs", [
        {'tolerance': -1.0},
        {'tolerance': float('nan')},
        {'precision': 0},
        {'precision': float('inf')},
        {'overlap_threshold': 0.3},
        {'overlap_threshold': 1.0},
    ])
    def test_invalid_config(self, kwargs):
        with pytest.raises(ConfigurationError):
            run_pipeline({'A': box(0, 0, 1, 1)}, SimplifyConfig(**kwargs))

    def test_threshold_checked_by_matcher(self, monkeypatch):
        """Test that config validation defers to the matcher's threshold check."""
        calls = []
        monkeypatch.setattr(pipeline_module, "check_threshold", calls.append)

        SimplifyConfig(overlap_threshold=0.7).validate()
        assert calls == [0.7]

    def test_threshold_error_message(self):
        with pytest.raises(ConfigurationError, match="overlap threshold must be in"):
            SimplifyConfig(overlap_threshold=0.3).validate()

    def test_defaults(self):
        config = SimplifyConfig()
        assert config.tolerance == 0.01
        assert config.precision == 1000.0
        assert config.overlap_threshold == 0.5

    def test_non_polygon_region(self):
        with pytest.raises(RegionTypeError) as excinfo:
            run_pipeline({'A': box(0, 0, 1, 1).exterior})
        assert excinfo.value.region_id == 'A'

    def test_non_string_id(self):
        with pytest.raises(RegionTypeError):
            run_pipeline({1: box(0, 0, 1, 1)})

    def test_invalid_geometry_rejected(self):
        bowtie = Polygon([(0, 0), (1, 1), (1, 0), (0, 1)])
        with pytest.raises(ValidationError) as excinfo:
            run_pipeline({'X': bowtie}, SimplifyConfig(validate_input=True))
        assert excinfo.value.region_id == 'X'


class TestSimplifyRegions:
    """Tests for the simplify_regions convenience wrapper."""

    def test_returns_mapping(self):
        regions = _wavy_regions()
        simplified = simplify_regions(regions, tolerance=0.05, precision=100)

        assert set(simplified) == set(regions)
        coords = np.concatenate([shapely.get_coordinates(g) for g in simplified.values()])
        assert np.allclose(coords * 100, np.round(coords * 100))

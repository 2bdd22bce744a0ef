"""Regionforge - Topology-preserving simplification of adjacent regions.

This library simplifies a set of identifier-labelled polygons that share
boundaries (districts, parcels, zones) so that neighbours stay gap- and
overlap-free, using Shapely.
"""


# Pipeline
from .pipeline import (
    SimplifyConfig,
    StageResult,
    PipelineResult,
    run_pipeline,
    simplify_regions,
)

# Stage functions
from .boundaries import extract_boundary, extract_boundaries
from .network import (
    PolygonizeResult,
    build_network,
    simplify_network,
    polygonize_network,
    polygonize_network_full,
)
from .precision import snap_to_grid, reduce_precision
from .match import MAJORITY_THRESHOLD, overlap_ratio, assign_faces, match_regions
from .orient import orient_polygon, orient_geometry, orient_regions, is_normalized

# Diagnostics and output
from .metrics import total_area, vertex_count, total_overlap_area
from .export import to_feature_collection, stage_feature_collections

# Core types (enums)
from .core import Stage

# Core exceptions
from .core import (
    RegionforgeError,
    ConfigurationError,
    RegionTypeError,
    ValidationError,
)

__all__ = [

    # Pipeline
    'SimplifyConfig',
    'StageResult',
    'PipelineResult',
    'run_pipeline',
    'simplify_regions',

    # Stages
    'extract_boundary',
    'extract_boundaries',
    'PolygonizeResult',
    'build_network',
    'simplify_network',
    'polygonize_network',
    'polygonize_network_full',
    'snap_to_grid',
    'reduce_precision',
    'MAJORITY_THRESHOLD',
    'overlap_ratio',
    'assign_faces',
    'match_regions',
    'orient_polygon',
    'orient_geometry',
    'orient_regions',
    'is_normalized',

    # Diagnostics and output
    'total_area',
    'vertex_count',
    'total_overlap_area',
    'to_feature_collection',
    'stage_feature_collections',

    # Core types (enums)
    'Stage',

    # Core exceptions
    'RegionforgeError',
    'ConfigurationError',
    'RegionTypeError',
    'ValidationError',
]

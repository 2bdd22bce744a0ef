"""Type definitions for regionforge operations.

This module defines the enums used to name pipeline stages throughout the
library.
"""

from enum import Enum


class Stage(Enum):
    """Stage of the simplification pipeline, in execution order.

    Attributes:
        BOUNDARIES: Outer-ring linework extracted from each region
        NETWORK: Noded, chain-merged union of all boundaries
        SIMPLIFIED: Network after topology-preserving simplification
        FACES: Polygons rebuilt from the simplified network
        REDUCED: Faces snapped to the precision grid
        MATCHED: Faces reassigned to region identifiers
        VALID: Matched regions with normalized ring orientation

    Examples:
        >>> from regionforge import run_pipeline, Stage
        >>> result = run_pipeline(regions)
        >>> faces = result.output(Stage.FACES)
    """
    BOUNDARIES = 'boundaries'
    NETWORK = 'network'
    SIMPLIFIED = 'simplified'
    FACES = 'faces'
    REDUCED = 'reduced'
    MATCHED = 'matched'
    VALID = 'valid'


__all__ = [
    'Stage',
]

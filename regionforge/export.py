"""Conversion of stage outputs into GeoJSON-like feature collections.

Nothing here touches the filesystem; callers decide where (and whether) to
write the returned dictionaries, e.g. with ``json.dump``.
"""

from typing import Any, Dict, Mapping, Optional

from shapely.geometry import mapping
from shapely.geometry.base import BaseGeometry

from .pipeline import PipelineResult


def _keyed(collection: Any) -> Mapping[str, BaseGeometry]:
    if isinstance(collection, BaseGeometry):
        return {"0": collection}
    if isinstance(collection, Mapping):
        return collection
    return {str(index): geometry for index, geometry in enumerate(collection)}


def to_feature_collection(
    collection: Any,
    id_field: str = "id"
) -> Dict[str, Any]:
    """Build a GeoJSON-like FeatureCollection from geometries.

    Args:
        collection: A single geometry, a sequence of geometries, or a mapping
            of id to geometry. Unkeyed geometries are numbered "0", "1", ...
        id_field: Name of the property holding the key

    Returns:
        Dictionary with ``type`` "FeatureCollection" and one feature per
        geometry, in iteration order

    Examples:
        >>> square = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        >>> fc = to_feature_collection({'A': square})
        >>> fc['features'][0]['properties']
        {'id': 'A'}
    """
    features = [
        {
            "type": "Feature",
            "geometry": mapping(geometry),
            "properties": {id_field: key},
        }
        for key, geometry in _keyed(collection).items()
    ]
    return {"type": "FeatureCollection", "features": features}


def stage_feature_collections(
    result: PipelineResult,
    id_field: str = "id"
) -> Dict[str, Optional[Dict[str, Any]]]:
    """Convert every stage output of a pipeline run into a FeatureCollection.

    Keys are the stage names in execution order. Stages whose output was not
    kept map to None.
    """
    return {
        stage.stage.value: (
            None if stage.output is None
            else to_feature_collection(stage.output, id_field=id_field)
        )
        for stage in result.stages
    }


__all__ = [
    'to_feature_collection',
    'stage_feature_collections',
]

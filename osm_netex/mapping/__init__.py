"""
OSM to NeTEx mapping engine

- Geometry: Way node lists to GML polygons
- Tags: Rule-table tag interpretation per target entity
- Validation: Aggregated required tag errors
- Zones: Ways to zones
- Groups: Relations to groups of tariff zones
"""

from .geometry import build_node_index, build_polygon
from .zones import ZoneMapper, generate_id
from .groups import GroupResolver

__all__ = [
    "build_node_index",
    "build_polygon",
    "ZoneMapper",
    "generate_id",
    "GroupResolver",
]

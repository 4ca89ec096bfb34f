"""
Polygon construction from OSM ways

Coordinates are copied verbatim: no closure, winding or validity checks.
"""

from typing import Dict, Iterable, Mapping

from ..exceptions import UnresolvedNodeError
from ..netex.models import Polygon
from ..osm.models import OSMNode, OSMWay


def build_node_index(nodes: Iterable[OSMNode]) -> Dict[int, OSMNode]:
    """
    Index nodes by id

    Args:
        nodes: All nodes of the input document

    Returns:
        Dict of node id -> node

    Raises:
        ValueError: If two nodes share an id
    """
    index: Dict[int, OSMNode] = {}
    for node in nodes:
        if node.id in index:
            raise ValueError(f"Duplicate node id {node.id} in OSM input")
        index[node.id] = node
    return index


def polygon_id(way: OSMWay) -> str:
    return f"GEN-PolygonType{way.id}"


def build_polygon(way: OSMWay, node_index: Mapping[int, OSMNode]) -> Polygon:
    """
    Build a polygon whose exterior ring follows the way's node order

    The pos list is flattened as lat, lon, lat, lon, ...

    Raises:
        UnresolvedNodeError: If the way references a node missing from the index
    """
    pos_list = []
    for ref in way.node_refs:
        node = node_index.get(ref)
        if node is None:
            raise UnresolvedNodeError(way.id, ref)
        pos_list.append(node.lat)
        pos_list.append(node.lon)

    return Polygon(id=polygon_id(way), pos_list=pos_list)

"""
OpenStreetMap input module

- Models: Data structures (OSMNode, OSMWay, OSMRelation, OSMDocument)
- Parser: OSM XML and Overpass JSON parsing
"""

from .models import OSMNode, OSMWay, OSMMember, OSMRelation, OSMDocument
from .parser import OSMParser

__all__ = [
    "OSMNode",
    "OSMWay",
    "OSMMember",
    "OSMRelation",
    "OSMDocument",
    "OSMParser",
]

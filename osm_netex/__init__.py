"""
OSM to NeTEx converter

Converts OpenStreetMap ways and relations into NeTEx tariff zones, fare
zones, topographic places and groups of tariff zones.
"""

from .transformer import OsmToNetexTransformer
from .netex.models import TargetEntity
from .osm.parser import OSMParser

__all__ = [
    "OsmToNetexTransformer",
    "TargetEntity",
    "OSMParser",
]

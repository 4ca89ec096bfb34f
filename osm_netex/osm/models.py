"""
OSM data models

Data classes for representing OSM nodes, ways and relations
"""

from typing import List, Dict, Optional
from dataclasses import dataclass, field


@dataclass(frozen=True)
class OSMNode:
    """Represents an OSM node (point)"""
    id: int
    lat: float
    lon: float
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class OSMWay:
    """Represents an OSM way (an ordered ring of node references)"""
    id: int
    node_refs: List[int]
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class OSMMember:
    """A relation member: a node, way or relation reference with a role"""
    type: str
    ref: int
    role: str = ""


@dataclass(frozen=True)
class OSMRelation:
    """Represents an OSM relation (a grouping of members)"""
    id: int
    members: List[OSMMember]
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass
class OSMDocument:
    """Everything read from one OSM file"""
    nodes: List[OSMNode] = field(default_factory=list)
    ways: List[OSMWay] = field(default_factory=list)
    relations: List[OSMRelation] = field(default_factory=list)
    generator: Optional[str] = None
    version: Optional[str] = None

    def summary(self) -> str:
        return (f"generator: {self.generator}, version: {self.version}, "
                f"nodes: {len(self.nodes)}, ways: {len(self.ways)}, "
                f"relations: {len(self.relations)}")

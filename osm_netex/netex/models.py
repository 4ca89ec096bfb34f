"""
Pydantic models for the NeTEx output graph

Covers the subset of NeTEx the converter produces: zones (tariff zones,
fare zones, topographic places), groups of tariff zones, and the site
frame / publication delivery wrapping them.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, Field
from shapely.geometry import Polygon as ShapelyPolygon

from ..exceptions import UnknownTargetEntityError


# ============================================================
# Enumerations
# ============================================================

class TargetEntity(str, Enum):
    """Zone type a conversion run produces"""
    TARIFF_ZONE = "TariffZone"
    FARE_ZONE = "FareZone"
    TOPOGRAPHIC_PLACE = "TopographicPlace"

    @classmethod
    def names(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def from_selector(cls, selector: str) -> "TargetEntity":
        """Resolve a selector such as "FareZone" into a TargetEntity"""
        try:
            return cls(selector)
        except ValueError:
            raise UnknownTargetEntityError(selector, cls.names()) from None


class ScopingMethod(str, Enum):
    EXPLICIT_STOPS = "explicitStops"
    IMPLICIT_SPATIAL_PROJECTION = "implicitSpatialProjection"
    EXPLICIT_PERIPHERAL_STOPS = "explicitPeripheralStops"
    OTHER = "other"


class ZoneTopology(str, Enum):
    OVERLAPPING = "overlapping"
    HONEYCOMB = "honeycomb"
    RING = "ring"
    ANNULAR = "annular"
    NESTED = "nested"
    TILED = "tiled"
    SEQUENCE = "sequence"
    OVERLAPPING_SEQUENCE = "overlappingSequence"
    OTHER = "other"


# ============================================================
# Shared structures
# ============================================================

class MultilingualString(BaseModel):
    value: str
    lang: Optional[str] = None


class ValidBetween(BaseModel):
    from_date: datetime
    to_date: Optional[datetime] = None


class KeyValue(BaseModel):
    key: str
    value: str


class VersionOfObjectRef(BaseModel):
    ref: str
    version: Optional[str] = None


class Polygon(BaseModel):
    """GML polygon with a single exterior linear ring"""
    id: str
    pos_list: List[float] = Field(default_factory=list)  # lat, lon, lat, lon, ...

    def coordinates(self) -> List[Tuple[float, float]]:
        """Ring as (lat, lon) pairs"""
        return [(self.pos_list[i], self.pos_list[i + 1]) for i in range(0, len(self.pos_list) - 1, 2)]

    def to_shapely(self):
        """Ring as a shapely Polygon in (lon, lat) axis order"""
        return ShapelyPolygon([(lon, lat) for lat, lon in self.coordinates()])


# ============================================================
# Zones
# ============================================================

class Zone(BaseModel):
    """Fields shared by every zone variant"""
    id: str
    version: str = "1"
    name: Optional[MultilingualString] = None
    valid_between: Optional[ValidBetween] = None
    polygon: Optional[Polygon] = None
    key_list: List[KeyValue] = Field(default_factory=list)

    def key_value(self, key: str) -> Optional[str]:
        for entry in self.key_list:
            if entry.key == key:
                return entry.value
        return None


class TariffZone(Zone):
    pass


class TopographicPlaceDescriptor(BaseModel):
    name: Optional[MultilingualString] = None


class TopographicPlace(Zone):
    descriptor: Optional[TopographicPlaceDescriptor] = None


class FareZone(Zone):
    private_code: Optional[str] = None
    zone_topology: Optional[ZoneTopology] = None
    scoping_method: Optional[ScopingMethod] = None
    authority_ref: Optional[VersionOfObjectRef] = None
    members: Optional[List[VersionOfObjectRef]] = None  # scheduled stop point refs
    neighbours: Optional[List[VersionOfObjectRef]] = None  # fare zone refs


AnyZone = Union[FareZone, TariffZone, TopographicPlace]


class GroupOfTariffZones(BaseModel):
    id: str
    version: str = "1"
    name: Optional[MultilingualString] = None
    private_code: Optional[str] = None
    purpose_of_grouping_ref: Optional[VersionOfObjectRef] = None
    members: List[VersionOfObjectRef] = Field(default_factory=list)  # tariff zone refs


# ============================================================
# Frames
# ============================================================

class SiteFrame(BaseModel):
    id: str
    version: str = "1"
    created: datetime
    default_time_zone: Optional[str] = None
    tariff_zones: Optional[List[TariffZone]] = None
    fare_zones: Optional[List[FareZone]] = None
    groups_of_tariff_zones: Optional[List[GroupOfTariffZones]] = None
    topographic_places: Optional[List[TopographicPlace]] = None


class PublicationDelivery(BaseModel):
    """Root of a NeTEx document"""
    version: str = "1.0"
    publication_timestamp: datetime
    participant_ref: str
    description: Optional[str] = None
    site_frame: SiteFrame

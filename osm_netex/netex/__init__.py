"""
NeTEx output module

- Models: Pydantic NeTEx objects (zones, groups, frames)
- Frames: Site frame and publication delivery construction
- Writer: NeTEx XML serialization
"""

from .models import (
    TargetEntity, ScopingMethod, ZoneTopology,
    Zone, TariffZone, FareZone, TopographicPlace, GroupOfTariffZones,
    SiteFrame, PublicationDelivery
)
from .frames import create_site_frame, create_publication_delivery
from .writer import NetexWriter

__all__ = [
    "TargetEntity",
    "ScopingMethod",
    "ZoneTopology",
    "Zone",
    "TariffZone",
    "FareZone",
    "TopographicPlace",
    "GroupOfTariffZones",
    "SiteFrame",
    "PublicationDelivery",
    "create_site_frame",
    "create_publication_delivery",
    "NetexWriter",
]

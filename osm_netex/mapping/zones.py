"""
Map OSM ways to NeTEx zones
"""

from typing import Dict, List, Mapping, Optional

from loguru import logger

from .geometry import build_polygon
from .tags import ZoneTags, interpret_zone_tags, TZ_MAPPING
from .validation import TagErrorCollector
from ..config import get_config
from ..exceptions import DuplicateZoneIdError
from ..netex.models import (
    TargetEntity, AnyZone, FareZone, TariffZone, TopographicPlace, TopographicPlaceDescriptor,
    KeyValue, Polygon, VersionOfObjectRef
)
from ..osm.models import OSMNode, OSMWay


def generate_id(codespace: str, type_name: str, reference: str) -> str:
    """NeTEx id such as VOT:TariffZone:42"""
    return f"{codespace}:{type_name}:{reference}"


class ZoneMapper:
    """
    Maps ways to zones of one target entity

    Usage:
        mapper = ZoneMapper(TargetEntity.TARIFF_ZONE)
        zones = mapper.map_ways(document.ways, build_node_index(document.nodes))
    """

    def __init__(self, target: TargetEntity, version: Optional[str] = None):
        self.target = target
        self.version = version or get_config().netex.default_version

    def map_ways(self, ways: List[OSMWay], node_index: Mapping[int, OSMNode]) -> Dict[int, AnyZone]:
        """
        Map every way, in input order

        Returns:
            Dict of way id -> zone, in way order

        Raises:
            TagValidationError: If any way lacks required tags
            UnresolvedNodeError: If any way references an unknown node
            DuplicateZoneIdError: If two ways produce the same zone id
        """
        zones: Dict[int, AnyZone] = {}
        seen_ids: Dict[str, int] = {}
        for way in ways:
            zone = self.map_way(way, node_index)
            if zone.id in seen_ids:
                raise DuplicateZoneIdError(zone.id, seen_ids[zone.id], way.id)
            seen_ids[zone.id] = way.id
            zones[way.id] = zone
        logger.info(f"Mapped {len(zones)} ways to {self.target.value}")
        return zones

    def map_way(self, way: OSMWay, node_index: Mapping[int, OSMNode]) -> AnyZone:
        errors = TagErrorCollector("way", way.id)
        values = interpret_zone_tags(way.tags, self.target, errors)
        errors.raise_if_any()

        polygon = build_polygon(way, node_index)

        if self.target is TargetEntity.FARE_ZONE:
            zone = self._fare_zone(values, polygon)
        elif self.target is TargetEntity.TARIFF_ZONE:
            zone = TariffZone(**self._common_fields(values, polygon, TargetEntity.TARIFF_ZONE))
        else:
            zone = TopographicPlace(
                descriptor=TopographicPlaceDescriptor(name=values.name),
                **self._common_fields(values, polygon, TargetEntity.TOPOGRAPHIC_PLACE)
            )

        logger.debug(f"Mapped way {way.id} to {zone.id}")
        return zone

    def _common_fields(self, values: ZoneTags, polygon: Polygon, target: TargetEntity) -> dict:
        return {
            "id": generate_id(values.codespace, target.value, values.reference),
            "version": self.version,
            "name": values.name,
            "valid_between": values.valid_between(),
            "polygon": polygon,
            "key_list": list(values.key_values),
        }

    def _fare_zone(self, values: ZoneTags, polygon: Polygon) -> FareZone:
        tz_mapping = values.tz_mapping
        if not tz_mapping:
            tz_mapping = generate_id(values.codespace, TargetEntity.TARIFF_ZONE.value, values.private_code)

        return FareZone(
            id=values.zone_id,
            version=self.version,
            name=values.name,
            valid_between=values.valid_between(),
            polygon=polygon,
            key_list=[KeyValue(key=TZ_MAPPING, value=tz_mapping)],
            private_code=values.private_code,
            zone_topology=values.zone_topology,
            scoping_method=values.scoping_method,
            authority_ref=VersionOfObjectRef(ref=values.authority_ref) if values.authority_ref else None,
            members=[VersionOfObjectRef(ref=ref) for ref in values.members] if values.members else None,
            neighbours=[VersionOfObjectRef(ref=ref) for ref in values.neighbours] if values.neighbours else None,
        )

"""
Map OSM relations to groups of tariff zones

Relation members point at ways by OSM id. Each member is resolved through
the zones already mapped from those ways, so the group lists the NeTEx
zone ids rather than the OSM ids.
"""

from typing import List, Mapping, Optional

from loguru import logger

from .tags import interpret_group_tags
from .validation import TagErrorCollector
from ..config import get_config
from ..netex.models import AnyZone, GroupOfTariffZones, VersionOfObjectRef
from ..osm.models import OSMRelation


class GroupResolver:
    """Resolves relations into groups of tariff zones"""

    def __init__(self, version: Optional[str] = None):
        self.version = version or get_config().netex.default_version

    def map_relations(
        self,
        relations: List[OSMRelation],
        zones: Mapping[int, AnyZone]
    ) -> List[GroupOfTariffZones]:
        """
        Map every relation, in input order

        Args:
            relations: Relations of the input document
            zones: Way id -> zone, as produced by ZoneMapper.map_ways

        Raises:
            TagValidationError: If a relation has no GroupOfTariffZoneId
        """
        groups = [self.map_relation(relation, zones) for relation in relations]
        logger.info(f"Mapped {len(groups)} relations to GroupOfTariffZones")
        return groups

    def map_relation(self, relation: OSMRelation, zones: Mapping[int, AnyZone]) -> GroupOfTariffZones:
        errors = TagErrorCollector("relation", relation.id)
        values = interpret_group_tags(relation.tags, errors)
        errors.raise_if_any()

        members = []
        for member in relation.members:
            zone = zones.get(member.ref) if member.type == "way" else None
            if zone is None:
                # Unresolved members are left out rather than written as empty refs
                logger.warning(f"Relation {relation.id}: dropping member {member.type} {member.ref}, "
                               f"no zone was mapped from it")
                continue
            members.append(VersionOfObjectRef(ref=zone.id, version=self.version))

        purpose = values.purpose_of_grouping_ref
        return GroupOfTariffZones(
            id=values.group_id,
            version=self.version,
            name=values.name,
            private_code=values.private_code,
            purpose_of_grouping_ref=VersionOfObjectRef(ref=purpose) if purpose else None,
            members=members
        )

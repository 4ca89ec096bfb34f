"""
OSM to NeTEx transformer

Orchestrates a conversion run:

  1. Resolve the target entity (TariffZone, FareZone, TopographicPlace)
  2. Index nodes by id
  3. Map ways to zones
  4. Map relations to groups of tariff zones (FareZone only)
  5. Wrap everything in a site frame and publication delivery
  6. Write NeTEx XML
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from .config import get_config, ConverterConfig
from .mapping import build_node_index, ZoneMapper, GroupResolver
from .netex.frames import create_site_frame, create_publication_delivery
from .netex.models import TargetEntity, SiteFrame, PublicationDelivery
from .netex.writer import NetexWriter
from .osm.models import OSMDocument
from .osm.parser import OSMParser


class OsmToNetexTransformer:
    """
    Converts OSM documents to NeTEx publication deliveries

    Usage:
        transformer = OsmToNetexTransformer()
        delivery = transformer.map(document, "FareZone")
        transformer.transform("zones.osm", "output/netex.xml", "FareZone")
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = config or get_config()
        self.writer = NetexWriter()

    def transform(
        self,
        osm_path: Union[str, Path],
        output_path: str,
        target_entity: Union[str, TargetEntity]
    ) -> str:
        """
        Read an OSM file, convert it and write NeTEx XML

        Returns:
            Path of the written file
        """
        target = self._resolve_target(target_entity)
        document = OSMParser.parse_file(osm_path)
        delivery = self.map(document, target, osm_input_file=Path(osm_path).name)
        return self.writer.write(delivery, output_path)

    def map(
        self,
        document: OSMDocument,
        target_entity: Union[str, TargetEntity],
        osm_input_file: str = "",
        created: Optional[datetime] = None
    ) -> PublicationDelivery:
        """
        Map an OSM document to a publication delivery

        Args:
            document: Parsed OSM input
            target_entity: Zone type to produce
            osm_input_file: Input file name, quoted in the delivery description
            created: Timestamp for the frame and delivery (default: now)

        Raises:
            UnknownTargetEntityError: Before any mapping, for an unknown target
            TagValidationError: If a way or relation lacks required tags
            UnresolvedNodeError: If a way references an unknown node
            DuplicateZoneIdError: If two ways map to the same zone id
        """
        site_frame = self.map_site_frame(document, target_entity, created=created)
        return create_publication_delivery(
            site_frame,
            osm_input_file,
            timestamp=created,
            config=self.config.netex
        )

    def map_site_frame(
        self,
        document: OSMDocument,
        target_entity: Union[str, TargetEntity],
        created: Optional[datetime] = None
    ) -> SiteFrame:
        """Map an OSM document to a site frame holding the zones of one type"""
        target = self._resolve_target(target_entity)
        version = self.config.netex.default_version

        node_index = build_node_index(document.nodes)
        logger.info(f"Mapped {len(node_index)} nodes from osm file")

        zones = ZoneMapper(target, version=version).map_ways(document.ways, node_index)

        site_frame = create_site_frame(created=created, config=self.config.netex)
        if target is TargetEntity.TARIFF_ZONE:
            site_frame.tariff_zones = list(zones.values())
        elif target is TargetEntity.TOPOGRAPHIC_PLACE:
            site_frame.topographic_places = list(zones.values())
        else:
            site_frame.fare_zones = list(zones.values())
            if document.relations:
                resolver = GroupResolver(version=version)
                site_frame.groups_of_tariff_zones = resolver.map_relations(document.relations, zones)

        return site_frame

    @staticmethod
    def _resolve_target(target_entity: Union[str, TargetEntity]) -> TargetEntity:
        if isinstance(target_entity, TargetEntity):
            return target_entity
        return TargetEntity.from_selector(target_entity)

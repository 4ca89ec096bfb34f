"""
NeTEx XML writer

Serializes a PublicationDelivery into NeTEx XML using ElementTree.
"""

import os
import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Iterable, Optional
from loguru import logger

from .models import (
    PublicationDelivery, SiteFrame, Zone, FareZone, TopographicPlace,
    GroupOfTariffZones, MultilingualString, ValidBetween, Polygon, VersionOfObjectRef
)

NETEX_NS = "http://www.netex.org.uk/netex"
GML_NS = "http://www.opengis.net/gml/3.2"

ET.register_namespace("", NETEX_NS)
ET.register_namespace("gml", GML_NS)


def _n(tag: str) -> str:
    return f"{{{NETEX_NS}}}{tag}"


def _g(tag: str) -> str:
    return f"{{{GML_NS}}}{tag}"


def _format_datetime(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%S")


def _format_number(value: float) -> str:
    return repr(float(value))


class NetexWriter:
    """Writes publication deliveries as NeTEx XML"""

    def __init__(self, pretty: bool = True):
        self.pretty = pretty

    def write(self, delivery: PublicationDelivery, output_path: str) -> str:
        """Write a publication delivery to an XML file"""
        # Serialize first so a failure leaves no truncated file behind
        data = self.to_bytes(delivery)
        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        with open(output_path, "wb") as f:
            f.write(data)
        logger.info(f"Saved NeTEx publication delivery to {output_path}")
        return output_path

    def to_bytes(self, delivery: PublicationDelivery) -> bytes:
        root = self.build(delivery)
        if self.pretty:
            ET.indent(root)
        return ET.tostring(root, encoding="utf-8", xml_declaration=True)

    def build(self, delivery: PublicationDelivery) -> ET.Element:
        """Build the <PublicationDelivery> element tree"""
        root = ET.Element(_n("PublicationDelivery"), {"version": delivery.version})
        ET.SubElement(root, _n("PublicationTimestamp")).text = _format_datetime(delivery.publication_timestamp)
        ET.SubElement(root, _n("ParticipantRef")).text = delivery.participant_ref
        if delivery.description:
            ET.SubElement(root, _n("Description")).text = delivery.description
        data_objects = ET.SubElement(root, _n("dataObjects"))
        data_objects.append(self._site_frame(delivery.site_frame))
        return root

    # ============================================================
    # Frame
    # ============================================================

    def _site_frame(self, frame: SiteFrame) -> ET.Element:
        element = ET.Element(_n("SiteFrame"), {
            "created": _format_datetime(frame.created),
            "version": frame.version,
            "id": frame.id
        })
        if frame.default_time_zone:
            defaults = ET.SubElement(element, _n("FrameDefaults"))
            locale = ET.SubElement(defaults, _n("DefaultLocale"))
            ET.SubElement(locale, _n("TimeZone")).text = frame.default_time_zone

        if frame.topographic_places is not None:
            places = ET.SubElement(element, _n("topographicPlaces"))
            for place in frame.topographic_places:
                places.append(self._topographic_place(place))

        if frame.tariff_zones is not None or frame.fare_zones is not None:
            zones = ET.SubElement(element, _n("tariffZones"))
            for zone in frame.tariff_zones or []:
                zones.append(self._tariff_zone(zone))
            for fare_zone in frame.fare_zones or []:
                zones.append(self._fare_zone(fare_zone))

        if frame.groups_of_tariff_zones is not None:
            groups = ET.SubElement(element, _n("groupsOfTariffZones"))
            for group in frame.groups_of_tariff_zones:
                groups.append(self._group_of_tariff_zones(group))

        return element

    # ============================================================
    # Zones
    # ============================================================

    def _zone(self, element_name: str, zone: Zone) -> ET.Element:
        """Common zone content, in NeTEx element order"""
        element = ET.Element(_n(element_name), {"version": zone.version, "id": zone.id})
        if zone.valid_between:
            element.append(self._valid_between(zone.valid_between))
        if zone.key_list:
            key_list = ET.SubElement(element, _n("keyList"))
            for entry in zone.key_list:
                key_value = ET.SubElement(key_list, _n("KeyValue"))
                ET.SubElement(key_value, _n("Key")).text = entry.key
                ET.SubElement(key_value, _n("Value")).text = entry.value
        if zone.name:
            element.append(self._multilingual("Name", zone.name))
        return element

    def _append_polygon(self, element: ET.Element, polygon: Optional[Polygon]) -> None:
        if polygon is None:
            return
        gml_polygon = ET.SubElement(element, _g("Polygon"), {_g("id"): polygon.id})
        exterior = ET.SubElement(gml_polygon, _g("exterior"))
        ring = ET.SubElement(exterior, _g("LinearRing"))
        ET.SubElement(ring, _g("posList")).text = " ".join(_format_number(v) for v in polygon.pos_list)

    def _tariff_zone(self, zone: Zone) -> ET.Element:
        element = self._zone("TariffZone", zone)
        self._append_polygon(element, zone.polygon)
        return element

    def _fare_zone(self, zone: FareZone) -> ET.Element:
        element = self._zone("FareZone", zone)
        if zone.private_code is not None:
            ET.SubElement(element, _n("PrivateCode")).text = zone.private_code
        self._append_polygon(element, zone.polygon)
        if zone.members:
            self._append_refs(element, "members", "ScheduledStopPointRef", zone.members)
        if zone.zone_topology:
            ET.SubElement(element, _n("ZoneTopology")).text = zone.zone_topology.value
        if zone.scoping_method:
            ET.SubElement(element, _n("ScopingMethod")).text = zone.scoping_method.value
        if zone.authority_ref:
            ET.SubElement(element, _n("AuthorityRef"), self._ref_attributes(zone.authority_ref))
        if zone.neighbours:
            self._append_refs(element, "neighbours", "FareZoneRef", zone.neighbours)
        return element

    def _topographic_place(self, place: TopographicPlace) -> ET.Element:
        element = self._zone("TopographicPlace", place)
        self._append_polygon(element, place.polygon)
        if place.descriptor and place.descriptor.name:
            descriptor = ET.SubElement(element, _n("Descriptor"))
            descriptor.append(self._multilingual("Name", place.descriptor.name))
        return element

    def _group_of_tariff_zones(self, group: GroupOfTariffZones) -> ET.Element:
        element = ET.Element(_n("GroupOfTariffZones"), {"version": group.version, "id": group.id})
        if group.name:
            element.append(self._multilingual("Name", group.name))
        if group.purpose_of_grouping_ref:
            ET.SubElement(element, _n("PurposeOfGroupingRef"), self._ref_attributes(group.purpose_of_grouping_ref))
        if group.private_code is not None:
            ET.SubElement(element, _n("PrivateCode")).text = group.private_code
        self._append_refs(element, "members", "TariffZoneRef", group.members)
        return element

    # ============================================================
    # Helpers
    # ============================================================

    def _multilingual(self, element_name: str, text: MultilingualString) -> ET.Element:
        attributes = {"lang": text.lang} if text.lang else {}
        element = ET.Element(_n(element_name), attributes)
        element.text = text.value
        return element

    def _valid_between(self, valid_between: ValidBetween) -> ET.Element:
        element = ET.Element(_n("ValidBetween"))
        ET.SubElement(element, _n("FromDate")).text = _format_datetime(valid_between.from_date)
        if valid_between.to_date:
            ET.SubElement(element, _n("ToDate")).text = _format_datetime(valid_between.to_date)
        return element

    @staticmethod
    def _ref_attributes(ref: VersionOfObjectRef) -> dict:
        attributes = {"ref": ref.ref}
        if ref.version:
            attributes["version"] = ref.version
        return attributes

    def _append_refs(
        self,
        parent: ET.Element,
        container_name: str,
        ref_name: str,
        refs: Iterable[VersionOfObjectRef]
    ) -> None:
        container = ET.SubElement(parent, _n(container_name))
        for ref in refs:
            ET.SubElement(container, _n(ref_name), self._ref_attributes(ref))


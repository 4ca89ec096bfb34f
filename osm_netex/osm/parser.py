"""
OSM input parser

Parses OSM XML files and Overpass API JSON responses into an OSMDocument
"""

import json
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Any, List, Union
from loguru import logger

from .models import OSMNode, OSMWay, OSMMember, OSMRelation, OSMDocument
from ..config import get_config
from ..exceptions import OSMParseError


def _local_name(tag: str) -> str:
    """Strip the namespace from an element name, if any"""
    return tag.rsplit("}", 1)[-1]


def _parse_int(value: Any, what: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise OSMParseError(f"Invalid {what}: {value!r}") from e


def _parse_float(value: Any, what: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise OSMParseError(f"Invalid {what}: {value!r}") from e


class OSMParser:
    """Parses OSM XML and Overpass JSON into nodes, ways and relations"""

    @staticmethod
    def parse_file(path: Union[str, Path]) -> OSMDocument:
        """
        Parse an OSM file, choosing the format from its suffix

        Args:
            path: OSM XML file (.osm, .xml) or Overpass JSON response (.json)

        Returns:
            Parsed OSMDocument
        """
        path = Path(path)
        if path.suffix.lower() in get_config().json_suffixes:
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise OSMParseError(f"Failed to read Overpass JSON {path}: {e}") from e
            document = OSMParser.parse_elements(data)
        else:
            try:
                root = ET.parse(path).getroot()
            except (OSError, ET.ParseError) as e:
                raise OSMParseError(f"Failed parsing XML {path}: {e}") from e
            document = OSMParser.parse_xml(root)

        logger.info(f"Unmarshalled OSM file. {document.summary()}")
        return document

    @staticmethod
    def parse_xml_string(text: Union[str, bytes]) -> OSMDocument:
        """Parse OSM XML held in memory"""
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise OSMParseError(f"Failed parsing XML: {e}") from e
        return OSMParser.parse_xml(root)

    @staticmethod
    def parse_xml(root: ET.Element) -> OSMDocument:
        """
        Parse an <osm> root element

        Element names are matched without their namespace, so files with and
        without the OSM 0.6 namespace read the same.
        """
        if _local_name(root.tag) != "osm":
            raise OSMParseError(f"Expected <osm> root element, got <{_local_name(root.tag)}>")

        document = OSMDocument(generator=root.get("generator"), version=root.get("version"))

        for element in root:
            name = _local_name(element.tag)
            if name == "node":
                document.nodes.append(OSMNode(
                    id=_parse_int(element.get("id"), "node id"),
                    lat=_parse_float(element.get("lat"), "node lat"),
                    lon=_parse_float(element.get("lon"), "node lon"),
                    tags=OSMParser._xml_tags(element)
                ))
            elif name == "way":
                way_id = _parse_int(element.get("id"), "way id")
                node_refs = [
                    _parse_int(nd.get("ref"), f"node reference in way {way_id}")
                    for nd in element if _local_name(nd.tag) == "nd"
                ]
                document.ways.append(OSMWay(
                    id=way_id,
                    node_refs=node_refs,
                    tags=OSMParser._xml_tags(element)
                ))
            elif name == "relation":
                relation_id = _parse_int(element.get("id"), "relation id")
                members = [
                    OSMMember(
                        type=member.get("type", ""),
                        ref=_parse_int(member.get("ref"), f"member reference in relation {relation_id}"),
                        role=member.get("role", "")
                    )
                    for member in element if _local_name(member.tag) == "member"
                ]
                document.relations.append(OSMRelation(
                    id=relation_id,
                    members=members,
                    tags=OSMParser._xml_tags(element)
                ))

        return document

    @staticmethod
    def _xml_tags(element: ET.Element) -> Dict[str, str]:
        tags = {}
        for tag in element:
            if _local_name(tag.tag) == "tag":
                key = tag.get("k")
                if key is not None:
                    tags[key] = tag.get("v")
        return tags

    @staticmethod
    def parse_elements(data: Dict[str, Any]) -> OSMDocument:
        """
        Parse an Overpass response into an OSMDocument

        Expects 'out body' output, where ways carry node references and
        relations carry members.

        Args:
            data: JSON response from Overpass API

        Returns:
            Parsed OSMDocument
        """
        if not isinstance(data, dict):
            raise OSMParseError("Overpass response must be a JSON object")

        document = OSMDocument(generator=data.get("generator"), version=str(data.get("version", "")) or None)

        for element in data.get("elements", []):
            element_type = element.get("type")
            if element_type == "node":
                document.nodes.append(OSMNode(
                    id=_parse_int(element.get("id"), "node id"),
                    lat=_parse_float(element.get("lat"), "node lat"),
                    lon=_parse_float(element.get("lon"), "node lon"),
                    tags=element.get("tags", {})
                ))
            elif element_type == "way":
                way_id = _parse_int(element.get("id"), "way id")
                document.ways.append(OSMWay(
                    id=way_id,
                    node_refs=[_parse_int(ref, f"node reference in way {way_id}")
                               for ref in element.get("nodes", [])],
                    tags=element.get("tags", {})
                ))
            elif element_type == "relation":
                relation_id = _parse_int(element.get("id"), "relation id")
                members: List[OSMMember] = [
                    OSMMember(
                        type=member.get("type", ""),
                        ref=_parse_int(member.get("ref"), f"member reference in relation {relation_id}"),
                        role=member.get("role", "")
                    )
                    for member in element.get("members", [])
                ]
                document.relations.append(OSMRelation(
                    id=relation_id,
                    members=members,
                    tags=element.get("tags", {})
                ))

        return document

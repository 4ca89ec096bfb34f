import json

import pytest

from osm_netex.exceptions import OSMParseError
from osm_netex.osm.parser import OSMParser

PLAIN_OSM = """<?xml version='1.0' encoding='UTF-8'?>
<osm version='0.6' generator='JOSM'>
  <node id='1' lat='59.66' lon='9.64' />
  <node id='2' lat='59.67' lon='9.66' />
  <node id='3' lat='59.65' lon='9.67' />
  <way id='10'>
    <nd ref='1' /><nd ref='2' /><nd ref='3' /><nd ref='1' />
    <tag k='codespace' v='VOT' />
    <tag k='reference' v='42' />
  </way>
  <relation id='20'>
    <member type='way' ref='10' role='outer' />
    <tag k='GroupOfTariffZoneId' v='VOT:GroupOfTariffZones:1' />
  </relation>
</osm>
"""

NAMESPACED_OSM = PLAIN_OSM.replace("<osm version", "<osm xmlns='http://openstreetmap.org/osm/0.6' version")


def test_parse_xml():
    document = OSMParser.parse_xml_string(PLAIN_OSM)

    assert document.generator == "JOSM"
    assert document.version == "0.6"
    assert [node.id for node in document.nodes] == [1, 2, 3]
    assert document.nodes[1].lat == 59.67

    way = document.ways[0]
    assert way.id == 10
    assert way.node_refs == [1, 2, 3, 1]
    assert way.tags == {"codespace": "VOT", "reference": "42"}

    relation = document.relations[0]
    assert relation.members[0].type == "way"
    assert relation.members[0].ref == 10
    assert relation.members[0].role == "outer"


def test_namespace_does_not_matter():
    assert OSMParser.parse_xml_string(NAMESPACED_OSM) == OSMParser.parse_xml_string(PLAIN_OSM)


def test_parse_overpass_json():
    data = {
        "version": 0.6,
        "generator": "Overpass API",
        "elements": [
            {"type": "node", "id": 1, "lat": 59.66, "lon": 9.64},
            {"type": "node", "id": 2, "lat": 59.67, "lon": 9.66},
            {"type": "way", "id": 10, "nodes": [1, 2, 1], "tags": {"codespace": "VOT"}},
            {"type": "relation", "id": 20, "members": [{"type": "way", "ref": 10, "role": ""}]},
        ]
    }

    document = OSMParser.parse_elements(data)

    assert document.generator == "Overpass API"
    assert len(document.nodes) == 2
    assert document.ways[0].node_refs == [1, 2, 1]
    assert document.ways[0].tags == {"codespace": "VOT"}
    assert document.relations[0].members[0].ref == 10
    assert document.relations[0].tags == {}


def test_json_file_is_read_as_overpass(tmp_path):
    path = tmp_path / "zones.json"
    path.write_text(json.dumps({"elements": [{"type": "node", "id": 5, "lat": 1.5, "lon": 2.5}]}))

    document = OSMParser.parse_file(path)

    assert document.nodes[0].id == 5
    assert document.nodes[0].lon == 2.5


def test_parse_file(data_dir):
    document = OSMParser.parse_file(data_dir / "fare_zones.osm")

    assert len(document.nodes) == 6
    assert [way.id for way in document.ways] == [-201, -202]
    assert document.ways[0].tags["id"] == "VOT:FareZone:19"
    assert [member.ref for member in document.relations[0].members] == [-201, -202]


@pytest.mark.parametrize("text", [
    "<osm><node id='1' lat='x' lon='9.6' /></osm>",
    "<osm><way id='1'><nd ref='abc' /></way></osm>",
    "<osm><node id='1'",
    "<netex />",
])
def test_malformed_xml(text):
    with pytest.raises(OSMParseError):
        OSMParser.parse_xml_string(text)


def test_missing_file(tmp_path):
    with pytest.raises(OSMParseError):
        OSMParser.parse_file(tmp_path / "missing.osm")

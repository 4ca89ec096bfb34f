from pathlib import Path

import pytest

from osm_netex.osm.models import OSMNode, OSMWay, OSMMember, OSMRelation, OSMDocument

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def data_dir():
    return DATA_DIR


@pytest.fixture
def nodes():
    return [
        OSMNode(id=1, lat=59.66, lon=9.64),
        OSMNode(id=2, lat=59.67, lon=9.66),
        OSMNode(id=3, lat=59.65, lon=9.67),
        OSMNode(id=4, lat=59.70, lon=9.60),
        OSMNode(id=5, lat=59.71, lon=9.62),
        OSMNode(id=6, lat=59.69, lon=9.63),
    ]


@pytest.fixture
def node_index(nodes):
    return {node.id: node for node in nodes}


@pytest.fixture
def tariff_zone_way():
    return OSMWay(
        id=100,
        node_refs=[1, 2, 3, 1],
        tags={"codespace": "VOT", "reference": "42", "name:nor": "Kongsberg", "zone_type": "city"}
    )


@pytest.fixture
def fare_zone_ways():
    return [
        OSMWay(
            id=201,
            node_refs=[1, 2, 3, 1],
            tags={
                "codespace": "VOT",
                "id": "VOT:FareZone:1",
                "privateCode": "630",
                "name:nor": "Kongsberg",
                "authorityRef": "VOT:Authority:VTFK_ID",
                "members": "NSR:StopPlace:16845;NSR:StopPlace:16848",
                "neighbours": "VOT:FareZone:2",
                "scopingMethod": "explicitStops",
                "zoneTopology": "tiled",
                "valid_from": "2021-02-01",
            }
        ),
        OSMWay(
            id=202,
            node_refs=[4, 5, 6, 4],
            tags={
                "codespace": "VOT",
                "id": "VOT:FareZone:2",
                "privateCode": "631",
                "tzMapping": "VOT:TariffZone:9631",
            }
        ),
    ]


@pytest.fixture
def group_relation():
    return OSMRelation(
        id=301,
        members=[OSMMember(type="way", ref=201), OSMMember(type="way", ref=202)],
        tags={
            "GroupOfTariffZoneId": "VOT:GroupOfTariffZones:1",
            "name:nor": "Kongsberg og omegn",
            "privateCode": "G1",
            "PurposeOfGroupingRef": "VOT:PurposeOfGrouping:1",
        }
    )


@pytest.fixture
def fare_zone_document(nodes, fare_zone_ways, group_relation):
    return OSMDocument(nodes=nodes, ways=fare_zone_ways, relations=[group_relation], generator="test")


@pytest.fixture
def tariff_zone_document(nodes, tariff_zone_way):
    return OSMDocument(nodes=nodes, ways=[tariff_zone_way], generator="test")

import pytest

from osm_netex.exceptions import TagValidationError, UnresolvedNodeError, DuplicateZoneIdError
from osm_netex.mapping.zones import ZoneMapper, generate_id
from osm_netex.netex.models import TargetEntity, FareZone, TariffZone, TopographicPlace
from osm_netex.osm.models import OSMWay


def test_generated_id():
    assert generate_id("VOT", "TariffZone", "42") == "VOT:TariffZone:42"


def test_tariff_zone(tariff_zone_way, node_index):
    zones = ZoneMapper(TargetEntity.TARIFF_ZONE).map_ways([tariff_zone_way], node_index)

    zone = zones[100]
    assert isinstance(zone, TariffZone)
    assert zone.id == "VOT:TariffZone:42"
    assert zone.version == "1"
    assert zone.name.value == "Kongsberg"
    assert zone.name.lang == "nor"
    assert zone.key_value("zone_type") == "city"
    assert len(zone.polygon.pos_list) == 8


def test_topographic_place_descriptor_carries_name(tariff_zone_way, node_index):
    zone = ZoneMapper(TargetEntity.TOPOGRAPHIC_PLACE).map_way(tariff_zone_way, node_index)

    assert isinstance(zone, TopographicPlace)
    assert zone.id == "VOT:TopographicPlace:42"
    assert zone.descriptor.name == zone.name


def test_fare_zone(fare_zone_ways, node_index):
    zones = ZoneMapper(TargetEntity.FARE_ZONE).map_ways(fare_zone_ways, node_index)

    assert list(zones) == [201, 202]
    zone = zones[201]
    assert isinstance(zone, FareZone)
    assert zone.id == "VOT:FareZone:1"
    assert zone.private_code == "630"
    assert zone.authority_ref.ref == "VOT:Authority:VTFK_ID"
    assert [ref.ref for ref in zone.members] == ["NSR:StopPlace:16845", "NSR:StopPlace:16848"]
    assert [ref.ref for ref in zone.neighbours] == ["VOT:FareZone:2"]
    assert zone.valid_between.from_date.isoformat() == "2021-02-01T00:00:00"
    assert zone.valid_between.to_date is None


def test_fare_zone_default_tz_mapping(fare_zone_ways, node_index):
    zone = ZoneMapper(TargetEntity.FARE_ZONE).map_way(fare_zone_ways[0], node_index)

    assert zone.key_value("tzMapping") == "VOT:TariffZone:630"


def test_fare_zone_explicit_tz_mapping(fare_zone_ways, node_index):
    zone = ZoneMapper(TargetEntity.FARE_ZONE).map_way(fare_zone_ways[1], node_index)

    assert zone.key_value("tzMapping") == "VOT:TariffZone:9631"
    assert zone.members is None
    assert zone.neighbours is None


def test_empty_tz_mapping_falls_back_to_private_code(node_index):
    way = OSMWay(id=59, node_refs=[1, 2, 3, 1],
                 tags={"codespace": "V", "id": "V:FareZone:7", "privateCode": "7", "tzMapping": ""})

    zone = ZoneMapper(TargetEntity.FARE_ZONE).map_way(way, node_index)

    assert zone.key_value("tzMapping") == "V:TariffZone:7"


def test_valid_to_alone_leaves_zone_without_validity(node_index):
    way = OSMWay(id=60, node_refs=[1, 2, 3, 1],
                 tags={"codespace": "VOT", "reference": "44", "valid_to": "2021-03-01"})

    zone = ZoneMapper(TargetEntity.TARIFF_ZONE).map_way(way, node_index)

    assert zone.valid_between is None


def test_missing_tags_are_reported_together(node_index):
    way = OSMWay(id=55, node_refs=[1, 2, 3], tags={"name:nor": "Uten kode"})

    with pytest.raises(TagValidationError) as excinfo:
        ZoneMapper(TargetEntity.TARIFF_ZONE).map_way(way, node_index)

    assert excinfo.value.missing_tags == ["codespace", "reference"]
    assert excinfo.value.entity_id == 55
    assert "codespace" in str(excinfo.value)
    assert "reference" in str(excinfo.value)


def test_fare_zone_missing_only_id(node_index):
    way = OSMWay(id=56, node_refs=[1, 2, 3], tags={"codespace": "VOT", "privateCode": "1"})

    with pytest.raises(TagValidationError) as excinfo:
        ZoneMapper(TargetEntity.FARE_ZONE).map_way(way, node_index)

    assert excinfo.value.missing_tags == ["id"]


def test_one_bad_way_aborts_the_batch(tariff_zone_way, node_index):
    bad_way = OSMWay(id=101, node_refs=[1, 2, 3], tags={"codespace": "VOT"})

    with pytest.raises(TagValidationError):
        ZoneMapper(TargetEntity.TARIFF_ZONE).map_ways([tariff_zone_way, bad_way], node_index)


def test_tags_are_checked_before_geometry(node_index):
    way = OSMWay(id=57, node_refs=[1, 999], tags={})

    with pytest.raises(TagValidationError):
        ZoneMapper(TargetEntity.TARIFF_ZONE).map_way(way, node_index)


def test_unknown_node_aborts_the_batch(tariff_zone_way, node_index):
    way = OSMWay(id=58, node_refs=[1, 999], tags={"codespace": "VOT", "reference": "43"})

    with pytest.raises(UnresolvedNodeError):
        ZoneMapper(TargetEntity.TARIFF_ZONE).map_ways([tariff_zone_way, way], node_index)


def test_duplicate_zone_ids_are_rejected(tariff_zone_way, node_index):
    copy = OSMWay(id=101, node_refs=tariff_zone_way.node_refs, tags=dict(tariff_zone_way.tags))

    with pytest.raises(DuplicateZoneIdError) as excinfo:
        ZoneMapper(TargetEntity.TARIFF_ZONE).map_ways([tariff_zone_way, copy], node_index)

    assert excinfo.value.way_ids == (100, 101)


def test_mapping_is_repeatable(fare_zone_ways, node_index):
    mapper = ZoneMapper(TargetEntity.FARE_ZONE)

    first = mapper.map_ways(fare_zone_ways, node_index)
    second = ZoneMapper(TargetEntity.FARE_ZONE).map_ways(fare_zone_ways, node_index)

    assert {k: v.model_dump() for k, v in first.items()} == {k: v.model_dump() for k, v in second.items()}

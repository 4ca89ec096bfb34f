import json

from cli import main, default_output_path


def test_convert(tmp_path, data_dir):
    output = tmp_path / "netex.xml"

    code = main(["convert", "--osm-file", str(data_dir / "fare_zones.osm"),
                 "--target-entity", "FareZone", "--output", str(output)])

    assert code == 0
    assert output.exists()
    assert "GroupOfTariffZones" in output.read_text(encoding="utf-8")


def test_convert_unknown_target(tmp_path, data_dir):
    output = tmp_path / "netex.xml"

    code = main(["convert", "-i", str(data_dir / "fare_zones.osm"), "-t", "Parking", "-o", str(output)])

    assert code == 1
    assert not output.exists()


def test_convert_missing_file(tmp_path):
    assert main(["convert", "-i", str(tmp_path / "missing.osm"), "-t", "FareZone"]) == 1


def test_convert_with_missing_tags(tmp_path, data_dir):
    # Fare zone ways carry no reference tag
    output = tmp_path / "netex.xml"

    code = main(["convert", "-i", str(data_dir / "fare_zones.osm"), "-t", "TariffZone", "-o", str(output)])

    assert code == 1
    assert not output.exists()


def test_inspect(capsys, data_dir):
    code = main(["inspect", "--osm-file", str(data_dir / "fare_zones.osm")])

    assert code == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["generator"] == "JOSM"
    assert summary["nodes"] == 6
    assert [way["id"] for way in summary["ways"]] == [-201, -202]
    assert summary["ways"][0]["closed"] is True
    assert summary["ways"][0]["bounds"]["min_lat"] == 59.66
    assert summary["relations"][0]["members"] == 2


def test_no_command():
    assert main([]) == 1


def test_default_output_path():
    path = default_output_path("/tmp/zones.osm")

    assert path.startswith("output")
    assert "zones_" in path
    assert path.endswith(".xml")


def test_convert_unwritable_output(tmp_path, data_dir):
    # Parent of the output path is a regular file
    blocker = tmp_path / "blocker"
    blocker.write_text("")

    code = main(["convert", "-i", str(data_dir / "fare_zones.osm"), "-t", "FareZone",
                 "-o", str(blocker / "netex.xml")])

    assert code == 1

#!/usr/bin/env python
"""
Command-line interface for the OSM to NeTEx converter

Usage:
    python cli.py convert --osm-file zones.osm --target-entity FareZone
    python cli.py inspect --osm-file zones.osm
"""

import os
import sys
import json
import argparse
from datetime import datetime
from pathlib import Path

from loguru import logger

from osm_netex.config import get_config, validate_config
from osm_netex.exceptions import ConverterError
from osm_netex.netex.models import TargetEntity
from osm_netex.osm.parser import OSMParser
from osm_netex.mapping import build_node_index, build_polygon
from osm_netex.transformer import OsmToNetexTransformer


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def default_output_path(osm_file: str) -> str:
    """<output_dir>/<osm file base name>_<timestamp>.xml"""
    config = get_config()
    base_name = Path(osm_file).stem
    timestamp = datetime.now().strftime(config.output_timestamp_format)
    return os.path.join(config.output_dir, f"{base_name}_{timestamp}.xml")


def cmd_convert(args):
    """Convert an OSM file to NeTEx XML"""
    setup_logging(args.verbose)

    if not os.path.exists(args.osm_file):
        logger.error(f"Input file not found: {args.osm_file}")
        return 1

    logger.info(f"got osm file: {args.osm_file}")
    output_path = args.output or default_output_path(args.osm_file)

    try:
        validate_config(get_config())
        transformer = OsmToNetexTransformer()
        transformer.transform(args.osm_file, output_path, args.target_entity)
    except (ConverterError, ValueError, OSError) as e:
        logger.error(f"Unable to convert to NeTEx: {e}")
        return 1

    logger.info(f"Done. Check the result in the file {output_path}")
    return 0


def cmd_inspect(args):
    """Print a summary of the ways and relations in an OSM file"""
    setup_logging(args.verbose)

    if not os.path.exists(args.osm_file):
        logger.error(f"Input file not found: {args.osm_file}")
        return 1

    try:
        document = OSMParser.parse_file(args.osm_file)
        node_index = build_node_index(document.nodes)
        ways = []
        for way in document.ways:
            polygon = build_polygon(way, node_index)
            bounds = None
            if len(set(way.node_refs)) >= 3:
                min_lon, min_lat, max_lon, max_lat = polygon.to_shapely().bounds
                bounds = {"min_lat": min_lat, "min_lon": min_lon, "max_lat": max_lat, "max_lon": max_lon}
            ways.append({
                "id": way.id,
                "nodes": len(way.node_refs),
                "closed": bool(way.node_refs) and way.node_refs[0] == way.node_refs[-1],
                "tags": sorted(way.tags),
                "bounds": bounds
            })
    except (ConverterError, ValueError) as e:
        logger.error(f"Unable to inspect {args.osm_file}: {e}")
        return 1

    summary = {
        "generator": document.generator,
        "version": document.version,
        "nodes": len(document.nodes),
        "ways": ways,
        "relations": [
            {"id": relation.id, "members": len(relation.members), "tags": sorted(relation.tags)}
            for relation in document.relations
        ]
    }
    print(json.dumps(summary, indent=2, ensure_ascii=False))
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="OSM to NeTEx converter CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Convert fare zones:
    python cli.py convert --osm-file zones.osm --target-entity FareZone

  Convert tariff zones to a given file:
    python cli.py convert --osm-file zones.osm --target-entity TariffZone --output netex.xml

  Inspect an OSM file:
    python cli.py inspect --osm-file zones.osm
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Convert command
    convert_parser = subparsers.add_parser("convert", help="Convert an OSM file to NeTEx")
    convert_parser.add_argument("--osm-file", "-i", required=True, help="OSM file to convert from (.osm, .xml or Overpass .json)")
    convert_parser.add_argument("--target-entity", "-t", required=True,
                                help=f"Target entity. {', '.join(TargetEntity.names())}")
    convert_parser.add_argument("--output", "-o", help="NeTEx file name to write")
    convert_parser.set_defaults(func=cmd_convert)

    # Inspect command
    inspect_parser = subparsers.add_parser("inspect", help="Summarize the ways and relations of an OSM file")
    inspect_parser.add_argument("--osm-file", "-i", required=True, help="OSM file to inspect")
    inspect_parser.set_defaults(func=cmd_inspect)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

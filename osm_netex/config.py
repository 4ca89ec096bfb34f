"""
Configuration settings for the OSM to NeTEx converter
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class NetexConfig:
    """NeTEx output defaults"""
    # Version written on every zone, group and frame
    default_version: str = "1"

    # Site frame ids look like OSM:SiteFrame:<epoch millis>
    site_frame_id_prefix: str = "OSM"
    default_time_zone: str = "Europe/Paris"

    participant_ref: str = "osm_netex.cli.OsmToNetexApp"
    tool_url: str = "https://github.com/entur/osm-to-netex"
    publication_delivery_version: str = "1.0"

    # Date format of valid_from / valid_to tags
    validity_date_format: str = "%Y-%m-%d"

    # Separator used by list-valued tags (members, neighbours)
    list_separator: str = ";"


@dataclass
class ConverterConfig:
    """Converter configuration"""
    # Output settings
    output_dir: str = "output"
    output_timestamp_format: str = "%Y%m%d%H%M%S"

    # Input file suffixes read as Overpass JSON, everything else is OSM XML
    json_suffixes: List[str] = field(default_factory=lambda: [".json"])

    netex: NetexConfig = field(default_factory=NetexConfig)


# Global config instance
config = ConverterConfig()


def get_config() -> ConverterConfig:
    """Get global configuration"""
    return config


def validate_config(config: ConverterConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    if not config.output_dir:
        errors.append("output_dir is required in config but not set")

    if config.netex is None:
        errors.append("netex configuration is required but not set")
    else:
        if not config.netex.default_version:
            errors.append("netex.default_version is required but not set")
        if not config.netex.site_frame_id_prefix:
            errors.append("netex.site_frame_id_prefix is required but not set")
        if not config.netex.list_separator:
            errors.append("netex.list_separator is required but not set")
        if not config.netex.validity_date_format:
            errors.append("netex.validity_date_format is required but not set")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)

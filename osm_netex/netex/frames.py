"""
Site frame and publication delivery construction
"""

import socket
from datetime import datetime
from typing import Optional

from loguru import logger

from .models import SiteFrame, PublicationDelivery
from ..config import get_config, NetexConfig


def _hostname() -> str:
    try:
        return socket.gethostname()
    except OSError as e:
        logger.warning(f"Cannot detect hostname for this computer: {e}")
        return "unknown"


def create_site_frame(created: Optional[datetime] = None, config: Optional[NetexConfig] = None) -> SiteFrame:
    """
    Create an empty site frame

    The frame id carries the creation time in epoch milliseconds, e.g.
    OSM:SiteFrame:1612137600000.
    """
    config = config or get_config().netex
    created = created or datetime.now()
    millis = int(created.timestamp() * 1000)
    return SiteFrame(
        id=f"{config.site_frame_id_prefix}:SiteFrame:{millis}",
        version=config.default_version,
        created=created,
        default_time_zone=config.default_time_zone
    )


def create_publication_delivery(
    site_frame: SiteFrame,
    osm_input_file: str,
    timestamp: Optional[datetime] = None,
    config: Optional[NetexConfig] = None
) -> PublicationDelivery:
    """Wrap a site frame in a publication delivery"""
    config = config or get_config().netex
    description = (f"Generated by osm-to-netex on host : {_hostname()} "
                   f"from file {osm_input_file}. Tool: {config.tool_url}")
    return PublicationDelivery(
        version=config.publication_delivery_version,
        publication_timestamp=timestamp or datetime.now(),
        participant_ref=config.participant_ref,
        description=description,
        site_frame=site_frame
    )

"""
Converter errors

Every error raised while reading OSM input or mapping it to NeTEx derives
from ConverterError, so callers can catch one type.
"""

from typing import List, Optional


class ConverterError(Exception):
    """Base class for conversion failures"""


class OSMParseError(ConverterError, ValueError):
    """OSM input could not be read or is malformed"""


class UnknownTargetEntityError(ConverterError, ValueError):
    """Target entity selector does not name a supported zone type"""

    def __init__(self, selector: str, supported: List[str]):
        self.selector = selector
        self.supported = supported
        super().__init__(
            f"The target entity specified: {selector!r} is not a supported zone. "
            f"Use one of: {', '.join(supported)}"
        )


class UnresolvedNodeError(ConverterError, LookupError):
    """A way references a node id that is not in the input"""

    def __init__(self, way_id: int, node_id: int):
        self.way_id = way_id
        self.node_id = node_id
        super().__init__(f"Way {way_id} references unknown node {node_id}")

    def __str__(self) -> str:
        # LookupError would otherwise repr() the message
        return self.args[0]


class MissingTagError(ConverterError, ValueError):
    """A required tag is missing, empty or carries an invalid value"""

    def __init__(self, tag: str, detail: Optional[str] = None):
        self.tag = tag
        self.detail = detail
        message = f"Missing tag or tag value: {tag}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class TagValidationError(ConverterError, ValueError):
    """All tag errors found on one OSM entity, reported together"""

    def __init__(self, entity: str, entity_id: Optional[int], errors: List[MissingTagError]):
        self.entity = entity
        self.entity_id = entity_id
        self.errors = list(errors)
        details = "\n".join(f"  - {e}" for e in self.errors)
        super().__init__(
            f"Some required tags are missing on {entity} {entity_id}: "
            f"{', '.join(self.missing_tags)}\n{details}"
        )

    @property
    def missing_tags(self) -> List[str]:
        return [e.tag for e in self.errors]


class DuplicateZoneIdError(ConverterError, ValueError):
    """Two ways map to the same zone id"""

    def __init__(self, zone_id: str, first_way_id: int, second_way_id: int):
        self.zone_id = zone_id
        self.way_ids = (first_way_id, second_way_id)
        super().__init__(f"Zone id {zone_id} is produced by both way {first_way_id} and way {second_way_id}")

"""
Tag interpretation

Reads the free-form tags of a way or relation into typed values. Each
target entity has a rule table mapping a tag key (exact or prefix match)
to a handler; the first matching rule wins, so table order matters for
prefixes. Required tags per entity are listed in tables too, and are
checked after all tags were read.

Example fare zone way:
    <tag k='authorityRef' v='VOT:Authority:VTFK_ID' />
    <tag k='codespace' v='VOT' />
    <tag k='id' v='VOT:FareZone:19' />
    <tag k='members' v='NSR:StopPlace:16845;NSR:StopPlace:16848' />
    <tag k='name:nor' v='Kongsberg' />
    <tag k='neighbours' v='VOT:FareZone:17;VOT:FareZone:14' />
    <tag k='privateCode' v='630' />
    <tag k='scopingMethod' v='explicitStops' />
    <tag k='valid_from' v='2021-02-01' />
    <tag k='zoneTopology' v='tiled' />
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from .validation import TagErrorCollector
from ..config import get_config
from ..netex.models import (
    TargetEntity, ScopingMethod, ZoneTopology, MultilingualString, KeyValue, ValidBetween
)

CODESPACE = "codespace"
NAME = "name"
REFERENCE = "reference"
ZONE_TYPE = "zone_type"
VALID_FROM = "valid_from"
VALID_TO = "valid_to"
FARE_ZONE_ID = "id"
AUTHORITY_REF = "authorityRef"
MEMBERS = "members"
NEIGHBOURS = "neighbours"
PRIVATE_CODE = "privateCode"
SCOPING_METHOD = "scopingMethod"
ZONE_TOPOLOGY = "zoneTopology"
TZ_MAPPING = "tzMapping"
GROUP_OF_TARIFF_ZONES_ID = "GroupOfTariffZoneId"
PURPOSE_OF_GROUPING_REF = "PurposeOfGroupingRef"


@dataclass
class ZoneTags:
    """Values read from the tags of one way"""
    codespace: Optional[str] = None
    reference: Optional[str] = None
    zone_id: Optional[str] = None
    name: Optional[MultilingualString] = None
    private_code: Optional[str] = None
    authority_ref: Optional[str] = None
    scoping_method: Optional[ScopingMethod] = None
    zone_topology: Optional[ZoneTopology] = None
    members: Optional[List[str]] = None
    neighbours: Optional[List[str]] = None
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
    tz_mapping: Optional[str] = None
    key_values: List[KeyValue] = field(default_factory=list)

    def valid_between(self) -> Optional[ValidBetween]:
        """
        Validity interval from valid_from / valid_to

        A from/to interval needs both dates with to strictly after from;
        otherwise a parsed from date alone gives a from-only interval.
        """
        if self.valid_from is None:
            return None
        if self.valid_to is not None and self.valid_to > self.valid_from:
            logger.debug("Set validity from and to date")
            return ValidBetween(from_date=self.valid_from, to_date=self.valid_to)
        logger.debug("Set validity only from date")
        return ValidBetween(from_date=self.valid_from)


@dataclass
class GroupTags:
    """Values read from the tags of one relation"""
    group_id: Optional[str] = None
    name: Optional[MultilingualString] = None
    private_code: Optional[str] = None
    purpose_of_grouping_ref: Optional[str] = None


Handler = Callable[[object, str, str, TagErrorCollector], None]


@dataclass(frozen=True)
class TagRule:
    """Dispatch entry: which tag keys a handler reads"""
    key: str
    handler: Handler
    prefix: bool = False

    def matches(self, tag_key: str) -> bool:
        if self.prefix:
            return tag_key.startswith(self.key)
        return tag_key == self.key


def extract_lang(tag_key: str) -> Optional[str]:
    """Language suffix of a key such as name:nor, or None for a bare key"""
    _, separator, lang = tag_key.rpartition(":")
    if not separator or not lang:
        return None
    return lang


def split_list(value: str) -> Optional[List[str]]:
    """Split a separated list value, None when nothing is left"""
    separator = get_config().netex.list_separator
    items = [item.strip() for item in value.split(separator) if item.strip()]
    return items or None


def parse_date(tag_key: str, value: Optional[str]) -> Optional[datetime]:
    try:
        return datetime.strptime((value or "").strip(), get_config().netex.validity_date_format)
    except ValueError as e:
        logger.info(f"Unable to parse and set {tag_key} date: {e}")
        return None


# ============================================================
# Handlers
# ============================================================

def _codespace(values, key, value, errors):
    values.codespace = value


def _name(values, key, value, errors):
    if value is None:
        return
    values.name = MultilingualString(value=value, lang=extract_lang(key))


def _reference(values, key, value, errors):
    values.reference = value


def _fare_zone_id(values, key, value, errors):
    values.zone_id = value


def _private_code(values, key, value, errors):
    values.private_code = value


def _zone_type(values, key, value, errors):
    errors.require(ZONE_TYPE, value)
    if value:
        values.key_values.append(KeyValue(key=key, value=value))


def _authority_ref(values, key, value, errors):
    errors.require(AUTHORITY_REF, value)
    values.authority_ref = value


def _scoping_method(values, key, value, errors):
    try:
        values.scoping_method = ScopingMethod(value)
    except ValueError:
        errors.add(SCOPING_METHOD, f"unknown value {value!r}")


def _zone_topology(values, key, value, errors):
    try:
        values.zone_topology = ZoneTopology(value)
    except ValueError:
        errors.add(ZONE_TOPOLOGY, f"unknown value {value!r}")


def _members(values, key, value, errors):
    errors.require(MEMBERS, value)
    if value:
        values.members = split_list(value)


def _neighbours(values, key, value, errors):
    errors.require(NEIGHBOURS, value)
    if value:
        values.neighbours = split_list(value)


def _valid_from(values, key, value, errors):
    values.valid_from = parse_date(key, value)


def _valid_to(values, key, value, errors):
    values.valid_to = parse_date(key, value)


def _tz_mapping(values, key, value, errors):
    values.tz_mapping = value


def _group_id(values, key, value, errors):
    values.group_id = value


def _purpose_of_grouping_ref(values, key, value, errors):
    values.purpose_of_grouping_ref = value


# ============================================================
# Rule tables
# ============================================================

ZONE_RULES: Tuple[TagRule, ...] = (
    TagRule(CODESPACE, _codespace),
    TagRule(NAME, _name, prefix=True),
    TagRule(REFERENCE, _reference),
    TagRule(ZONE_TYPE, _zone_type, prefix=True),
    TagRule(VALID_FROM, _valid_from),
    TagRule(VALID_TO, _valid_to),
)

FARE_ZONE_RULES: Tuple[TagRule, ...] = (
    TagRule(CODESPACE, _codespace),
    TagRule(NAME, _name, prefix=True),
    TagRule(AUTHORITY_REF, _authority_ref, prefix=True),
    TagRule(PRIVATE_CODE, _private_code, prefix=True),
    TagRule(ZONE_TOPOLOGY, _zone_topology, prefix=True),
    TagRule(SCOPING_METHOD, _scoping_method, prefix=True),
    TagRule(MEMBERS, _members, prefix=True),
    TagRule(NEIGHBOURS, _neighbours, prefix=True),
    TagRule(VALID_FROM, _valid_from),
    TagRule(VALID_TO, _valid_to),
    TagRule(FARE_ZONE_ID, _fare_zone_id),
    TagRule(TZ_MAPPING, _tz_mapping, prefix=True),
)

GROUP_RULES: Tuple[TagRule, ...] = (
    TagRule(GROUP_OF_TARIFF_ZONES_ID, _group_id),
    TagRule(NAME, _name, prefix=True),
    TagRule(PRIVATE_CODE, _private_code, prefix=True),
    TagRule(PURPOSE_OF_GROUPING_REF, _purpose_of_grouping_ref, prefix=True),
)

RULES_BY_TARGET: Dict[TargetEntity, Tuple[TagRule, ...]] = {
    TargetEntity.TARIFF_ZONE: ZONE_RULES,
    TargetEntity.TOPOGRAPHIC_PLACE: ZONE_RULES,
    TargetEntity.FARE_ZONE: FARE_ZONE_RULES,
}

# (tag key, attribute) pairs that must hold a value once all tags are read
REQUIRED_ZONE_TAGS: Dict[TargetEntity, Tuple[Tuple[str, str], ...]] = {
    TargetEntity.TARIFF_ZONE: ((CODESPACE, "codespace"), (REFERENCE, "reference")),
    TargetEntity.TOPOGRAPHIC_PLACE: ((CODESPACE, "codespace"), (REFERENCE, "reference")),
    TargetEntity.FARE_ZONE: ((CODESPACE, "codespace"), (FARE_ZONE_ID, "zone_id"), (PRIVATE_CODE, "private_code")),
}

REQUIRED_GROUP_TAGS: Tuple[Tuple[str, str], ...] = ((GROUP_OF_TARIFF_ZONES_ID, "group_id"),)


# ============================================================
# Interpretation
# ============================================================

def find_rule(rules: Sequence[TagRule], tag_key: str) -> Optional[TagRule]:
    for rule in rules:
        if rule.matches(tag_key):
            return rule
    return None


def _apply_rules(values, tags: Mapping[str, str], rules: Sequence[TagRule], errors: TagErrorCollector):
    for key, value in tags.items():
        rule = find_rule(rules, key)
        if rule is None:
            logger.debug(f"Ignoring tag {key}={value} on {errors.entity} {errors.entity_id}")
            continue
        rule.handler(values, key, value, errors)
    return values


def check_required(values, required: Sequence[Tuple[str, str]], errors: TagErrorCollector) -> None:
    for tag, attribute in required:
        errors.require(tag, getattr(values, attribute))


def interpret_zone_tags(
    tags: Mapping[str, str],
    target: TargetEntity,
    errors: TagErrorCollector
) -> ZoneTags:
    """
    Read way tags for a zone of the given target entity

    Tag errors and missing required tags are added to errors; the caller
    decides when to raise them.
    """
    values = _apply_rules(ZoneTags(), tags, RULES_BY_TARGET[target], errors)
    check_required(values, REQUIRED_ZONE_TAGS[target], errors)
    return values


def interpret_group_tags(tags: Mapping[str, str], errors: TagErrorCollector) -> GroupTags:
    """Read relation tags for a group of tariff zones"""
    values = _apply_rules(GroupTags(), tags, GROUP_RULES, errors)
    check_required(values, REQUIRED_GROUP_TAGS, errors)
    return values

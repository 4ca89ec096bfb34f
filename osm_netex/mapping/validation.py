"""
Required tag checks with aggregated error reporting

Errors for one entity are collected while its tags are read and raised
together, so a malformed way or relation is reported in full at once.
"""

from typing import Any, List, Optional

from ..exceptions import MissingTagError, TagValidationError


class TagErrorCollector:
    """Collects tag errors for a single OSM entity"""

    def __init__(self, entity: str, entity_id: Optional[int]):
        self.entity = entity
        self.entity_id = entity_id
        self.errors: List[MissingTagError] = []

    def __bool__(self) -> bool:
        return bool(self.errors)

    def add(self, tag: str, detail: Optional[str] = None) -> None:
        self.errors.append(MissingTagError(tag, detail))

    def require(self, tag: str, value: Any) -> None:
        """Record an error if value is missing or blank"""
        if value is None or (isinstance(value, str) and not value.strip()):
            self.add(tag)

    def raise_if_any(self) -> None:
        if self.errors:
            raise TagValidationError(self.entity, self.entity_id, self.errors)

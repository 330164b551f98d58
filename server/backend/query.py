"""Filter predicates understood by the backend document database."""

import json
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class Query:
    """
    A single list-documents predicate.

    Serialises to the backend's JSON query format, e.g.
    {"method": "equal", "attribute": "type", "values": ["image"]}.
    Nested predicates (for "or") are kept as Query objects in values.
    """
    method: str
    attribute: Optional[str] = None
    values: Tuple[Any, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        data: dict = {"method": self.method}
        if self.attribute is not None:
            data["attribute"] = self.attribute
        if self.values:
            data["values"] = [
                value.to_dict() if isinstance(value, Query) else value
                for value in self.values
            ]
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @staticmethod
    def equal(attribute: str, values) -> "Query":
        return Query("equal", attribute, _as_tuple(values))

    @staticmethod
    def contains(attribute: str, values) -> "Query":
        return Query("contains", attribute, _as_tuple(values))

    @staticmethod
    def or_(queries) -> "Query":
        return Query("or", None, tuple(queries))

    @staticmethod
    def limit(value: int) -> "Query":
        return Query("limit", None, (value,))

    @staticmethod
    def offset(value: int) -> "Query":
        return Query("offset", None, (value,))

    @staticmethod
    def order_asc(attribute: str) -> "Query":
        return Query("orderAsc", attribute)

    @staticmethod
    def order_desc(attribute: str) -> "Query":
        return Query("orderDesc", attribute)


def _as_tuple(values) -> tuple:
    if isinstance(values, (list, tuple, set, frozenset)):
        return tuple(values)
    return (values,)

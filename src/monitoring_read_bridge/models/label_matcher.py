"""
LabelMatcher model representing a single Prometheus label selector.
"""

from dataclasses import dataclass
from enum import Enum


class MatchType(Enum):
    """
    Label matcher operator kinds.

    Values mirror the remote read protocol enum, so numeric types decoded
    from a read request map directly onto members.
    """

    EQUAL = 0
    NOT_EQUAL = 1
    REGEX_MATCH = 2
    REGEX_NO_MATCH = 3

    @property
    def is_regex(self) -> bool:
        """Whether the matcher value is a regular expression."""
        return self in (MatchType.REGEX_MATCH, MatchType.REGEX_NO_MATCH)

    @property
    def operator(self) -> str:
        """PromQL operator for this match type."""
        return _OPERATORS[self]

    @classmethod
    def parse(cls, value: "MatchType | str | int") -> "MatchType":
        """
        Resolve a match type from an enum member, name, PromQL operator or wire value.

        Args:
            value: e.g. MatchType.EQUAL, "EQ", "REGEX_MATCH", "=~" or 2.

        Returns:
            MatchType member.

        Raises:
            ValueError: If the value does not name a match type.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)

        normalized = str(value).strip()
        for member, operator in _OPERATORS.items():
            if normalized == operator:
                return member

        normalized = normalized.upper()
        if normalized in _ALIASES:
            return _ALIASES[normalized]
        try:
            return cls[normalized]
        except KeyError:
            raise ValueError(f"Unknown label matcher type: {value!r}") from None


_OPERATORS = {
    MatchType.EQUAL: "=",
    MatchType.NOT_EQUAL: "!=",
    MatchType.REGEX_MATCH: "=~",
    MatchType.REGEX_NO_MATCH: "!~",
}

_ALIASES = {
    "EQ": MatchType.EQUAL,
    "NEQ": MatchType.NOT_EQUAL,
    "RE": MatchType.REGEX_MATCH,
    "NRE": MatchType.REGEX_NO_MATCH,
}


@dataclass(frozen=True)
class LabelMatcher:
    """
    A single label matcher from a remote read query.

    Attributes:
        name: Label name to match (e.g. "__name__", "resource_labels_zone").
        value: Literal value, or pattern text for regex match types.
        type: Operator kind.
    """

    name: str
    value: str
    type: MatchType = MatchType.EQUAL

    def __str__(self) -> str:
        return f'{self.name}{self.type.operator}"{self.value}"'

    def to_dict(self) -> dict:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary with name, value and type name.
        """
        return {
            "name": self.name,
            "value": self.value,
            "type": self.type.name
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LabelMatcher":
        """
        Create LabelMatcher from dictionary.

        Args:
            data: Dictionary with name, value and optional type keys.

        Returns:
            LabelMatcher instance.
        """
        return cls(
            name=data["name"],
            value=data.get("value", ""),
            type=MatchType.parse(data.get("type", MatchType.EQUAL))
        )

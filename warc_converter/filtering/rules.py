# ==============================================
# Filter Rules (Data Classes)
# ==============================================
#
# PURPOSE:
#   One configured predicate over a document field.
#
# ENUMS:
# ------
# - RuleMode(Enum): MUST_MATCH ("mustMatch"), MUST_NOT_MATCH ("mustNotMatch")
#
# CLASSES:
# --------
# - FilterRule (frozen dataclass)
#     - name: str                    → Label used in logs and errors
#     - field: str                   → "url", "contentType" or a metadata key
#     - mode: RuleMode
#     - pattern: re.Pattern          → Applied with search()
#     - allow_missing: bool | None   → Result when the field is absent.
#                                      None = reject for MUST_MATCH,
#                                      keep for MUST_NOT_MATCH
#
#     Methods:
#     --------
#     - passes(document) -> bool
#     - from_dict(data: dict, index: int) -> FilterRule  (classmethod)
#     - to_dict() -> dict
#
# ==============================================

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


URL_FIELD = "url"
CONTENT_TYPE_FIELD = "contentType"


class FilterConfigError(ValueError):
    """Raised when the filter configuration cannot be turned into rules."""


class RuleMode(Enum):
    MUST_MATCH = "mustMatch"
    MUST_NOT_MATCH = "mustNotMatch"

    @classmethod
    def parse(cls, value: str) -> "RuleMode":
        for mode in cls:
            if value == mode.value or str(value).upper() == mode.name:
                return mode
        allowed = ", ".join(mode.value for mode in cls)
        raise FilterConfigError(f"Unknown rule mode {value!r} (expected one of: {allowed})")


@dataclass(frozen=True)
class FilterRule:
    name: str
    field: str
    mode: RuleMode
    pattern: "re.Pattern"
    allow_missing: Optional[bool] = None

    def field_value(self, document) -> Optional[str]:
        """Read the configured field from a NormalizedDocument."""
        if self.field == URL_FIELD:
            return document.url
        if self.field == CONTENT_TYPE_FIELD:
            return document.content_type
        return document.metadata.get(self.field)

    def passes(self, document) -> bool:
        value = self.field_value(document)
        if value is None:
            if self.allow_missing is not None:
                return self.allow_missing
            return self.mode is RuleMode.MUST_NOT_MATCH

        matched = self.pattern.search(value) is not None
        if self.mode is RuleMode.MUST_MATCH:
            return matched
        return not matched

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "name": self.name,
            "field": self.field,
            "mode": self.mode.value,
            "pattern": self.pattern.pattern,
        }
        if self.allow_missing is not None:
            data["allow_missing"] = self.allow_missing
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], index: int = 0) -> "FilterRule":
        """
        Build a rule from its configuration mapping.

        Args:
            data: {"name", "field", "mode", "pattern", "allow_missing"}
            index: Position in the rule list, used for the default name

        Returns:
            A compiled FilterRule

        Raises:
            FilterConfigError: Missing keys, unknown mode or invalid regex
        """
        if not isinstance(data, dict):
            raise FilterConfigError(f"Rule #{index} must be a mapping, got {type(data).__name__}")

        name = str(data.get("name") or f"rule-{index}")
        field = data.get("field")
        if not field or not isinstance(field, str):
            raise FilterConfigError(f"Rule '{name}' is missing 'field'")

        pattern = data.get("pattern")
        if pattern is None or not isinstance(pattern, str):
            raise FilterConfigError(f"Rule '{name}' is missing 'pattern'")
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise FilterConfigError(f"Rule '{name}' has an invalid pattern {pattern!r}: {e}") from e

        allow_missing = data.get("allow_missing")
        if allow_missing is not None and not isinstance(allow_missing, bool):
            raise FilterConfigError(f"Rule '{name}': 'allow_missing' must be true or false")

        return cls(
            name=name,
            field=field,
            mode=RuleMode.parse(data.get("mode", RuleMode.MUST_MATCH.value)),
            pattern=compiled,
            allow_missing=allow_missing,
        )

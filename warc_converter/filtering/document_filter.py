# ==============================================
# DocumentFilter
# ==============================================
#
# PURPOSE:
#   Decide whether a NormalizedDocument is written to the output.
#
# CLASS: DocumentFilter
# ---------------------
#   Built once per job from configuration, then only read.
#   Safe to share between worker threads.
#
#   Constructor:
#   ------------
#   - __init__(rules: list[FilterRule] = (), max_content_length: int | None = None)
#
#   Methods:
#   --------
#   - keep(document) -> bool
#       True iff every rule passes and the body is within
#       max_content_length (when set). No rules => always True.
#
#   - from_config(config: dict) -> DocumentFilter  (classmethod)
#   - from_file(path) -> DocumentFilter            (classmethod)
#       Raise FilterConfigError before any record is processed.
#
# CONFIGURATION FORMAT (JSON):
# ----------------------------
#   {
#     "max_content_length": 1048576,
#     "rules": [
#       {"name": "html-only", "field": "contentType",
#        "mode": "mustMatch", "pattern": "^text/html"},
#       {"name": "no-errors", "field": "Status",
#        "mode": "mustNotMatch", "pattern": "^5", "allow_missing": true}
#     ]
#   }
#
# ==============================================

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from .rules import FilterConfigError, FilterRule


logger = logging.getLogger(__name__)


class DocumentFilter:
    """Conjunction of FilterRules plus an optional body size limit."""

    def __init__(self, rules: Iterable[FilterRule] = (), max_content_length: Optional[int] = None):
        self._rules: Tuple[FilterRule, ...] = tuple(rules)
        if max_content_length is not None and max_content_length < 0:
            max_content_length = None
        self._max_content_length = max_content_length

    @property
    def rules(self) -> Tuple[FilterRule, ...]:
        return self._rules

    @property
    def max_content_length(self) -> Optional[int]:
        return self._max_content_length

    def keep(self, document) -> bool:
        """
        Evaluate the document against every configured rule.

        Args:
            document: NormalizedDocument to check

        Returns:
            True if the document should be kept
        """
        if self._max_content_length is not None and len(document.content) > self._max_content_length:
            logger.debug("Rejected %s: content length %d > %d",
                         document.url, len(document.content), self._max_content_length)
            return False

        for rule in self._rules:
            if not rule.passes(document):
                logger.debug("Rejected %s by rule '%s'", document.url, rule.name)
                return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "max_content_length": self._max_content_length,
            "rules": [rule.to_dict() for rule in self._rules],
        }

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]]) -> "DocumentFilter":
        """
        Build a filter from a configuration mapping.

        Args:
            config: Mapping with optional "rules" and "max_content_length".
                None or {} gives a filter that keeps everything.

        Returns:
            A ready-to-use DocumentFilter

        Raises:
            FilterConfigError: If any part of the configuration is invalid
        """
        if not config:
            return cls()
        if not isinstance(config, dict):
            raise FilterConfigError(f"Filter configuration must be a mapping, got {type(config).__name__}")

        raw_rules = config.get("rules") or []
        if not isinstance(raw_rules, list):
            raise FilterConfigError("'rules' must be a list")
        rules = [FilterRule.from_dict(rule, index) for index, rule in enumerate(raw_rules)]

        max_length = config.get("max_content_length")
        if max_length is not None:
            if isinstance(max_length, bool) or not isinstance(max_length, int):
                raise FilterConfigError(f"'max_content_length' must be an integer, got {max_length!r}")

        logger.info("Document filter configured with %d rule(s)", len(rules))
        return cls(rules, max_content_length=max_length)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "DocumentFilter":
        """Load the JSON filter configuration stored at ``path``."""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except OSError as e:
            raise FilterConfigError(f"Cannot read filter configuration {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise FilterConfigError(f"Filter configuration {path} is not valid JSON: {e}") from e
        return cls.from_config(config)

# ==============================================
# TOPIC 3: DOCUMENT FILTERING
# ==============================================
#
# This package decides whether a normalized document is kept.
#
# Two-step process:
#   Step 1 (Configuration): Build FilterRule objects once per job,
#                           failing fast on bad patterns
#   Step 2 (Evaluation):    keep(document) = AND over all rules
#
# Modules:
# --------
# - rules.py           → RuleMode, FilterRule, FilterConfigError
# - document_filter.py → DocumentFilter
#
# ==============================================

from .rules import FilterConfigError, FilterRule, RuleMode
from .document_filter import DocumentFilter

__all__ = ["FilterConfigError", "FilterRule", "RuleMode", "DocumentFilter"]

"""Operator-facing reporting: one-line notices and Rich pass tables."""

from diskforge.reporting.notices import OUTCOME_LABELS, format_notice
from diskforge.reporting.renderer import PassRenderer

__all__ = ["OUTCOME_LABELS", "PassRenderer", "format_notice"]

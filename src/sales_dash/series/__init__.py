"""Series-level views for sales charts and stat cards."""

from .views import (
    SeriesSet,
    StatCard,
    SummaryRanking,
    build_series,
    build_stat_cards,
    build_summary,
    summarize,
    truncate_label,
)

__all__ = [
    "SeriesSet",
    "StatCard",
    "SummaryRanking",
    "build_series",
    "build_stat_cards",
    "build_summary",
    "summarize",
    "truncate_label",
]

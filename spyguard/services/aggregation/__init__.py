"""Result aggregation."""

from .service import (
    ScanSummary,
    category_label,
    group_by_category,
    group_by_layer,
    layer_description,
    risk_label,
    summarize,
    threats_only,
)

__all__ = [
    "ScanSummary",
    "category_label",
    "group_by_category",
    "group_by_layer",
    "layer_description",
    "risk_label",
    "summarize",
    "threats_only",
]

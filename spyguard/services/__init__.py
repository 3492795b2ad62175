"""Services package for SpyGuard."""

from .aggregation import ScanSummary, group_by_category, group_by_layer, layer_description, summarize
from .classification import ClassificationService

__all__ = [
    "ClassificationService",
    "ScanSummary",
    "group_by_category",
    "group_by_layer",
    "layer_description",
    "summarize",
]

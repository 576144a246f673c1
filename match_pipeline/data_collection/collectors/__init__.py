"""
Data Collection Collectors Package

Enthält die Seeding-Quellen: CSV-Export der externen Datenquelle und gebündelte Beispieldaten.
"""

from .base import MatchCollector
from .sample_collector import SampleMatchCollector, filter_by_sport
from .tabular_collector import MATCH_EXPORT_SCHEMA, TabularExportCollector

__all__ = [
    "MatchCollector",
    "SampleMatchCollector",
    "TabularExportCollector",
    "MATCH_EXPORT_SCHEMA",
    "filter_by_sport",
]

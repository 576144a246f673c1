"""
Analytics Package für die Match Pipeline

Enthält die Statistik-Aggregation über Match-Sammlungen.
"""

from .engine import AnalyticsEngine, compute_all_sports_stats, compute_stats_for_sport

__all__ = ["AnalyticsEngine", "compute_stats_for_sport", "compute_all_sports_stats"]

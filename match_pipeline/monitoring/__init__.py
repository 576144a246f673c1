"""
Monitoring Package für die Match Pipeline

Enthält die Prometheus Metriken.
"""

from .prometheus_metrics import PipelineMetrics

__all__ = ["PipelineMetrics"]

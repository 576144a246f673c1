"""
Apps Package
Anwendungsklassen, die die Pipeline-Komponenten verdrahten
"""

from .pipeline_app import MatchPipelineApp

__all__ = ["MatchPipelineApp"]

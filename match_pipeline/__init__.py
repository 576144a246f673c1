"""
Match Pipeline
Seeding, Integritätsprüfung und Statistiken für Match-Daten
"""

__version__ = "1.0.0"
__author__ = "Sports Data Team"

# NOTE:
# Avoid importing configuration or database modules at package import time to
# keep "import match_pipeline" lightweight and side-effect free for unit tests.

__all__ = []

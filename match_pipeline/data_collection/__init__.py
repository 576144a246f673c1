"""
Data Collection Module
Collectors, Integritätsprüfung, Seeding und Abfragen für Match-Daten

Note: do not import subpackages here to keep package import side-effect free.
Import needed classes directly from their modules.
"""

__all__: list[str] = []

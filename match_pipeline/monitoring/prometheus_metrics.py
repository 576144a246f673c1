"""
Prometheus Metrics für die Match Pipeline

Zählt Seeding-Versuche, Purges und Fallback-Auslieferungen.
"""

import logging

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
    start_http_server,
)

from match_pipeline import __version__
from match_pipeline.core.config import Settings

SEED_STATE_CODES = {
    "pending": 0,
    "unseeded": 1,
    "seeded": 2,
    "healed": 3,
    "degraded": 4,
}


class PipelineMetrics:
    """Prometheus Metriken für Seeding, Integrität und Abfragen"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.logger = logging.getLogger("prometheus_metrics")

        # Eigene Registry, damit mehrere Instanzen (Tests) sich nicht in die Quere kommen
        self.registry = CollectorRegistry()

        self.api_requests_total = Counter(
            "api_requests_total",
            "Total number of API requests",
            ["method", "endpoint", "status"],
            registry=self.registry,
        )

        self.api_request_duration = Histogram(
            "api_request_duration_seconds",
            "API request duration in seconds",
            ["method", "endpoint"],
            registry=self.registry,
        )

        self.seed_attempts_total = Counter(
            "seed_attempts_total",
            "Seeding attempts by outcome",
            ["outcome"],
            registry=self.registry,
        )

        self.seed_rows_inserted_total = Counter(
            "seed_rows_inserted_total",
            "Match rows inserted by seeding source",
            ["source"],
            registry=self.registry,
        )

        self.integrity_purges_total = Counter(
            "integrity_purges_total",
            "Purges triggered by the integrity auditor",
            registry=self.registry,
        )

        self.fallback_served_total = Counter(
            "fallback_served_total",
            "Queries answered from the bundled sample data",
            ["reason"],
            registry=self.registry,
        )

        self.seed_state = Gauge(
            "seed_state",
            "Current seeding state (0=pending 1=unseeded 2=seeded 3=healed 4=degraded)",
            registry=self.registry,
        )

        self.app_info = Info(
            "match_pipeline_info",
            "Match pipeline application info",
            registry=self.registry,
        )
        self.app_info.info({"version": __version__, "environment": self.settings.environment})

    def start_metrics_server(self, port: int = 8008):
        """Startet Prometheus Metrics HTTP Server"""
        try:
            start_http_server(port, registry=self.registry)
            self.logger.info(f"Prometheus metrics server started on port {port}")
        except Exception as e:
            self.logger.error(f"Failed to start metrics server: {e}")
            raise

    def record_api_request(self, method: str, endpoint: str, status: str, duration: float):
        self.api_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()
        self.api_request_duration.labels(method=method, endpoint=endpoint).observe(duration)

    def record_seed_attempt(self, outcome: str):
        self.seed_attempts_total.labels(outcome=outcome).inc()

    def record_rows_inserted(self, source: str, rows: int):
        if rows > 0:
            self.seed_rows_inserted_total.labels(source=source).inc(rows)

    def record_purge(self):
        self.integrity_purges_total.inc()

    def record_fallback(self, reason: str):
        self.fallback_served_total.labels(reason=reason).inc()

    def set_seed_state(self, state):
        value = getattr(state, "value", state)
        self.seed_state.set(SEED_STATE_CODES.get(value, 0))

    def export(self) -> bytes:
        """Metriken im Prometheus-Textformat"""
        return generate_latest(self.registry)

"""
FastAPI Application Main
Schlanke HTTP-Schicht über der Match Pipeline
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST

from match_pipeline import __version__
from match_pipeline.api.models import HealthResponse
from match_pipeline.apps.pipeline_app import MatchPipelineApp
from match_pipeline.core.config import Settings


def create_fastapi_app(settings: Optional[Settings] = None, pipeline: Optional[MatchPipelineApp] = None) -> FastAPI:
    """Factory function to create the FastAPI app.

    The pipeline is attached to ``app.state`` right away; database connection and
    the seeding task are started in the lifespan.
    """
    settings = settings or Settings()
    pipeline = pipeline or MatchPipelineApp(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application Lifespan Management"""
        logger = logging.getLogger(__name__)
        logger.info("Starting Match Pipeline API")
        await pipeline.initialize()
        pipeline.start_seeding()
        logger.info("Application startup complete")
        yield
        logger.info("Shutting down application")
        await pipeline.cleanup()

    app = FastAPI(
        title="Match Pipeline API",
        description="Match corpus seeding, integrity audit and statistics",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.pipeline = pipeline
    app.state.settings = settings

    # CORS Middleware (tighten in non-development)
    cors_origins = settings.cors_origins
    if settings.environment != "development":
        cors_origins = [o for o in cors_origins if o != "*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def metrics_http_middleware(request: Request, call_next):
        start = time.time()
        status = "500"
        try:
            response = await call_next(request)
            status = str(response.status_code)
            return response
        finally:
            if settings.enable_metrics:
                pipeline.metrics.record_api_request(
                    method=request.method,
                    endpoint=request.url.path,
                    status=status,
                    duration=time.time() - start,
                )

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Basic health check endpoint"""
        return {"status": "ok", **(await pipeline.get_status())}

    @app.get("/metrics", response_class=PlainTextResponse)
    async def metrics():
        return PlainTextResponse(pipeline.metrics.export(), media_type=CONTENT_TYPE_LATEST)

    from match_pipeline.api.router import api_router
    app.include_router(api_router, prefix="/api")

    return app

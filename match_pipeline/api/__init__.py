"""
API Module
FastAPI Anwendung, Endpoints und Models
"""

from .main import create_fastapi_app

__all__ = ["create_fastapi_app"]

"""
API Models
Pydantic Models für API Requests und Responses
"""

from typing import Any, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    supported: Optional[list[str]] = None


class SportOption(BaseModel):
    id: str
    label: str


class HealthResponse(BaseModel):
    status: str
    store: str
    seed_state: str
    seed_attempts: int
    database: dict[str, Any] = {}

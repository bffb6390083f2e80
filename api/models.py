"""
Pydantic models for API request/response validation.
Auto-generates OpenAPI documentation.

Domain payloads (ReitSnapshot, ValuationResult, ...) are served as-is from
the top-level models module; the models here cover request bodies and the
envelope responses only.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ValuationRequest(BaseModel):
    """Assumptions for a DDM valuation (decimals, 0.08 = 8%)."""
    model_config = ConfigDict(populate_by_name=True)

    discount_rate: float = Field(alias="discountRate")
    growth_rate: float = Field(alias="growthRate")


class ErrorResponse(BaseModel):
    """Error response."""
    error: str


class StatsResponse(BaseModel):
    """Data store statistics."""
    total_reits: int
    total_sectors: int
    reits_with_history: int


class HealthResponse(BaseModel):
    """API health check response."""
    service: str
    version: str
    status: str
    snapshot_file: Optional[str] = None
    history_file: Optional[str] = None
    stats: StatsResponse

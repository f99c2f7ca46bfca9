"""
Gateway API schemas.
Type-safe contracts for the gateway endpoints.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


# ============================================================================
# Health Check
# ============================================================================

class ServiceStatus(BaseModel):
    """Status of a downstream service."""
    name: str
    url: str
    status: str  # "online", "offline"
    response_time_ms: Optional[float] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str  # "healthy", "degraded", "unhealthy"
    version: str
    services: Optional[List[ServiceStatus]] = None


# ============================================================================
# Nutrition Edit
# ============================================================================

class NutritionEditRequest(BaseModel):
    """
    Request to look up a food and rescale it to a new serving weight.

    Both fields are optional at the schema level so the endpoint can report
    missing values with its own 400 responses.
    """
    newName: Optional[str] = Field(default=None, description="Food name, underscores allowed")
    updatedData: Optional[float] = Field(default=None, description="Target serving weight in grams")


# ============================================================================
# File Management
# ============================================================================

# GET /api/images returns a bare JSON array of filenames.
ImageList = List[str]

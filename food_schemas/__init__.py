"""
API schemas for the food volume gateway.
Provides type-safe contracts for the HTTP endpoints.
"""

__version__ = "1.0.0"

# Export commonly used schemas
from food_schemas.common import *  # noqa: F403, F401
from food_schemas.gateway import *  # noqa: F403, F401

"""
API Routes module.

Contains all API endpoint routers.
"""

from tutor_ai.api.routes import ai_provider, health

__all__ = ["ai_provider", "health"]

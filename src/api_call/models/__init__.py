"""Models module initialization"""

from api_call.models.response import Response

__all__ = ["Response"]

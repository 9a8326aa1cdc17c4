"""Services module for LinguaRoute"""

from .base_service import BaseService

__all__ = ["BaseService"]

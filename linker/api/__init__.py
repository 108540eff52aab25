"""HTTP layer: request/response models and the link routes."""
from .routes import router

__all__ = ["router"]

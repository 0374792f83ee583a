"""API package for the OceanEye identification service."""
from oceaneye.api.identify import router as identify_router

__all__ = [
    "identify_router",
]

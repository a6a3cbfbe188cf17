"""API layer for the course structure and vod endpoints of the gaodun gateway."""

from .gateway import Gateway
from .study_api import StudyAPI
from .vod_api import VodAPI

__all__ = ["Gateway", "StudyAPI", "VodAPI"]

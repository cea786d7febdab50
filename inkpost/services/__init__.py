from inkpost.services.auth import AuthService
from inkpost.services.image import ImageService
from inkpost.services.query import QueryEngine

__all__ = ["AuthService", "ImageService", "QueryEngine"]

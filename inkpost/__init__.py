from inkpost.main import app

__all__ = ["app"]

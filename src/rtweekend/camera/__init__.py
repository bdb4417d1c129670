"""Camera module."""

from .camera import Camera, CameraConfig

__all__ = ["Camera", "CameraConfig"]

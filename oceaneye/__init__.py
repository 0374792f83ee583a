"""OceanEye: identify a fish from a photo by exact image-digest lookup."""

__version__ = "0.1.0"

"""Vector, quaternion and matrix maths for XR rendering, with file, image and debug helpers."""

__version__ = "0.1.0"
__all__ = ["vector", "matrix", "views", "files", "debug"]
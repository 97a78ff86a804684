"""Vectors, matrices, quaternions, bounding volumes, TXF fonts and textured-font layout."""

__version__ = "0.1.0"
__all__ = ["errors", "vec", "matrix", "quat", "bounds", "texture", "txf", "font"]
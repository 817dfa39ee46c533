"""
ogutils - CGCS2000 coordinate systems and geometry reprojection.

This package resolves CGCS2000 geographic and Gauss-Kruger zone WKIDs to
coordinate reference systems and reprojects geometries and whole layers
between them.
"""

__version__ = "0.1.0"

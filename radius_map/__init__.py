"""Radius map: radius circles, their intersections and map framing."""

__version__ = "1.0.0"

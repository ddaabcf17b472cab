"""Shapes API adapters — completions gateway and image probe."""

from shapebridge.adapters.shapes.gateway import ShapeGateway
from shapebridge.adapters.shapes.image_probe import HttpImageProbe

__all__ = ["ShapeGateway", "HttpImageProbe"]

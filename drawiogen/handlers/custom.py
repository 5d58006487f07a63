from __future__ import annotations

from ..handler_registry import register
from ..models import Connection, Node, list_field
from ..renderer import DrawioWriter
from .network import place


@register("custom")
class CustomDiagramHandler:
    @staticmethod
    def render(data, out: DrawioWriter) -> None:
        shapes = [Node.from_dict(raw, f"shapes[{i}]", strict=True)
                  for i, raw in enumerate(list_field(data, "shapes", "custom"))]
        connectors = [Connection.from_dict(raw, f"connectors[{i}]")
                      for i, raw in enumerate(list_field(data, "connectors", "custom", required=False))]
        place(shapes, connectors, out)

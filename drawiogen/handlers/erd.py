from __future__ import annotations
import logging
from typing import Any, Dict, Mapping

from ..handler_registry import register
from ..models import Connection, Entity, list_field
from ..renderer import DrawioWriter

logger = logging.getLogger(__name__)

START_X = 100
START_Y = 100
ENTITY_WIDTH = 160
HEADER_HEIGHT = 30
ATTRIBUTE_HEIGHT = 26
SPACING_X = 250
SPACING_Y = 200
PER_ROW = 3

HEADER_STYLE = "rounded=0;whiteSpace=wrap;html=1;fillColor=#f5f5f5;fontWeight=bold;"
ATTRIBUTE_STYLE = "rounded=0;whiteSpace=wrap;html=1;align=left;spacingLeft=10;"
RELATIONSHIP_STYLE = ("edgeStyle=orthogonalEdgeStyle;rounded=0;orthogonalLoop=1;jettySize=auto;"
                      "html=1;endArrow=none;startArrow=none;")


@register("erd")
class ERDHandler:
    @staticmethod
    def render(data: Mapping[str, Any], out: DrawioWriter) -> None:
        entities = [Entity.from_dict(raw, i) for i, raw in enumerate(list_field(data, "entities", "erd"))]
        relationships = [
            Connection.from_dict(raw, f"relationships[{i}]")
            for i, raw in enumerate(list_field(data, "relationships", "erd", required=False))
        ]

        headers: Dict[str, str] = {}
        for index, entity in enumerate(entities):
            # row pitch is fixed; tall entities may overlap the next row
            x = START_X + (index % PER_ROW) * SPACING_X
            y = START_Y + (index // PER_ROW) * SPACING_Y

            header = out.create_vertex(entity.name, "rectangle", x, y, ENTITY_WIDTH, HEADER_HEIGHT,
                                       style=HEADER_STYLE)
            headers[entity.id] = header.id

            for row, attribute in enumerate(entity.attributes):
                out.create_vertex(attribute, "rectangle", x, y + HEADER_HEIGHT + row * ATTRIBUTE_HEIGHT,
                                  ENTITY_WIDTH, ATTRIBUTE_HEIGHT, style=ATTRIBUTE_STYLE)

        for rel in relationships:
            src = headers.get(rel.source)
            dst = headers.get(rel.target)
            if not src or not dst:
                logger.debug("Dropping relationship %r -> %r: unknown entity", rel.source, rel.target)
                continue
            out.create_edge(src, dst, rel.label, RELATIONSHIP_STYLE)

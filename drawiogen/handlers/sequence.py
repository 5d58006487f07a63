from __future__ import annotations
import logging
from typing import Any, Dict, Mapping

from ..handler_registry import register
from ..models import Interaction, list_field
from ..renderer import DrawioWriter

logger = logging.getLogger(__name__)

PARTICIPANT_SPACING = 200
INTERACTION_SPACING = 60
TOP_MARGIN = 50
LIFELINE_X = 100
LIFELINE_WIDTH = 100
FIRST_MESSAGE_OFFSET = 80  # below the participant headers
ACTIVATION_WIDTH = 10
ACTIVATION_HEIGHT = 20

LIFELINE_STYLE = ("shape=umlLifeline;perimeter=lifelinePerimeter;whiteSpace=wrap;html=1;"
                  "container=1;collapsible=0;recursiveResize=0;outlineConnect=0;")
ACTIVATION_STYLE = "html=1;whiteSpace=wrap;fillColor=#ffffff;"
MESSAGE_STYLE = ("html=1;verticalAlign=bottom;endArrow=block;edgeStyle=elbowEdgeStyle;"
                 "elbow=vertical;curved=0;rounded=0;")
REQUEST_SUFFIX = "endFill=1;"
REPLY_SUFFIX = "dashed=1;endArrow=open;"


def message_style(dashed: bool) -> str:
    return MESSAGE_STYLE + (REPLY_SUFFIX if dashed else REQUEST_SUFFIX)


@register("sequence")
class SequenceDiagramHandler:
    @staticmethod
    def render(data: Mapping[str, Any], out: DrawioWriter) -> None:
        participants = [str(p) for p in list_field(data, "participants", "sequence")]
        interactions = [Interaction.from_dict(raw, i)
                        for i, raw in enumerate(list_field(data, "interactions", "sequence"))]
        lifeline_height = len(interactions) * INTERACTION_SPACING + 100

        # Lifelines; name -> center x of its line
        centers: Dict[str, float] = {}
        for index, name in enumerate(participants):
            x = LIFELINE_X + index * PARTICIPANT_SPACING
            out.create_vertex(name, "rectangle", x, TOP_MARGIN, LIFELINE_WIDTH, lifeline_height,
                              style=LIFELINE_STYLE)
            centers[name] = x + LIFELINE_WIDTH / 2

        # Messages
        y = TOP_MARGIN + FIRST_MESSAGE_OFFSET
        for msg in interactions:
            if msg.source not in centers or msg.target not in centers:
                logger.debug("Skipping message %r: unknown participant %r -> %r",
                             msg.message, msg.source, msg.target)
                continue
            src_bar = _activation(out, centers[msg.source], y)
            dst_bar = _activation(out, centers[msg.target], y)
            out.create_edge(src_bar, dst_bar, msg.message, message_style(msg.dashed))
            y += INTERACTION_SPACING


def _activation(out: DrawioWriter, center_x: float, y: float) -> str:
    bar = out.create_vertex("", "rectangle", center_x - ACTIVATION_WIDTH / 2,
                            y - ACTIVATION_HEIGHT / 2, ACTIVATION_WIDTH, ACTIVATION_HEIGHT,
                            style=ACTIVATION_STYLE)
    return bar.id


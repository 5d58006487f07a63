# drawiogen/utils.py
from __future__ import annotations
from typing import Dict, Union
from xml.sax.saxutils import escape

DEFAULT_FILL = "#dae8fc"
DEFAULT_STROKE = "#6c8ebf"

# shape kind -> base draw.io style (semicolon-terminated key=value pairs)
SHAPE_STYLES: Dict[str, str] = {
    "rectangle": "rounded=0;whiteSpace=wrap;html=1;",
    "roundedRectangle": "rounded=1;whiteSpace=wrap;html=1;",
    "ellipse": "ellipse;whiteSpace=wrap;html=1;",
    "diamond": "rhombus;whiteSpace=wrap;html=1;",
    "parallelogram": "shape=parallelogram;perimeter=parallelogramPerimeter;whiteSpace=wrap;html=1;",
    "cylinder": "shape=cylinder3;whiteSpace=wrap;html=1;boundedLbl=1;backgroundOutline=1;",
    "hexagon": "shape=hexagon;perimeter=hexagonPerimeter2;whiteSpace=wrap;html=1;",
    "cloud": "ellipse;shape=cloud;whiteSpace=wrap;html=1;",
    "document": "shape=document;whiteSpace=wrap;html=1;boundedLbl=1;",
    "process": "rounded=0;whiteSpace=wrap;html=1;",
    "decision": "rhombus;whiteSpace=wrap;html=1;",
    "data": "shape=parallelogram;perimeter=parallelogramPerimeter;whiteSpace=wrap;html=1;",
    "terminator": "rounded=1;whiteSpace=wrap;html=1;arcSize=50;",
    "delay": "shape=delay;whiteSpace=wrap;html=1;",
    "database": "shape=cylinder3;whiteSpace=wrap;html=1;boundedLbl=1;backgroundOutline=1;",
    "actor": "shape=umlActor;verticalLabelPosition=bottom;verticalAlign=top;html=1;",
    "note": "shape=note;whiteSpace=wrap;html=1;backgroundOutline=1;",
}

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def shape_style(kind: str) -> str:
    return SHAPE_STYLES.get(kind or "", SHAPE_STYLES["rectangle"])


def xml_escape(text) -> str:
    if text is None:
        return ""
    return escape(str(text), _XML_ENTITIES)


def fmt_number(value: Union[int, float]) -> str:
    """Render coordinates the way draw.io writes them: 320, not 320.0."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

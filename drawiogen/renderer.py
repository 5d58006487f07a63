from __future__ import annotations
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from .models import DEFAULT_HEIGHT, DEFAULT_WIDTH, DiagramRequestError, Edge, Element, Vertex
from .utils import DEFAULT_FILL, DEFAULT_STROKE, shape_style

logger = logging.getLogger(__name__)

FILE_EXTENSION = ".drawio"
FIRST_CELL_ID = 2  # 0 = root cell, 1 = default layer
DEFAULT_EDGE_STYLE = "edgeStyle=orthogonalEdgeStyle;rounded=0;orthogonalLoop=1;jettySize=auto;html=1;"

_HEADER = """<?xml version="1.0" encoding="UTF-8"?>
<mxfile host="app.diagrams.net" modified="{modified}" agent="drawiogen" version="21.0.0" type="device">
  <diagram name="Page-1" id="diagram1">
    <mxGraphModel dx="1434" dy="764" grid="1" gridSize="10" guides="1" tooltips="1" connect="1" arrows="1" fold="1" page="1" pageScale="1" pageWidth="850" pageHeight="1100" math="0" shadow="0">
      <root>
        <mxCell id="0" />
        <mxCell id="1" parent="0" />
"""

_FOOTER = """      </root>
    </mxGraphModel>
  </diagram>
</mxfile>"""


def _file_mode() -> int:
    """Mode a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def serialize_document(elements: Iterable[Element], modified: Optional[str] = None) -> str:
    parts = [_HEADER.format(modified=modified or _timestamp())]
    for element in elements:
        parts.append(element.to_xml() + "\n")
    parts.append(_FOOTER)
    return "".join(parts)


class DrawioWriter:
    """
    Per-document element factory. Only `save()` touches the filesystem.
    One instance builds one document: the id counter is never shared.
    """
    def __init__(self, modified: Optional[str] = None):
        self._elements: List[Element] = []
        self._next_id = FIRST_CELL_ID
        self._modified = modified

    @property
    def elements(self) -> List[Element]:
        return list(self._elements)

    def next_id(self) -> str:
        cell_id = str(self._next_id)
        self._next_id += 1
        return cell_id

    def create_vertex(self, label: str, kind: str, x: float, y: float,
                      width: float = DEFAULT_WIDTH, height: float = DEFAULT_HEIGHT,
                      fill: str = DEFAULT_FILL, stroke: str = DEFAULT_STROKE,
                      style: Optional[str] = None) -> Vertex:
        if style is None:
            style = f"{shape_style(kind)}fillColor={fill};strokeColor={stroke};"
        vertex = Vertex(id=self.next_id(), value=label or "", style=style,
                        x=x, y=y, width=width, height=height)
        self._elements.append(vertex)
        return vertex

    def create_edge(self, source: str, target: str, label: str = "",
                    style: str = DEFAULT_EDGE_STYLE) -> Edge:
        edge = Edge(id=self.next_id(), value=label or "", style=style,
                    source=source, target=target)
        self._elements.append(edge)
        return edge

    def text(self) -> str:
        return serialize_document(self._elements, self._modified)

    def save(self, outdir: Path, filename: str) -> Path:
        if not filename.endswith(FILE_EXTENSION):
            filename += FILE_EXTENSION
        root = outdir.resolve()
        path = (root / filename).resolve()
        try:
            path.relative_to(root)
        except ValueError:
            raise DiagramRequestError(
                "E_INVALID_FIELD", f"filename {filename!r} escapes the output directory"
            ) from None
        path.parent.mkdir(parents=True, exist_ok=True)
        content = self.text()
        # temp file + rename so a failed write never leaves a partial document
        fd, tmp = tempfile.mkstemp(prefix=".drawiogen-", dir=str(path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.chmod(tmp, _file_mode())
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
        logger.info("Wrote %d cells to %s", len(self._elements), path)
        return path

from __future__ import annotations
import logging
from typing import Dict, Sequence

from ..handler_registry import register
from ..models import Connection, Node, list_field
from ..renderer import DrawioWriter

logger = logging.getLogger(__name__)


def place(nodes: Sequence[Node], connections: Sequence[Connection], out: DrawioWriter) -> None:
    """Shapes at caller coordinates, then plain labeled connectors."""
    cell_ids: Dict[str, str] = {}
    for node in nodes:
        vertex = out.create_vertex(node.label, node.kind, node.x, node.y, node.width, node.height)
        cell_ids[node.id] = vertex.id

    for conn in connections:
        src = cell_ids.get(conn.source)
        dst = cell_ids.get(conn.target)
        if not src or not dst:
            logger.debug("Dropping connector %r -> %r: unknown node", conn.source, conn.target)
            continue
        out.create_edge(src, dst, conn.label)


@register("network")
class NetworkDiagramHandler:
    @staticmethod
    def render(data, out: DrawioWriter) -> None:
        nodes = [Node.from_dict(raw, f"nodes[{i}]")
                 for i, raw in enumerate(list_field(data, "nodes", "network"))]
        connections = [Connection.from_dict(raw, f"connections[{i}]")
                       for i, raw in enumerate(list_field(data, "connections", "network", required=False))]
        place(nodes, connections, out)

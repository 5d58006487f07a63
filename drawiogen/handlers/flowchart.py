from __future__ import annotations
import logging
from typing import Any, Dict, List, Mapping

from ..handler_registry import register
from ..layout import FlowGraph, assign_coordinates
from ..models import Connection, Id, Step, list_field
from ..renderer import DrawioWriter

logger = logging.getLogger(__name__)


@register("flowchart")
class FlowchartHandler:
    @staticmethod
    def render(data: Mapping[str, Any], out: DrawioWriter) -> None:
        steps = [Step.from_dict(raw, i) for i, raw in enumerate(list_field(data, "steps", "flowchart"))]
        connections = [
            Connection.from_dict(raw, f"connections[{i}]")
            for i, raw in enumerate(list_field(data, "connections", "flowchart", required=False))
        ]

        # a repeated id keeps its first position but the later step's content
        step_map: Dict[Id, Step] = {}
        for step in steps:
            step_map[step.id] = step

        graph = FlowGraph(list(step_map), connections)
        levels, by_level = graph.assign_levels()
        positions = assign_coordinates(by_level)

        # Shapes, level by level
        cell_ids: Dict[Id, str] = {}
        for level in sorted(by_level):
            for node_id in by_level[level]:
                step = step_map[node_id]
                step.level = levels[node_id]
                step.x, step.y = positions[node_id]
                vertex = out.create_vertex(step.label, step.kind, step.x, step.y,
                                           step.width, step.height)
                cell_ids[node_id] = vertex.id

        # Connectors
        if connections:
            for conn in connections:
                src = cell_ids.get(conn.source)
                dst = cell_ids.get(conn.target)
                if not src or not dst:
                    logger.debug("Dropping connection %r -> %r: unknown step", conn.source, conn.target)
                    continue
                out.create_edge(src, dst, conn.label)
        else:
            ordered: List[Id] = list(step_map)
            for src, dst in zip(ordered, ordered[1:]):
                out.create_edge(cell_ids[src], cell_ids[dst], step_map[src].connector_label)

"""
Flowchart layering: caller-id graph -> BFS levels -> per-level coordinates.

Kept free of styling so the leveling can be checked on plain ids.
"""
from __future__ import annotations
import logging
from collections import deque
from typing import Dict, List, Sequence, Tuple

from .models import Connection, Id

logger = logging.getLogger(__name__)

CENTER_X = 400
TOP_MARGIN = 50
LEVEL_HEIGHT = 120
NODE_SPACING = 160


class FlowGraph:
    def __init__(self, ids: Sequence[Id], connections: Sequence[Connection] = ()):
        # dict preserves declaration order; duplicate ids collapse onto the first slot
        self.ids: List[Id] = list(dict.fromkeys(ids))
        self.adjacency: Dict[Id, List[Id]] = {i: [] for i in self.ids}
        self.reverse: Dict[Id, List[Id]] = {i: [] for i in self.ids}

        if connections:
            for conn in connections:
                if conn.source in self.adjacency and conn.target in self.adjacency:
                    self._add(conn.source, conn.target)
        else:
            for src, dst in zip(self.ids, self.ids[1:]):
                self._add(src, dst)

    def _add(self, src: Id, dst: Id) -> None:
        self.adjacency[src].append(dst)
        self.reverse[dst].append(src)

    def roots(self) -> List[Id]:
        roots = [i for i in self.ids if not self.reverse[i]]
        if not roots and self.ids:
            logger.debug("No root in flowchart graph, falling back to %r", self.ids[0])
            roots = [self.ids[0]]
        return roots

    def assign_levels(self) -> Tuple[Dict[Id, int], Dict[int, List[Id]]]:
        """Multi-source BFS; the first level a node is reached at sticks."""
        levels: Dict[Id, int] = {}
        by_level: Dict[int, List[Id]] = {}
        visited = set()
        queue: deque = deque()

        for root in self.roots():
            queue.append((root, 0))
            visited.add(root)

        while queue:
            node, level = queue.popleft()
            levels[node] = level
            by_level.setdefault(level, []).append(node)
            for neighbor in self.adjacency[node]:
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append((neighbor, level + 1))

        # unreached nodes: each gets a fresh level below everything placed so far
        for node in self.ids:
            if node not in visited:
                level = max(by_level, default=-1) + 1
                logger.debug("Step %r unreachable from roots, placing at level %d", node, level)
                levels[node] = level
                by_level.setdefault(level, []).append(node)

        return levels, by_level


def assign_coordinates(by_level: Dict[int, List[Id]]) -> Dict[Id, Tuple[float, float]]:
    positions: Dict[Id, Tuple[float, float]] = {}
    for level in sorted(by_level):
        nodes = by_level[level]
        row_width = (len(nodes) - 1) * NODE_SPACING
        row_start = CENTER_X - row_width / 2
        for index, node in enumerate(nodes):
            positions[node] = (row_start + index * NODE_SPACING, TOP_MARGIN + level * LEVEL_HEIGHT)
    return positions

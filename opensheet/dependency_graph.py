"""Tracks which cells reference which, for recalculation order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class CellKey:
    """Identifies a cell anywhere in a workbook."""

    sheet_idx: int
    row: int
    col: int


class DependencyGraph:
    """Directed graph from each cell to the cells that depend on it."""

    def __init__(self) -> None:
        # dependency -> dependents (dicts used as insertion-ordered sets)
        self._graph: dict[CellKey, dict[CellKey, None]] = {}
        # dependent -> dependencies
        self._reverse: dict[CellKey, dict[CellKey, None]] = {}

    def add_edge(self, dependent: CellKey, dependency: CellKey) -> None:
        """Record that ``dependent`` references ``dependency``."""
        self._graph.setdefault(dependency, {})[dependent] = None
        self._reverse.setdefault(dependent, {})[dependency] = None

    def remove_edges_for(self, dependent: CellKey) -> None:
        """Forget every dependency ``dependent`` had."""
        for dependency in self._reverse.pop(dependent, {}):
            dependents = self._graph.get(dependency)
            if dependents is not None:
                dependents.pop(dependent, None)
                if not dependents:
                    del self._graph[dependency]

    def clear(self) -> None:
        self._graph.clear()
        self._reverse.clear()

    def _neighbors(self, key: CellKey) -> Iterator[CellKey]:
        return iter(self._graph.get(key, ()))

    def dependents_of(self, key: CellKey) -> list[CellKey]:
        """All cells depending on ``key``, directly or transitively, in BFS order."""
        result: dict[CellKey, None] = {}
        visited: set[CellKey] = set()
        queue = [key]
        while queue:
            current = queue.pop(0)
            if current in visited:
                continue
            visited.add(current)
            for dependent in self._neighbors(current):
                result[dependent] = None
                queue.append(dependent)
        return list(result)

    def has_dependents(self, key: CellKey) -> bool:
        return bool(self._graph.get(key))

    def topo_sort(self, dirty: Iterable[CellKey]) -> tuple[list[CellKey], bool]:
        """Order ``dirty`` and everything downstream so dependencies come first.

        Returns the order and whether the reachable graph was free of cycles.
        """
        visited: set[CellKey] = set()
        in_stack: set[CellKey] = set()
        postorder: list[CellKey] = []
        acyclic = True
        for start in dirty:
            if start in visited:
                continue
            visited.add(start)
            in_stack.add(start)
            work = [(start, self._neighbors(start))]
            while work:
                node, neighbors = work[-1]
                for neighbor in neighbors:
                    if neighbor not in visited:
                        visited.add(neighbor)
                        in_stack.add(neighbor)
                        work.append((neighbor, self._neighbors(neighbor)))
                        break
                    if neighbor in in_stack:
                        acyclic = False
                else:
                    work.pop()
                    in_stack.discard(node)
                    postorder.append(node)
        postorder.reverse()
        return postorder, acyclic

    def find_circular_refs(self) -> list[CellKey]:
        """Cells that take part in at least one circular reference."""
        nodes: dict[CellKey, None] = {}
        for dependency, dependents in self._graph.items():
            nodes[dependency] = None
            nodes.update(dependents)

        index_of: dict[CellKey, int] = {}
        low: dict[CellKey, int] = {}
        stack: list[CellKey] = []
        on_stack: set[CellKey] = set()
        circular: set[CellKey] = set()
        counter = 0

        for root in nodes:
            if root in index_of:
                continue
            index_of[root] = low[root] = counter
            counter += 1
            stack.append(root)
            on_stack.add(root)
            work = [(root, self._neighbors(root))]
            while work:
                node, neighbors = work[-1]
                for neighbor in neighbors:
                    if neighbor not in index_of:
                        index_of[neighbor] = low[neighbor] = counter
                        counter += 1
                        stack.append(neighbor)
                        on_stack.add(neighbor)
                        work.append((neighbor, self._neighbors(neighbor)))
                        break
                    if neighbor in on_stack:
                        low[node] = min(low[node], index_of[neighbor])
                else:
                    work.pop()
                    if work:
                        parent = work[-1][0]
                        low[parent] = min(low[parent], low[node])
                    if low[node] == index_of[node]:
                        component = []
                        while True:
                            member = stack.pop()
                            on_stack.discard(member)
                            component.append(member)
                            if member == node:
                                break
                        if len(component) > 1 or node in self._graph.get(node, {}):
                            circular.update(component)

        return [node for node in nodes if node in circular]
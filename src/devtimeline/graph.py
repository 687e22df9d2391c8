"""Dependency graph over tasks, indexed by name."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from .exceptions import CircularDependencyError, MissingReferenceError
from .logger import get_logger

if TYPE_CHECKING:
    from .models import Task

logger = get_logger()


class DependencyGraph:
    """Adjacency structure built once from the task list.

    Edges point from a task to the tasks it depends on. Dependency names that
    do not match any task are kept aside as dangling references instead of
    becoming edges.
    """

    def __init__(self, tasks: Sequence[Task]):
        self.names = [task.name for task in tasks]
        self.index: dict[str, int] = {}
        for i, name in enumerate(self.names):
            # First definition wins for duplicated names
            self.index.setdefault(name, i)

        self.edges: list[list[int]] = []
        self.dangling: list[tuple[str, str]] = []
        for task in tasks:
            targets: list[int] = []
            for dep_name in task.dependencies:
                dep_index = self.index.get(dep_name)
                if dep_index is None:
                    self.dangling.append((task.name, dep_name))
                else:
                    targets.append(dep_index)
            self.edges.append(targets)

    def __contains__(self, name: object) -> bool:
        return name in self.index

    def dependencies_of(self, name: str) -> list[str]:
        """Names of the known tasks that ``name`` depends on."""
        return [self.names[i] for i in self.edges[self.index[name]]]

    def find_cycle(self) -> list[str] | None:
        """Return one dependency cycle as a closed path of names, or None.

        Depth-first search from every unvisited task, tracking the current
        recursion stack. Reaching a task that is still on the stack closes a
        cycle. Iterative so that long dependency chains cannot exhaust the
        interpreter's recursion limit.
        """
        visited = [False] * len(self.names)
        on_stack = [False] * len(self.names)

        for root in range(len(self.names)):
            if visited[root]:
                continue

            path: list[int] = [root]
            cursors: list[int] = [0]
            visited[root] = True
            on_stack[root] = True

            while path:
                node = path[-1]
                if cursors[-1] < len(self.edges[node]):
                    target = self.edges[node][cursors[-1]]
                    cursors[-1] += 1
                    if on_stack[target]:
                        start = path.index(target)
                        return [self.names[i] for i in path[start:]] + [self.names[target]]
                    if not visited[target]:
                        visited[target] = True
                        on_stack[target] = True
                        path.append(target)
                        cursors.append(0)
                else:
                    on_stack[node] = False
                    path.pop()
                    cursors.pop()

        return None

    def has_cycle(self) -> bool:
        """Return True if the dependency relation contains a cycle."""
        return self.find_cycle() is not None

    def missing_references(self) -> list[tuple[str, str]]:
        """(task name, unknown dependency name) pairs, in task order."""
        return list(self.dangling)

    def validate(self, *, strict: bool = False) -> None:
        """Reject graphs that must not be scheduled.

        Raises:
            MissingReferenceError: strict mode only, for dangling dependency names
            CircularDependencyError: if the dependencies form a cycle
        """
        for task_name, dep_name in self.dangling:
            if strict:
                raise MissingReferenceError(f"Task {task_name} depends on unknown task: {dep_name}")
            logger.checks(f"Ignoring unknown dependency {dep_name} of task {task_name}")

        cycle = self.find_cycle()
        if cycle is not None:
            raise CircularDependencyError(cycle)


def has_cyclic_dependencies(tasks: Sequence[Task]) -> bool:
    """Return True if the tasks' dependencies form a cycle."""
    return DependencyGraph(tasks).has_cycle()

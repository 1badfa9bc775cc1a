from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Mapping

from .exceptions import InvalidTransition


class StatusGraph:
    """
    Fixed set of allowed status moves for one document type.

    Statuses without outgoing edges are terminal. The graph never points back at
    the initial status.
    """

    def __init__(self, edges: Mapping[str, Iterable[str]], *, initial: str):
        self.initial = str(initial)
        self._edges: Dict[str, tuple] = {str(source): tuple(str(t) for t in targets) for source, targets in edges.items()}
        for source, targets in self._edges.items():
            if self.initial in targets:
                raise ValueError(f"Status graph may not return to {self.initial} (edge from {source}).")

    @property
    def statuses(self) -> FrozenSet[str]:
        seen = set(self._edges)
        for targets in self._edges.values():
            seen.update(targets)
        return frozenset(seen)

    def allowed_next(self, current: str) -> tuple:
        return self._edges.get(str(current), ())

    def can_transition(self, current: str, target: str) -> bool:
        return str(target) in self.allowed_next(current)

    def is_terminal(self, status: str) -> bool:
        return not self.allowed_next(status)

    def validate(self, current: str, target: str) -> str:
        """Return ``target`` when the move is allowed, raise ``InvalidTransition`` otherwise."""
        if not self.can_transition(current, target):
            raise InvalidTransition(str(current), str(target), self.allowed_next(current))
        return str(target)

"""Reference Classifier - Which scripts are used by any scene.

A script is used when a scene contains an instance of it, or when a
serialized field of a declared script points at one of its instances.
Contributions from different scenes are combined by set union, so scenes
can be folded in any order and from several threads.
"""

from __future__ import annotations

import threading
from typing import Iterable

from scenetrace.scene.graph import EntityGraph


class UsageAccumulator:
    """Grow-only set of used script guids.

    Every write takes the instance lock, so ``add_graph`` may be called
    concurrently from worker threads.
    """

    def __init__(self, used: Iterable[str] = ()) -> None:
        self._used: set[str] = {guid.lower() for guid in used}
        self._lock = threading.Lock()

    def add_graph(self, graph: EntityGraph) -> None:
        """Add one scene's instances and the targets of its references."""
        contribution = graph.instantiated | graph.referenced_guids()
        with self._lock:
            self._used |= contribution

    def add(self, guid: str) -> None:
        """Mark a single guid as used."""
        with self._lock:
            self._used.add(guid.lower())

    def merge(self, other: UsageAccumulator) -> None:
        """Union another accumulator into this one."""
        contribution = other.used()
        with self._lock:
            self._used |= contribution

    def used(self) -> frozenset[str]:
        """Return a snapshot of the used guids."""
        with self._lock:
            return frozenset(self._used)

    def __contains__(self, guid: object) -> bool:
        with self._lock:
            return guid in self._used

    def __len__(self) -> int:
        with self._lock:
            return len(self._used)


def classify_usage(graphs: Iterable[EntityGraph]) -> frozenset[str]:
    """Compute the used guids across a run's scene graphs."""
    accumulator = UsageAccumulator()
    for graph in graphs:
        accumulator.add_graph(graph)
    return accumulator.used()

"""
Diagnosis aggregation.

Collapses the diagnosis labels carried by findings into a first-seen,
duplicate-free sequence.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List

from .base import Diagnosis, Finding


class OrderedDiagnoses:
    """Append-if-absent sequence of Diagnosis labels."""

    def __init__(self, initial: Iterable[Diagnosis] = ()):
        self._items: List[Diagnosis] = []
        for diagnosis in initial:
            self.add(diagnosis)

    def add(self, diagnosis: Diagnosis) -> bool:
        """Append `diagnosis` unless already present. Returns True if appended."""
        if diagnosis in self._items:
            return False
        self._items.append(diagnosis)
        return True

    def __iter__(self) -> Iterator[Diagnosis]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, diagnosis) -> bool:
        return diagnosis in self._items

    def to_list(self) -> List[Diagnosis]:
        return list(self._items)


def aggregate(findings: Iterable[Finding]) -> List[Diagnosis]:
    """Diagnoses implied by `findings`, deduplicated in first-seen order."""
    return OrderedDiagnoses(f.diagnosis for f in findings).to_list()

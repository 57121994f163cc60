"""Append-only iteration traces.

Algorithms compute each step as a pure function returning the next state
together with a mapping of named quantities; the loop around the step hands
those quantities to :meth:`Trace.record`. Arrays are copied and frozen on the
way in so a record can never change after it is created.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping

import numpy as np


def _freeze(value: Any) -> Any:
    if isinstance(value, np.ndarray):
        frozen = np.array(value, copy=True)
        frozen.setflags(write=False)
        return frozen
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


@dataclass(frozen=True, eq=False)
class IterationRecord:
    """One step of an iterative method: its index and named quantities."""

    index: int
    values: Mapping[str, Any]

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)


class Trace:
    """Ordered, append-only sequence of :class:`IterationRecord`."""

    def __init__(self) -> None:
        self._records: list[IterationRecord] = []

    def record(self, index: int, **values: Any) -> IterationRecord:
        """Append a record; indices must be non-decreasing."""
        if self._records and index < self._records[-1].index:
            raise ValueError(
                f"Trace indices must be non-decreasing, got {index} after "
                f"{self._records[-1].index}."
            )
        frozen = {key: _freeze(val) for key, val in values.items()}
        entry = IterationRecord(index=int(index), values=MappingProxyType(frozen))
        self._records.append(entry)
        return entry

    def extend(self, other: "Trace") -> None:
        """Append every record of ``other`` (used when combining phases)."""
        for entry in other:
            self.record(entry.index, **dict(entry.values))

    @property
    def records(self) -> tuple[IterationRecord, ...]:
        return tuple(self._records)

    @property
    def last(self) -> IterationRecord | None:
        return self._records[-1] if self._records else None

    def column(self, key: str) -> list[Any]:
        """Return the value of ``key`` from every record that has it."""
        return [entry.values[key] for entry in self._records if key in entry.values]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[IterationRecord]:
        return iter(tuple(self._records))

    def __getitem__(self, idx: int) -> IterationRecord:
        return self._records[idx]

    def __repr__(self) -> str:
        return f"Trace(len={len(self._records)})"


__all__ = ["IterationRecord", "Trace"]

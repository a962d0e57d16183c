"""Named timing regions accumulated in a registry, with a printable summary."""

from __future__ import annotations

import contextlib
import sys
import time
from collections.abc import Callable

_LINE = "-" * 82 + "\n"


class _Region(contextlib.ContextDecorator):
    """Context manager and decorator that times one named region."""

    def __init__(self, registry: TimerRegistry, name: str) -> None:
        self._registry = registry
        self._name = name
        self._starts: list[float] = []

    def __enter__(self) -> _Region:
        self._registry._register(self._name)
        self._starts.append(self._registry._clock())
        return self

    def __exit__(self, *exc_info: object) -> bool:
        start = self._starts.pop()
        self._registry._record(self._name, self._registry._clock() - start)
        return False


class TimerRegistry:
    """Accumulates total elapsed time and call counts per region name."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._entries: dict[str, list[float]] = {}

    def _register(self, name: str) -> None:
        self._entries.setdefault(name, [0.0, 0])

    def _record(self, name: str, elapsed: float) -> None:
        entry = self._entries[name]
        entry[0] += elapsed
        entry[1] += 1

    def region(self, name: str) -> _Region:
        """Return a context manager (also usable as a decorator) timing ``name``."""
        return _Region(self, name)

    def total(self, name: str) -> float:
        """Total seconds spent in ``name``; raises KeyError if never entered."""
        return self._entries[name][0]

    def count(self, name: str) -> int:
        """Number of completed passes through ``name``; raises KeyError if never entered."""
        return int(self._entries[name][1])

    def summary(self) -> str:
        """Return the timing table for all regions, in order of first use."""
        parts = [
            f"\n{_LINE} \t\t\t\t  Timing Summary\n\n{_LINE}",
            "%15s |\t %10s |\t %15s |\t %15s |\n%s"
            % ("FUNCTION", "COUNTS", "TOTAL TIME (s)", "TIME/COUNT (s)", _LINE),
        ]
        for name, (total, count) in self._entries.items():
            per_count = total / count if count else float("nan")
            parts.append(
                "%15s |\t %10d |\t %.9e |\t %.9e |\n" % (name, int(count), total, per_count)
            )
        parts.append(_LINE + "\n")
        return "".join(parts)

    def reset(self) -> None:
        """Forget all regions."""
        self._entries.clear()


registry = TimerRegistry()


def timed(name: str) -> _Region:
    """Time ``name`` in the shared registry; works as ``with`` or as a decorator."""
    return registry.region(name)


def get_timer(name: str) -> float:
    """Total seconds recorded for ``name`` in the shared registry."""
    return registry.total(name)


def print_time_summary() -> str:
    """Write the shared registry's timing table to stdout and return it."""
    text = registry.summary()
    sys.stdout.write(text)
    sys.stdout.flush()
    return text
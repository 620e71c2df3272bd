from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .models import UrlRecord


@dataclass
class ProcessingContext:
    """
    Per-call state for one document pass.

    Holds the debug trace, the ordered list of rewritten URLs and the
    normalized-URL counter. Build a new one for every call; nothing here is
    shared between documents.
    """

    trace: List[str] = field(default_factory=list)
    records: List[UrlRecord] = field(default_factory=list)
    urls_normalized: int = 0

    def debug(self, label: str, value: str) -> str:
        self.trace.append(f"{label}: {value}")
        return value

    def record(self, original: str, rewritten: str) -> None:
        self.records.append(UrlRecord(original=original, rewritten=rewritten))
        self.urls_normalized += 1

    @property
    def debug_output(self) -> str:
        return "".join(f"{line}\n" for line in self.trace)


def trace_value(ctx: ProcessingContext | None, label: str, value: str) -> str:
    # Helpers may run without a context (e.g. called directly).
    if ctx is None:
        return value
    return ctx.debug(label, value)

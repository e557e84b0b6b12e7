"""Summary of a reference resolution pass."""

import json
import time
from collections import Counter
from pathlib import Path
from typing import Any

from docbuilder.xref import Xref

TIERS = ("local", "memory", "persistent", "remote")


class ResolutionReport:
    """Counts where links were resolved and which ones were not."""

    def __init__(self) -> None:
        """Initialize an empty report."""
        self.hits: Counter[str] = Counter()
        self.unresolved: set[Xref] = set()
        self.failed: dict[Xref, str] = {}
        self.start_time = time.time()

    def record_hit(self, tier: str) -> None:
        """Count one link resolved by ``tier``."""
        self.hits[tier] += 1

    def record_unresolved(self, xref: Xref) -> None:
        """Remember an Xref that no tier could resolve."""
        self.unresolved.add(xref)

    def record_failure(self, xref: Xref, error: Exception) -> None:
        """Remember an Xref whose lookup failed."""
        self.failed[xref] = str(error)

    def summary(self) -> dict[str, Any]:
        """Return the report as JSON-compatible data."""
        return {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
            },
            "hits": {tier: self.hits.get(tier, 0) for tier in TIERS},
            "unresolved": sorted(x.value for x in self.unresolved),
            "failed": {x.value: msg for x, msg in sorted(self.failed.items())},
        }

    def generate_report(self, path: Path) -> None:
        """Write the report to ``path`` as JSON."""
        path.write_text(json.dumps(self.summary(), indent=2), encoding="utf-8")

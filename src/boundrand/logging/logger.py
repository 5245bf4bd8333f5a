"""Diagnostic logger for generation calls.

Uses the standard ``logging`` module with the ``"boundrand"`` logger.
No ``print()`` statements. Supports three verbosity levels and an
in-memory diagnostic mode for post-hoc analysis.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from boundrand.config import BoundRandConfig
    from boundrand.logging.types import GenerationRecord

logger = logging.getLogger("boundrand")


class GenerationLogger:
    """Per-call diagnostic logger.

    Log levels (all emitted at DEBUG):
        ``"none"``: No logging output. Records are still stored if
        ``diagnostic_mode=True``.

        ``"summary"``: One line per call with operation, size and cost.

        ``"full"``: JSON dump of all record fields.

    Diagnostic mode stores all records in memory for analysis via
    ``get_diagnostic_data()`` and ``get_summary_stats()``.
    """

    def __init__(self, config: BoundRandConfig) -> None:
        self._log_level = config.log_level
        self._diagnostic_mode = config.diagnostic_mode
        self._records: list[GenerationRecord] = []
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        """Whether records are worth building at all."""
        return self._diagnostic_mode or self._log_level != "none"

    def log_call(self, record: GenerationRecord) -> None:
        """Log a single generation call.

        Args:
            record: Immutable record of the call.
        """
        if self._diagnostic_mode:
            with self._lock:
                self._records.append(record)

        if self._log_level == "none":
            return

        if self._log_level == "summary":
            logger.debug(
                "op=%s requested=%s bytes=%d draws=%d source=%s strength=%s elapsed=%.3fms",
                record.operation,
                record.requested,
                record.bytes_consumed,
                record.draws,
                record.source,
                record.strength,
                record.elapsed_ms,
            )
        elif self._log_level == "full":
            logger.debug("generation_record: %s", json.dumps(asdict(record), default=str))

    def get_diagnostic_data(self) -> list[GenerationRecord]:
        """Return all stored records (requires ``diagnostic_mode=True``)."""
        with self._lock:
            return list(self._records)

    def get_summary_stats(self) -> dict[str, Any]:
        """Compute summary statistics over all stored records.

        Returns:
            Dictionary with aggregate stats, or empty dict if no records.
            ``rejection_rate`` is the share of source calls whose sample was
            discarded.
        """
        records = self.get_diagnostic_data()
        if not records:
            return {}

        per_operation: dict[str, int] = {}
        for r in records:
            per_operation[r.operation] = per_operation.get(r.operation, 0) + 1

        n = len(records)
        total_draws = sum(r.draws for r in records)
        # Calls that drew at least once contribute exactly one accepted draw.
        accepted = sum(1 for r in records if r.draws > 0)
        return {
            "total_calls": n,
            "calls_per_operation": per_operation,
            "total_bytes": sum(r.bytes_consumed for r in records),
            "total_draws": total_draws,
            "mean_draws": total_draws / n,
            "rejection_rate": (total_draws - accepted) / total_draws if total_draws else 0.0,
            "mean_elapsed_ms": sum(r.elapsed_ms for r in records) / n,
            "max_elapsed_ms": max(r.elapsed_ms for r in records),
        }

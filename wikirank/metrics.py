"""
Timing harness for ranking runs.
"""

import json
import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, List

import psutil

logger = logging.getLogger(__name__)


@dataclass
class TimingRecord:
    """Wall-clock duration of one labelled computation."""

    label: str
    duration_ms: int
    memory_delta_bytes: int = 0

    def format(self) -> str:
        return f"Processing {self.label} took {self.duration_ms} ms."


@dataclass
class TimingReport:
    """Accumulates timing records for a run."""

    records: List[TimingRecord] = field(default_factory=list)

    def timed(self, label: str, fn: Callable[..., Any], *args, **kwargs) -> Any:
        """
        Run fn(*args, **kwargs), record its duration under label, return its result

        Exceptions from fn propagate and nothing is recorded.
        """
        process = psutil.Process()
        rss_before = process.memory_info().rss
        start_time = time.perf_counter()

        result = fn(*args, **kwargs)

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        record = TimingRecord(
            label=label,
            duration_ms=duration_ms,
            memory_delta_bytes=process.memory_info().rss - rss_before,
        )
        self.records.append(record)
        logger.info(record.format())
        return result

    def get(self, label: str) -> TimingRecord:
        """Most recent record with the given label."""
        for record in reversed(self.records):
            if record.label == label:
                return record
        raise KeyError(label)

    def format(self) -> str:
        return "\n".join(record.format() for record in self.records)

    def __str__(self) -> str:
        return self.format()

    def to_dict(self) -> dict:
        """Convert report to dictionary."""
        return {'records': [asdict(record) for record in self.records]}

    def save_to_file(self, filepath: str):
        """Save report to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> "TimingReport":
        with open(filepath) as f:
            data = json.load(f)
        return cls(records=[TimingRecord(**record) for record in data.get('records', [])])

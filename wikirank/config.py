"""
Runtime configuration for ranking runs.

Values come from defaults, then environment variables, then explicit
overrides (usually command-line flags).
"""

import os
from dataclasses import dataclass, field, replace
from typing import Optional

from wikirank.catalog import DEFAULT_LANGS, LabelCatalog

EXECUTOR_KINDS = ("thread", "process")

ENV_PARTITIONS = "WIKIRANK_PARTITIONS"
ENV_WORKERS = "WIKIRANK_WORKERS"
ENV_EXECUTOR = "WIKIRANK_EXECUTOR"
ENV_REDUCE_TASKS = "WIKIRANK_REDUCE_TASKS"
ENV_LANGS = "WIKIRANK_LANGS"


def _default_parallelism() -> int:
    return os.cpu_count() or 4


def _int_from_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or raw == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class RankingConfig:
    """Settings shared by the CLI, the benchmark and the corpus pool"""
    num_partitions: int = field(default_factory=_default_parallelism)
    max_workers: int = field(default_factory=_default_parallelism)
    executor: str = "thread"
    num_reduce_tasks: Optional[int] = None
    catalog: LabelCatalog = field(default_factory=lambda: LabelCatalog(DEFAULT_LANGS))

    def __post_init__(self):
        if self.num_partitions < 1:
            raise ValueError(f"num_partitions must be >= 1, got {self.num_partitions}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.executor not in EXECUTOR_KINDS:
            raise ValueError(f"executor must be one of {EXECUTOR_KINDS}, got {self.executor!r}")
        if self.num_reduce_tasks is not None and self.num_reduce_tasks < 1:
            raise ValueError(f"num_reduce_tasks must be >= 1, got {self.num_reduce_tasks}")

    @classmethod
    def from_env(cls) -> "RankingConfig":
        """Build a config from WIKIRANK_* environment variables."""
        defaults = cls()
        langs = os.environ.get(ENV_LANGS)
        return cls(
            num_partitions=_int_from_env(ENV_PARTITIONS, defaults.num_partitions),
            max_workers=_int_from_env(ENV_WORKERS, defaults.max_workers),
            executor=os.environ.get(ENV_EXECUTOR, defaults.executor),
            num_reduce_tasks=_int_from_env(ENV_REDUCE_TASKS, defaults.num_reduce_tasks),
            catalog=LabelCatalog.from_string(langs) if langs else defaults.catalog,
        )

    def with_overrides(self, **overrides) -> "RankingConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

"""
Partitioned corpus
Splits the documents into independent chunks and runs one task per chunk
on a worker pool. Results are merged by value once every task finishes.
"""

import logging
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from functools import partial, reduce
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

from wikirank.article import WikipediaArticle
from wikirank.config import EXECUTOR_KINDS, RankingConfig

logger = logging.getLogger(__name__)

Partition = Tuple[WikipediaArticle, ...]


def split_partitions(documents: Sequence[WikipediaArticle], num_partitions: int) -> List[Partition]:
    """
    Split documents into contiguous partitions whose sizes differ by at most one

    Args:
        documents: Documents to split
        num_partitions: Requested number of partitions

    Returns:
        List of partitions. Never more partitions than documents, except that
        an empty corpus yields a single empty partition.
    """
    if num_partitions < 1:
        raise ValueError(f"num_partitions must be >= 1, got {num_partitions}")

    total = len(documents)
    count = max(1, min(num_partitions, total))
    base, extra = divmod(total, count)

    partitions = []
    start = 0
    for i in range(count):
        end = start + base + (1 if i < extra else 0)
        partitions.append(tuple(documents[start:end]))
        start = end
    return partitions


def _fold_partition(seq_op: Callable, zero: Any, partition: Partition) -> Any:
    """Fold one partition into a task-local accumulator."""
    return reduce(seq_op, partition, zero)


class PartitionedCorpus:
    """Read-only, partitioned view over a fixed set of documents"""

    def __init__(self, documents: Sequence[WikipediaArticle], num_partitions: int = 1,
                 max_workers: Optional[int] = None, executor: str = "thread"):
        """
        Initialize the corpus

        Args:
            documents: Already-parsed documents
            num_partitions: Number of independent chunks to split into
            max_workers: Worker pool size (defaults to the partition count)
            executor: 'thread' or 'process'
        """
        if executor not in EXECUTOR_KINDS:
            raise ValueError(f"executor must be one of {EXECUTOR_KINDS}, got {executor!r}")
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self._documents: Partition = tuple(documents)
        self._partitions = split_partitions(self._documents, num_partitions)
        self.max_workers = len(self._partitions) if max_workers is None else max_workers
        self.executor = executor

    @classmethod
    def from_config(cls, documents: Sequence[WikipediaArticle], config: RankingConfig) -> "PartitionedCorpus":
        return cls(documents, num_partitions=config.num_partitions,
                   max_workers=config.max_workers, executor=config.executor)

    @property
    def partitions(self) -> List[Partition]:
        return list(self._partitions)

    @property
    def num_partitions(self) -> int:
        return len(self._partitions)

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[WikipediaArticle]:
        return iter(self._documents)

    def repartition(self, num_partitions: int) -> "PartitionedCorpus":
        """Same documents and pool settings, different chunking."""
        return PartitionedCorpus(self._documents, num_partitions=num_partitions,
                                 max_workers=self.max_workers, executor=self.executor)

    def _make_executor(self, num_tasks: int) -> Executor:
        workers = max(1, min(self.max_workers, num_tasks))
        if self.executor == "process":
            return ProcessPoolExecutor(max_workers=workers)
        return ThreadPoolExecutor(max_workers=workers)

    def run_tasks(self, fn: Callable, items: Sequence[Any], phase: str = "map") -> List[Any]:
        """
        Run fn once per item on the worker pool

        Args:
            fn: Picklable callable (module-level function or partial of one)
            items: One argument per task
            phase: Name used in log messages

        Returns:
            Task results in item order

        Raises:
            Whatever the first failing task raised. Pending tasks are cancelled.
        """
        if not items:
            return []

        logger.debug(f"Submitting {len(items)} {phase} tasks ({self.executor} pool)")
        with self._make_executor(len(items)) as pool:
            futures = [pool.submit(fn, item) for item in items]
            results = []
            for task_id, future in enumerate(futures):
                try:
                    results.append(future.result())
                except Exception as e:
                    logger.error(f"{phase.capitalize()} task {task_id} failed: {e}")
                    for pending in futures[task_id + 1:]:
                        pending.cancel()
                    raise
        return results

    def map_partitions(self, fn: Callable[[Partition], Any]) -> List[Any]:
        """Apply fn to every partition in parallel."""
        return self.run_tasks(fn, self._partitions, phase="map")

    def aggregate(self, zero: Any, seq_op: Callable[[Any, WikipediaArticle], Any],
                  comb_op: Callable[[Any, Any], Any]) -> Any:
        """
        Fold each partition locally with seq_op, then merge with comb_op

        zero must be an identity for comb_op, and comb_op must be associative
        and commutative. Partition results can then be merged in any order.
        """
        partials = self.map_partitions(partial(_fold_partition, seq_op, zero))
        return reduce(comb_op, partials, zero)

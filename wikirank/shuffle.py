"""
Shuffle coordination for keyed aggregations over a partitioned corpus.

Runs one map task per partition, hands each reduce task its bucket from every
map output, then merges the reduce outputs into a single dict.
"""

import logging
from dataclasses import asdict, dataclass
from functools import partial, reduce
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from wikirank.corpus import Partition, PartitionedCorpus
from wikirank.worker.map_executor import MapExecutor, MapFunction, MapOutput, KeyValue
from wikirank.worker.reduce_executor import ReduceExecutor, ReduceFunction

logger = logging.getLogger(__name__)


@dataclass
class ShuffleStats:
    """Data-movement counters for one map/reduce run."""

    num_map_tasks: int
    num_reduce_tasks: int
    use_combiner: bool
    emitted_pairs: int
    shuffled_pairs: int

    @property
    def combiner_reduction_ratio(self) -> float:
        """Fraction of emitted pairs removed before the shuffle."""
        if self.emitted_pairs == 0:
            return 0.0
        return 1.0 - (self.shuffled_pairs / self.emitted_pairs)

    def to_dict(self) -> dict:
        data = asdict(self)
        data['combiner_reduction_ratio'] = self.combiner_reduction_ratio
        return data


@dataclass
class MapReduceResult:
    output: Dict[Any, Any]
    stats: ShuffleStats


def _execute_map(task: Tuple[MapExecutor, Partition]) -> MapOutput:
    executor, partition = task
    return executor.execute(partition)


def _execute_reduce(task: Tuple[ReduceExecutor, List[List[KeyValue]]]) -> List[KeyValue]:
    executor, buckets = task
    return executor.execute(buckets)


def run_map_reduce(corpus: PartitionedCorpus, map_func: MapFunction, reduce_func: ReduceFunction,
                   combiner_func: Optional[ReduceFunction] = None,
                   num_reduce_tasks: Optional[int] = None) -> MapReduceResult:
    """
    Run a full map -> (combine) -> shuffle -> reduce pass

    Args:
        corpus: Partitioned input; one map task per partition
        map_func: Callable(record) yielding (key, value) pairs
        reduce_func: Callable(key, values) yielding exactly one (key, value) pair
        combiner_func: Optional local pre-aggregation with the reduce signature
        num_reduce_tasks: Reduce partitions (defaults to the corpus partition count)

    Returns:
        MapReduceResult with the merged output and shuffle statistics
    """
    num_reduce_tasks = num_reduce_tasks or corpus.num_partitions

    map_tasks = [
        (MapExecutor(task_id, num_reduce_tasks, map_func, combiner_func), partition)
        for task_id, partition in enumerate(corpus.partitions)
    ]
    map_outputs = corpus.run_tasks(_execute_map, map_tasks, phase="map")

    reduce_tasks = []
    for partition_id in range(num_reduce_tasks):
        buckets = [out.buckets[partition_id] for out in map_outputs if partition_id in out.buckets]
        if not buckets:  # Skip empty partitions
            continue
        reduce_tasks.append((ReduceExecutor(partition_id, reduce_func), buckets))
    reduce_outputs = corpus.run_tasks(_execute_reduce, reduce_tasks, phase="reduce")

    output = {}
    for pairs in reduce_outputs:
        for key, value in pairs:
            output[key] = value

    stats = ShuffleStats(
        num_map_tasks=len(map_tasks),
        num_reduce_tasks=num_reduce_tasks,
        use_combiner=combiner_func is not None,
        emitted_pairs=sum(out.emitted_pairs for out in map_outputs),
        shuffled_pairs=sum(out.combined_pairs for out in map_outputs),
    )
    logger.info(f"Shuffle: {stats.num_map_tasks} map tasks, {stats.num_reduce_tasks} reduce tasks, "
                f"{stats.emitted_pairs} pairs emitted, {stats.shuffled_pairs} pairs shuffled")
    return MapReduceResult(output=output, stats=stats)


def _collect_values(key: Any, values: List[Any]) -> Iterable[KeyValue]:
    yield (key, tuple(values))


def _fold_values(func: Callable[[Any, Any], Any], key: Any, values: List[Any]) -> Iterable[KeyValue]:
    yield (key, reduce(func, values))


def group_by_key(corpus: PartitionedCorpus, map_func: MapFunction,
                 num_reduce_tasks: Optional[int] = None) -> Dict[Any, Tuple[Any, ...]]:
    """Group every emitted value under its key. No combiner is possible here."""
    return run_map_reduce(corpus, map_func, _collect_values,
                          num_reduce_tasks=num_reduce_tasks).output


def reduce_by_key(corpus: PartitionedCorpus, map_func: MapFunction, func: Callable[[Any, Any], Any],
                  num_reduce_tasks: Optional[int] = None) -> Dict[Any, Any]:
    """
    Merge values per key with a binary function, combining map-side first

    func must be associative and commutative.
    """
    fold = partial(_fold_values, func)
    return run_map_reduce(corpus, map_func, fold, combiner_func=fold,
                          num_reduce_tasks=num_reduce_tasks).output

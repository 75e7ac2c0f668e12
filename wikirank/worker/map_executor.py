"""
Map Task Executor
Applies the map function to one corpus partition, partitions the output
by reduce task, and optionally combines it locally before the shuffle
"""

import logging
import zlib
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

KeyValue = Tuple[Any, Any]
MapFunction = Callable[[Any], Iterable[KeyValue]]
CombinerFunction = Callable[[Any, List[Any]], Iterable[KeyValue]]


def partition_for_key(key: Any, num_reduce_tasks: int) -> int:
    """
    Reduce partition for a key

    Uses crc32 rather than hash() because str hashes are salted per
    interpreter and would disagree between process-pool workers.
    """
    return zlib.crc32(str(key).encode('utf-8')) % num_reduce_tasks


@dataclass
class MapOutput:
    """Intermediate output of a single map task"""
    task_id: int
    buckets: Dict[int, List[KeyValue]] = field(default_factory=dict)
    emitted_pairs: int = 0
    combined_pairs: int = 0


class MapExecutor:
    """Executes a single map task"""

    def __init__(self, task_id: int, num_reduce_tasks: int, map_func: MapFunction,
                 combiner_func: Optional[CombinerFunction] = None):
        """
        Initialize the map executor

        Args:
            task_id: ID of this map task (the partition index)
            num_reduce_tasks: Number of reduce tasks (for partitioning)
            map_func: Callable taking one record and yielding (key, value) pairs
            combiner_func: Optional callable(key, values) yielding combined pairs
        """
        if num_reduce_tasks < 1:
            raise ValueError(f"num_reduce_tasks must be >= 1, got {num_reduce_tasks}")
        self.task_id = task_id
        self.num_reduce_tasks = num_reduce_tasks
        self.map_func = map_func
        self.combiner_func = combiner_func

    @property
    def use_combiner(self) -> bool:
        return self.combiner_func is not None

    def execute(self, records: Iterable[Any]) -> MapOutput:
        """
        Execute the map task

        Args:
            records: The partition assigned to this task

        Returns:
            MapOutput with pairs bucketed by reduce partition
        """
        logger.debug(f"Map task {self.task_id}: Processing partition")
        intermediate = defaultdict(list)
        emitted = 0
        for record in records:
            for out_key, out_value in self.map_func(record):
                intermediate[partition_for_key(out_key, self.num_reduce_tasks)].append((out_key, out_value))
                emitted += 1

        logger.debug(f"Map task {self.task_id}: Generated {emitted} intermediate pairs")

        if self.use_combiner:
            intermediate = self._apply_combiner(intermediate)
            combined = sum(len(v) for v in intermediate.values())
            logger.debug(f"Map task {self.task_id}: After combiner: {combined} pairs")
        else:
            combined = emitted

        return MapOutput(
            task_id=self.task_id,
            buckets=dict(intermediate),
            emitted_pairs=emitted,
            combined_pairs=combined,
        )

    def _apply_combiner(self, intermediate: Dict[int, List[KeyValue]]) -> Dict[int, List[KeyValue]]:
        """
        Apply the combiner to local map output

        Args:
            intermediate: Dictionary mapping partition_id to list of (key, value) pairs

        Returns:
            Dictionary with same structure but with combined values
        """
        combined = {}
        for partition, kv_pairs in intermediate.items():
            key_groups = defaultdict(list)
            for k, v in kv_pairs:
                key_groups[k].append(v)

            combined_pairs = []
            for key, values in key_groups.items():
                for out_key, out_value in self.combiner_func(key, values):
                    combined_pairs.append((out_key, out_value))

            combined[partition] = combined_pairs

        return combined

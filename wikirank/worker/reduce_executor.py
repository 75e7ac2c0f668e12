"""
Reduce Task Executor
Merges the buckets produced for one reduce partition by every map task,
groups values by key, and applies the reduce function
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List, Sequence, Tuple

logger = logging.getLogger(__name__)

KeyValue = Tuple[Any, Any]
ReduceFunction = Callable[[Any, List[Any]], Iterable[KeyValue]]


def _sort_key(key: Any):
    # Keys of mixed types still need a deterministic order
    return (type(key).__name__, str(key))


class ReduceExecutor:
    """Executes a single reduce task"""

    def __init__(self, partition_id: int, reduce_func: ReduceFunction):
        """
        Initialize the reduce executor

        Args:
            partition_id: Reduce partition this task is responsible for
            reduce_func: Callable(key, values) yielding (key, value) pairs
        """
        self.partition_id = partition_id
        self.reduce_func = reduce_func

    def execute(self, buckets: Sequence[Sequence[KeyValue]]) -> List[KeyValue]:
        """
        Execute the reduce task

        Args:
            buckets: This partition's bucket from each map task, in any order

        Returns:
            Reduced (key, value) pairs, sorted by key
        """
        key_groups = self._group(buckets)
        logger.debug(f"Reduce task {self.partition_id}: Grouped {len(key_groups)} unique keys")

        results = []
        for key in sorted(key_groups, key=_sort_key):
            for out_key, out_value in self.reduce_func(key, key_groups[key]):
                results.append((out_key, out_value))

        logger.debug(f"Reduce task {self.partition_id}: Generated {len(results)} output pairs")
        return results

    def _group(self, buckets: Sequence[Sequence[KeyValue]]) -> Dict[Any, List[Any]]:
        key_groups = defaultdict(list)
        for bucket in buckets:
            for key, value in bucket:
                key_groups[key].append(value)
        return key_groups

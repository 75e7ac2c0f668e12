"""
Benchmark the ranking strategies across partition counts.
Each run is timed with TimingReport; results go to JSON and CSV files.
"""

import csv
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from wikirank.article import WikipediaArticle
from wikirank.config import RankingConfig
from wikirank.corpus import PartitionedCorpus
from wikirank.metrics import TimingReport
from wikirank.ranking import STRATEGIES, run_strategy

logger = logging.getLogger(__name__)

DEFAULT_PARTITION_COUNTS = (1, 2, 4, 8)


def run_benchmark(articles: Sequence[WikipediaArticle], config: RankingConfig,
                  num_partitions: int, run_number: int = 1) -> List[Dict]:
    """Run every strategy once at the given partition count."""
    corpus = PartitionedCorpus(articles, num_partitions=num_partitions,
                               max_workers=config.max_workers, executor=config.executor)
    report = TimingReport()
    timestamp = datetime.now().isoformat()

    results = []
    for name, (label, _) in STRATEGIES.items():
        ranking = report.timed(label, run_strategy, name, config.catalog, corpus,
                               config.num_reduce_tasks)
        record = report.get(label)
        results.append({
            "benchmark_name": f"{name}_p{corpus.num_partitions}",
            "strategy": name,
            "run_number": run_number,
            "timestamp": timestamp,
            "num_articles": len(corpus),
            "num_partitions": corpus.num_partitions,
            "max_workers": config.max_workers,
            "executor": config.executor,
            "duration_ms": record.duration_ms,
            "memory_delta_bytes": record.memory_delta_bytes,
            "top_label": ranking[0].label if ranking else "",
            "top_count": ranking[0].count if ranking else 0,
        })
    return results


def run_suite(articles: Sequence[WikipediaArticle], config: RankingConfig,
              partition_counts: Sequence[int] = DEFAULT_PARTITION_COUNTS,
              runs: int = 1) -> List[Dict]:
    """Run the benchmark for every partition count, runs times each."""
    if runs < 1:
        raise ValueError(f"runs must be >= 1, got {runs}")

    all_results = []
    for num_partitions in partition_counts:
        for run in range(1, runs + 1):
            logger.info(f"Benchmark: {num_partitions} partitions (Run {run})")
            all_results.extend(run_benchmark(articles, config, num_partitions, run_number=run))
    return all_results


def save_results(results: List[Dict], results_dir: Path, timestamp: str) -> Tuple[Path, Optional[Path]]:
    """Save results to JSON and CSV files. The CSV path is None when there are no rows."""
    results_dir = Path(results_dir)
    results_dir.mkdir(parents=True, exist_ok=True)

    json_file = results_dir / f"benchmark_results_{timestamp}.json"
    with open(json_file, 'w') as f:
        json.dump(results, f, indent=2)

    csv_file = None
    if results:
        csv_file = results_dir / f"benchmark_results_{timestamp}.csv"
        fieldnames = list(results[0].keys())
        with open(csv_file, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(results)

    written = [json_file] + ([csv_file] if csv_file else [])
    logger.info(f"Results saved to: {', '.join(str(p) for p in written)}")
    return json_file, csv_file


def print_summary(results: List[Dict]):
    """Print a summary table of results."""
    print(f"\n{'='*70}")
    print("BENCHMARK SUMMARY")
    print(f"{'='*70}")
    print(f"{'Strategy':<10} {'Partitions':>10} {'Run':>5} {'Runtime':>12} {'Top label':>15}")
    print(f"{'-'*70}")

    for r in results:
        print(f"{r['strategy']:<10} {r['num_partitions']:>10} {r['run_number']:>5} "
              f"{r['duration_ms']:>9} ms {r['top_label']:>15}")

    print(f"{'='*70}")

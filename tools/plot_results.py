#!/usr/bin/env python3
"""
Generate plots from benchmark results.
"""

import json
import sys
from collections import defaultdict
from pathlib import Path

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

# Configuration
PLOTS_DIR = Path("benchmark_results/plots")

STRATEGY_COLORS = {
    'naive': '#FF6B6B',
    'index': '#FFE66D',
    'reduce': '#4ECDC4',
}


def load_results(json_file):
    """Load benchmark results from JSON file."""
    with open(json_file, 'r') as f:
        return json.load(f)


def aggregate_runs(results):
    """
    Aggregate multiple runs of the same benchmark.
    Returns dict: (strategy, num_partitions) -> {avg_runtime, std_runtime, ...}
    """
    by_benchmark = defaultdict(list)
    for r in results:
        by_benchmark[(r['strategy'], r['num_partitions'])].append(r)

    aggregated = {}
    for (strategy, partitions), runs in by_benchmark.items():
        runtimes = [r['duration_ms'] for r in runs]
        aggregated[(strategy, partitions)] = {
            'strategy': strategy,
            'num_partitions': partitions,
            'num_articles': runs[0]['num_articles'],
            'avg_runtime': float(np.mean(runtimes)),
            'std_runtime': float(np.std(runtimes)),
            'min_runtime': float(np.min(runtimes)),
            'max_runtime': float(np.max(runtimes)),
            'num_runs': len(runs)
        }

    return aggregated


def _series(aggregated, strategy):
    data = sorted((v['num_partitions'], v['avg_runtime'], v['std_runtime'])
                  for v in aggregated.values() if v['strategy'] == strategy)
    return data


def plot_partition_scaling(aggregated, output_file):
    """Plot runtime vs number of partitions, one line per strategy."""
    strategies = sorted({v['strategy'] for v in aggregated.values()})
    if not strategies:
        print("No benchmark data found")
        return False

    plt.figure(figsize=(10, 6))
    for strategy in strategies:
        partitions, runtimes, stds = zip(*_series(aggregated, strategy))
        plt.errorbar(partitions, runtimes, yerr=stds, marker='o', capsize=5,
                     linewidth=2, markersize=8, label=strategy,
                     color=STRATEGY_COLORS.get(strategy))
    plt.xlabel('Number of Partitions', fontsize=12)
    plt.ylabel('Runtime (ms)', fontsize=12)
    plt.title('Language Ranking: Partition Scaling', fontsize=14, fontweight='bold')
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_file, dpi=150, bbox_inches='tight')
    print(f"Saved: {output_file}")
    plt.close()
    return True


def plot_speedup(aggregated, output_file):
    """Plot speedup relative to the smallest partition count, per strategy."""
    strategies = sorted({v['strategy'] for v in aggregated.values()})
    series = {s: _series(aggregated, s) for s in strategies}
    series = {s: d for s, d in series.items() if len(d) >= 2}
    if not series:
        print("Insufficient data for speedup plot")
        return False

    plt.figure(figsize=(10, 6))
    for strategy, data in series.items():
        partitions, runtimes, _ = zip(*data)
        baseline = runtimes[0]
        speedups = [baseline / rt if rt > 0 else 0.0 for rt in runtimes]
        plt.plot(partitions, speedups, marker='o', linewidth=2, markersize=8,
                 label=strategy, color=STRATEGY_COLORS.get(strategy))
    plt.xlabel('Number of Partitions', fontsize=12)
    plt.ylabel('Speedup', fontsize=12)
    plt.title('Speedup vs Partition Count', fontsize=14, fontweight='bold')
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_file, dpi=150, bbox_inches='tight')
    print(f"Saved: {output_file}")
    plt.close()
    return True


def generate_summary_table(aggregated, output_file):
    """Generate a markdown table summarizing all results."""
    lines = [
        "# Benchmark Results Summary\n",
        "| Strategy | Partitions | Articles | Avg Runtime (ms) | Std Dev | Runs |",
        "|----------|------------|----------|------------------|---------|------|"
    ]

    for key in sorted(aggregated.keys()):
        v = aggregated[key]
        lines.append(
            f"| {v['strategy']:<8} | {v['num_partitions']:>10} | {v['num_articles']:>8} | "
            f"{v['avg_runtime']:>16.1f} | {v['std_runtime']:>7.2f} | {v['num_runs']:>4} |"
        )

    with open(output_file, 'w') as f:
        f.write('\n'.join(lines) + '\n')

    print(f"Saved: {output_file}")


def main(argv=None):
    """Generate all plots from benchmark results."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("Usage: python tools/plot_results.py <results.json> [plots_dir]")
        return 1

    json_file = argv[0]
    plots_dir = Path(argv[1]) if len(argv) > 1 else PLOTS_DIR

    if not Path(json_file).exists():
        print(f"File not found: {json_file}")
        return 1

    results = load_results(json_file)
    aggregated = aggregate_runs(results)
    print(f"Aggregated {len(results)} results into {len(aggregated)} benchmarks")

    plots_dir.mkdir(parents=True, exist_ok=True)
    plot_partition_scaling(aggregated, plots_dir / "1_partition_scaling.png")
    plot_speedup(aggregated, plots_dir / "2_speedup.png")
    generate_summary_table(aggregated, plots_dir / "results_table.md")
    return 0


if __name__ == "__main__":
    sys.exit(main())

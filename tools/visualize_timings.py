#!/usr/bin/env python3
"""
Plot a saved timing report (wikirank rank --timings-out).
"""

import sys

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from wikirank.metrics import TimingReport

COLORS = ['#FF6B6B', '#FFE66D', '#4ECDC4', '#95E1D3', '#A8E6CF']


def plot_strategy_comparison(report, output_file):
    """Bar chart of duration and memory delta per timed label."""
    labels = [r.label for r in report.records]
    durations = [r.duration_ms for r in report.records]
    memory = [r.memory_delta_bytes / (1024**2) for r in report.records]
    colors = [COLORS[i % len(COLORS)] for i in range(len(labels))]

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    ax1.barh(labels, durations, color=colors)
    ax1.set_xlabel('Duration (ms)')
    ax1.set_title('Ranking Time')
    ax1.grid(axis='x', alpha=0.3)

    ax2.barh(labels, memory, color=colors)
    ax2.set_xlabel('Resident Memory Delta (MB)')
    ax2.set_title('Memory Growth')
    ax2.grid(axis='x', alpha=0.3)
    ax2.tick_params(labelleft=False)

    if durations and max(durations) > 0:
        baseline = durations[0]
        for i, d in enumerate(durations[1:], start=1):
            if d > 0:
                ax1.text(d, i, f' {baseline / d:.1f}x', va='center', fontsize=10)

    plt.tight_layout()
    plt.savefig(output_file, dpi=150)
    plt.close(fig)
    print(f"Saved plot to {output_file}")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("Usage: python tools/visualize_timings.py <timings.json> [output.png]")
        return 1

    report = TimingReport.load_from_file(argv[0])
    output_file = argv[1] if len(argv) > 1 else 'timings.png'
    plot_strategy_comparison(report, output_file)
    return 0


if __name__ == '__main__':
    sys.exit(main())

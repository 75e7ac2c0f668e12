"""
Unit tests for the benchmark runner
"""

import csv
import json
import os

import pytest

from wikirank.benchmark import print_summary, run_benchmark, run_suite, save_results
from wikirank.config import RankingConfig


class TestRunBenchmark:

    def test_one_row_per_strategy(self, sample_articles):
        config = RankingConfig(num_partitions=1, max_workers=2)
        rows = run_benchmark(sample_articles, config, num_partitions=2)

        assert [r['strategy'] for r in rows] == ["naive", "index", "reduce"]
        assert all(r['num_partitions'] == 2 for r in rows)
        assert all(r['num_articles'] == len(sample_articles) for r in rows)
        assert {(r['top_label'], r['top_count']) for r in rows} == {("Java", 2)}

    def test_suite_covers_every_partition_count_and_run(self, sample_articles):
        config = RankingConfig(num_partitions=1, max_workers=2)
        rows = run_suite(sample_articles, config, partition_counts=[1, 3], runs=2)

        assert len(rows) == 2 * 2 * 3
        assert {(r['num_partitions'], r['run_number']) for r in rows} == {(1, 1), (1, 2), (3, 1), (3, 2)}

    def test_suite_rejects_non_positive_runs(self, sample_articles):
        with pytest.raises(ValueError, match="runs must be >= 1"):
            run_suite(sample_articles, RankingConfig(), partition_counts=[1], runs=0)


class TestSaveResults:

    def test_writes_json_and_csv(self, temp_dir, sample_articles):
        rows = run_suite(sample_articles, RankingConfig(max_workers=2), partition_counts=[2])
        json_file, csv_file = save_results(rows, temp_dir, "20250101_000000")

        with open(json_file) as f:
            assert json.load(f) == rows
        with open(csv_file, newline='') as f:
            csv_rows = list(csv.DictReader(f))
        assert [r['strategy'] for r in csv_rows] == ["naive", "index", "reduce"]

    def test_empty_results_write_no_csv(self, temp_dir):
        json_file, csv_file = save_results([], temp_dir, "20250101_000000")
        assert csv_file is None
        assert os.listdir(temp_dir) == [json_file.name]

    def test_summary_lists_every_row(self, capsys, sample_articles):
        rows = run_suite(sample_articles, RankingConfig(max_workers=2), partition_counts=[1])
        print_summary(rows)
        out = capsys.readouterr().out
        assert "BENCHMARK SUMMARY" in out
        assert out.count("Java") == 3

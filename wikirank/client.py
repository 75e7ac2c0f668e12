"""
Command-line driver for ranking languages in a Wikipedia dump.
"""

import argparse
import logging
import sys
from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional

from wikirank.benchmark import DEFAULT_PARTITION_COUNTS, print_summary, run_suite, save_results
from wikirank.catalog import LabelCatalog
from wikirank.config import EXECUTOR_KINDS, RankingConfig
from wikirank.corpus import PartitionedCorpus
from wikirank.metrics import TimingReport
from wikirank.ranking import STRATEGIES, RankedEntry, run_strategy
from wikirank.wikipedia_data import generate_articles, read_articles, write_articles

logger = logging.getLogger(__name__)

EXIT_MISMATCH = 1
EXIT_BAD_INPUT = 2


def build_config(args) -> RankingConfig:
    """Environment config with command-line flags applied on top."""
    catalog = LabelCatalog.from_string(args.langs) if getattr(args, 'langs', None) else None
    return RankingConfig.from_env().with_overrides(
        num_partitions=getattr(args, 'partitions', None),
        max_workers=args.workers,
        executor=args.executor,
        num_reduce_tasks=args.reduce_tasks,
        catalog=catalog,
    )


def rankings_agree(rankings: Dict[str, List[RankedEntry]]) -> bool:
    """True when every ranking holds the same (label, count) multiset."""
    multisets = [Counter(tuple(entry) for entry in ranking) for ranking in rankings.values()]
    return all(m == multisets[0] for m in multisets[1:])


def format_ranking(title: str, ranking: List[RankedEntry]) -> str:
    lines = [title, "-" * len(title)]
    for position, entry in enumerate(ranking, start=1):
        lines.append(f"{position:>3}. {entry.label:<15} {entry.count:>8}")
    return "\n".join(lines)


def rank_languages(args) -> int:
    """Run the selected strategies and print rankings and timings."""
    config = build_config(args)
    articles = read_articles(args.input)
    corpus = PartitionedCorpus.from_config(articles, config)
    logger.info(f"Ranking {len(config.catalog)} languages over {len(corpus)} articles "
                f"in {corpus.num_partitions} partitions")

    names = list(STRATEGIES) if args.strategy == "all" else [args.strategy]
    report = TimingReport()
    rankings = {}
    for name in names:
        label, _ = STRATEGIES[name]
        rankings[name] = report.timed(label, run_strategy, name, config.catalog, corpus,
                                      config.num_reduce_tasks)

    for name, ranking in rankings.items():
        print(format_ranking(STRATEGIES[name][0], ranking))
        print()
    print(report.format())

    if args.timings_out:
        report.save_to_file(args.timings_out)
        logger.info(f"Saved timings to {args.timings_out}")

    if not rankings_agree(rankings):
        logger.error("Strategies disagree on language counts")
        return EXIT_MISMATCH
    return 0


def generate_corpus(args) -> int:
    """Write a synthetic dump file."""
    catalog = LabelCatalog.from_string(args.langs) if args.langs else RankingConfig.from_env().catalog
    written = write_articles(args.output, generate_articles(args.articles, list(catalog), seed=args.seed))
    print(f"Wrote {written} articles to {args.output}")
    return 0


def benchmark(args) -> int:
    """Run every strategy across several partition counts."""
    config = build_config(args)
    articles = read_articles(args.input)
    partition_counts = [int(p) for p in args.partition_counts.split(',') if p.strip()]
    results = run_suite(articles, config, partition_counts=partition_counts, runs=args.runs)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    json_file, csv_file = save_results(results, args.results_dir, timestamp)
    print_summary(results)
    saved = [json_file] + ([csv_file] if csv_file else [])
    print(f"Results: {', '.join(str(p) for p in saved)}")
    return 0


def _add_pool_arguments(parser):
    parser.add_argument("--workers", type=int, help="Worker pool size")
    parser.add_argument("--executor", choices=EXECUTOR_KINDS, help="Worker pool kind")
    parser.add_argument("--reduce-tasks", type=int, help="Number of reduce partitions")
    parser.add_argument("--langs", help="Comma-separated languages to rank")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rank programming languages by Wikipedia mentions")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    rank_parser = subparsers.add_parser("rank", help="Rank languages in a dump file")
    rank_parser.add_argument("--input", required=True, help="Wikipedia dump, one <page> per line")
    rank_parser.add_argument("--strategy", default="all", choices=["all"] + list(STRATEGIES),
                             help="Ranking strategy to run")
    rank_parser.add_argument("--partitions", type=int, help="Number of corpus partitions")
    rank_parser.add_argument("--timings-out", help="Write the timing report as JSON")
    _add_pool_arguments(rank_parser)

    generate_parser = subparsers.add_parser("generate", help="Write a synthetic dump file")
    generate_parser.add_argument("--output", required=True, help="Output file path")
    generate_parser.add_argument("--articles", type=int, default=1000, help="Number of articles")
    generate_parser.add_argument("--seed", type=int, default=0, help="Random seed")
    generate_parser.add_argument("--langs", help="Comma-separated languages to mention")

    bench_parser = subparsers.add_parser("benchmark", help="Time strategies across partition counts")
    bench_parser.add_argument("--input", required=True, help="Wikipedia dump, one <page> per line")
    bench_parser.add_argument("--partitions", dest="partition_counts",
                              default=",".join(str(p) for p in DEFAULT_PARTITION_COUNTS),
                              help="Comma-separated partition counts")
    bench_parser.add_argument("--runs", type=int, default=1, help="Runs per partition count")
    bench_parser.add_argument("--results-dir", default="benchmark_results", help="Results directory")
    _add_pool_arguments(bench_parser)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    commands = {
        "rank": rank_languages,
        "generate": generate_corpus,
        "benchmark": benchmark,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return EXIT_BAD_INPUT

    try:
        return command(args)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT


if __name__ == '__main__':
    sys.exit(main())

"""
Correctness validation tests
All strategies must agree, whatever the partitioning or worker pool
"""

import pytest

from wikirank.article import WikipediaArticle
from wikirank.catalog import DEFAULT_LANGS
from wikirank.corpus import PartitionedCorpus
from wikirank.ranking import build_index, rank_by_reduce, rank_from_index, rank_naive


def _rankings(corpus, num_reduce_tasks=None):
    return (
        rank_naive(DEFAULT_LANGS, corpus),
        rank_from_index(build_index(DEFAULT_LANGS, corpus, num_reduce_tasks)),
        rank_by_reduce(DEFAULT_LANGS, corpus, num_reduce_tasks),
    )


def _brute_force_counts(articles):
    return {lang: sum(1 for a in articles if lang in a.text.split()) for lang in DEFAULT_LANGS}


class ExplodingArticle(WikipediaArticle):
    def mentions_language(self, lang):
        raise RuntimeError("corrupt article")

    def mention_set(self, langs):
        raise RuntimeError("corrupt article")


@pytest.mark.integration
class TestCountEquivalence:
    """Tests that the three strategies produce identical rankings"""

    def test_strategies_agree_with_brute_force(self, generated_articles):
        corpus = PartitionedCorpus(generated_articles, num_partitions=4)
        expected = _brute_force_counts(generated_articles)
        for ranking in _rankings(corpus):
            assert dict(ranking) == expected

    @pytest.mark.parametrize("num_partitions", [1, 2, 3, 7, 16])
    def test_repartitioning_does_not_change_results(self, generated_articles, num_partitions):
        baseline = _rankings(PartitionedCorpus(generated_articles, num_partitions=1))
        repartitioned = _rankings(PartitionedCorpus(generated_articles, num_partitions=num_partitions))
        assert repartitioned == baseline
        assert baseline[0] == baseline[1] == baseline[2]

    @pytest.mark.parametrize("num_reduce_tasks", [1, 4, 15, 32])
    def test_reduce_task_count_does_not_change_results(self, generated_articles, num_reduce_tasks):
        corpus = PartitionedCorpus(generated_articles, num_partitions=5)
        assert _rankings(corpus, num_reduce_tasks) == _rankings(corpus)

    def test_ranking_is_sorted_with_stable_ties(self, generated_articles):
        corpus = PartitionedCorpus(generated_articles, num_partitions=3)
        for ranking in _rankings(corpus):
            for before, after in zip(ranking, ranking[1:]):
                assert before.count >= after.count
                if before.count == after.count:
                    assert DEFAULT_LANGS.index(before.label) < DEFAULT_LANGS.index(after.label)

    def test_process_pool_matches_thread_pool(self, generated_articles):
        threads = PartitionedCorpus(generated_articles, num_partitions=3, max_workers=3, executor="thread")
        processes = PartitionedCorpus(generated_articles, num_partitions=3, max_workers=2, executor="process")
        assert _rankings(processes) == _rankings(threads)


@pytest.mark.integration
class TestWorkerFailure:
    """A failing partition task is fatal for the ranking call"""

    @pytest.mark.parametrize("strategy", [
        lambda corpus: rank_naive(DEFAULT_LANGS, corpus),
        lambda corpus: rank_from_index(build_index(DEFAULT_LANGS, corpus)),
        lambda corpus: rank_by_reduce(DEFAULT_LANGS, corpus),
    ])
    def test_failure_propagates(self, generated_articles, strategy):
        articles = list(generated_articles)
        articles[150] = ExplodingArticle("bad", "Java")
        corpus = PartitionedCorpus(articles, num_partitions=4)
        with pytest.raises(RuntimeError, match="corrupt article"):
            strategy(corpus)

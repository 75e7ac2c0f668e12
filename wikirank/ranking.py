"""
Language ranking strategies.

All three strategies return the same (label, count) entries, ordered by count
descending with ties left in catalog order:

- rank_naive: one parallel aggregate over the corpus per language
- build_index + rank_from_index: one pass building an inverted index
- rank_by_reduce: one pass of (lang, 1) pairs with map-side combining
"""

import logging
import operator
from functools import partial
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple

from wikirank.article import WikipediaArticle
from wikirank.corpus import PartitionedCorpus
from wikirank.shuffle import group_by_key, reduce_by_key

logger = logging.getLogger(__name__)


class RankedEntry(NamedTuple):
    label: str
    count: int


InvertedIndex = Dict[str, Tuple[WikipediaArticle, ...]]


def sort_ranking(counts: Mapping[str, int], catalog: Iterable[str]) -> List[RankedEntry]:
    """
    Order catalog labels by count, descending

    sorted() is stable, so equal counts keep catalog order. Labels missing
    from counts are ranked with 0.
    """
    entries = [RankedEntry(label, counts.get(label, 0)) for label in catalog]
    return sorted(entries, key=lambda entry: -entry.count)


def _count_mention(lang: str, acc: int, article: WikipediaArticle) -> int:
    return acc + 1 if article.mentions_language(lang) else acc


def occurrences_of_lang(lang: str, corpus: PartitionedCorpus) -> int:
    """Number of articles that mention lang at least once."""
    return corpus.aggregate(0, partial(_count_mention, lang), operator.add)


def rank_naive(catalog: Iterable[str], corpus: PartitionedCorpus) -> List[RankedEntry]:
    """Rank by scanning the whole corpus once per language."""
    langs = tuple(catalog)
    counts = {lang: occurrences_of_lang(lang, corpus) for lang in langs}
    return sort_ranking(counts, langs)


def language_article_pairs(langs: Tuple[str, ...], article: WikipediaArticle):
    return article.to_article_pairs(langs)


def language_count_pairs(langs: Tuple[str, ...], article: WikipediaArticle):
    return article.to_count_pairs(langs)


def build_index(catalog: Iterable[str], corpus: PartitionedCorpus,
                num_reduce_tasks: Optional[int] = None) -> InvertedIndex:
    """
    Inverted index from language to the articles mentioning it

    Keys follow catalog order and every language is present, with an empty
    group when nothing mentions it.
    """
    langs = tuple(catalog)
    grouped = group_by_key(corpus, partial(language_article_pairs, langs), num_reduce_tasks)
    index = {lang: grouped.get(lang, ()) for lang in langs}
    logger.debug(f"Built inverted index: {sum(len(g) for g in index.values())} postings "
                 f"for {len(index)} languages")
    return index


def rank_from_index(index: Mapping[str, Tuple[WikipediaArticle, ...]]) -> List[RankedEntry]:
    """Rank by group size; ties follow the index's key order."""
    counts = {lang: len(articles) for lang, articles in index.items()}
    return sort_ranking(counts, index.keys())


def rank_by_reduce(catalog: Iterable[str], corpus: PartitionedCorpus,
                   num_reduce_tasks: Optional[int] = None) -> List[RankedEntry]:
    """Rank with a single combined map/reduce pass over (lang, 1) pairs."""
    langs = tuple(catalog)
    counts = reduce_by_key(corpus, partial(language_count_pairs, langs), operator.add, num_reduce_tasks)
    return sort_ranking(counts, langs)


def rank_using_index(catalog: Iterable[str], corpus: PartitionedCorpus,
                     num_reduce_tasks: Optional[int] = None) -> List[RankedEntry]:
    """Build the inverted index and rank from it in one call."""
    return rank_from_index(build_index(catalog, corpus, num_reduce_tasks))


def _rank_naive(catalog, corpus, num_reduce_tasks=None):
    return rank_naive(catalog, corpus)


STRATEGIES = {
    "naive": ("Part 1: naive ranking", _rank_naive),
    "index": ("Part 2: ranking using inverted index", rank_using_index),
    "reduce": ("Part 3: ranking using reduceByKey", rank_by_reduce),
}


def run_strategy(name: str, catalog: Iterable[str], corpus: PartitionedCorpus,
                 num_reduce_tasks: Optional[int] = None) -> List[RankedEntry]:
    """Run one of STRATEGIES by name."""
    try:
        _, strategy = STRATEGIES[name]
    except KeyError:
        raise ValueError(f"Unknown strategy {name!r}, expected one of {sorted(STRATEGIES)}")
    return strategy(catalog, corpus, num_reduce_tasks)

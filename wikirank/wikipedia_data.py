"""
Wikipedia dump ingestion
Parses the one-article-per-line dump format:

    <page><title>TITLE</title><text>TEXT</text></page>

and generates synthetic corpora in the same format for benchmarks
"""

import logging
import os
import random
from typing import Iterable, Iterator, List, Sequence

from wikirank.article import WikipediaArticle

logger = logging.getLogger(__name__)

PAGE_PREFIX = "<page><title>"
TITLE_TEXT_SEPARATOR = "</title><text>"
PAGE_SUFFIX = "</text></page>"

FILLER_WORDS = (
    "the", "a", "language", "program", "compiler", "runtime", "library",
    "syntax", "type", "system", "developed", "released", "version", "used",
    "web", "functional", "object", "oriented", "interpreter", "standard",
)


class MalformedArticleError(ValueError):
    """Raised when a dump line is not a single <page> record."""


def parse(line: str) -> WikipediaArticle:
    """
    Parse one dump line into an article

    Args:
        line: A single line, with or without trailing newline

    Returns:
        The parsed WikipediaArticle

    Raises:
        MalformedArticleError: If the line is not in the dump format
    """
    line = line.rstrip('\r\n')
    if not line.startswith(PAGE_PREFIX) or not line.endswith(PAGE_SUFFIX):
        raise MalformedArticleError(f"Not a <page> record: {line[:60]!r}")

    body = line[len(PAGE_PREFIX):len(line) - len(PAGE_SUFFIX)]
    i = body.find(TITLE_TEXT_SEPARATOR)
    if i < 0:
        raise MalformedArticleError(f"Missing title/text separator: {line[:60]!r}")

    return WikipediaArticle(title=body[:i], text=body[i + len(TITLE_TEXT_SEPARATOR):])


def format_article(article: WikipediaArticle) -> str:
    """
    Render an article as a dump line (without newline)

    Raises:
        MalformedArticleError: If the article cannot be parsed back from a
            single line (a line break in either field, or the title/text
            separator inside the title)
    """
    for field in (article.title, article.text):
        if '\n' in field or '\r' in field:
            raise MalformedArticleError(f"Line break in article {article.title[:60]!r}")
    if TITLE_TEXT_SEPARATOR in article.title:
        raise MalformedArticleError(f"Title contains {TITLE_TEXT_SEPARATOR!r}: {article.title[:60]!r}")
    return f"{PAGE_PREFIX}{article.title}{TITLE_TEXT_SEPARATOR}{article.text}{PAGE_SUFFIX}"


def lines(filepath: str) -> Iterator[str]:
    """Yield the raw lines of a dump file."""
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Wikipedia dump not found: {filepath}")

    with open(filepath, 'r', encoding='utf-8', errors='ignore') as f:
        yield from f


def read_articles(filepath: str, skip_malformed: bool = True) -> List[WikipediaArticle]:
    """
    Read and parse every article in a dump file

    Args:
        filepath: Path to the dump
        skip_malformed: Log and skip bad lines instead of raising

    Returns:
        Parsed articles in file order
    """
    articles = []
    skipped = 0
    for line_num, line in enumerate(lines(filepath), start=1):
        if not line.strip():
            continue
        try:
            articles.append(parse(line))
        except MalformedArticleError as e:
            if not skip_malformed:
                raise
            skipped += 1
            logger.warning(f"Skipping malformed line {line_num} in {filepath}: {e}")

    logger.info(f"Read {len(articles)} articles from {filepath}, skipped {skipped} malformed lines")
    return articles


def write_articles(filepath: str, articles: Iterable[WikipediaArticle]) -> int:
    """
    Write articles one per line; returns the number written

    Every article is formatted before the file is opened, so an article that
    cannot round-trip leaves no partial dump behind.
    """
    rendered = [format_article(article) for article in articles]

    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(filepath, 'w', encoding='utf-8') as f:
        for line in rendered:
            f.write(line + '\n')
    return len(rendered)


def generate_articles(count: int, langs: Sequence[str], seed: int = 0,
                      max_mentions: int = 3, words_per_article: int = 40) -> List[WikipediaArticle]:
    """
    Deterministic synthetic corpus

    Each article mentions between zero and max_mentions languages (possibly
    repeated) scattered among filler words.
    """
    rng = random.Random(seed)
    langs = list(langs)
    articles = []
    for i in range(count):
        words = [rng.choice(FILLER_WORDS) for _ in range(words_per_article)]
        if langs:
            for _ in range(rng.randint(0, max_mentions)):
                words.insert(rng.randrange(len(words) + 1), rng.choice(langs))
        articles.append(WikipediaArticle(title=f"Article {i}", text=' '.join(words)))
    return articles

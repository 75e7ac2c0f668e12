"""
Pytest configuration and shared fixtures
"""

import os
import shutil
import tempfile

import pytest

from wikirank.article import WikipediaArticle
from wikirank.catalog import DEFAULT_LANGS, LabelCatalog
from wikirank.wikipedia_data import generate_articles, write_articles


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files"""
    dirpath = tempfile.mkdtemp()
    yield dirpath
    shutil.rmtree(dirpath)


@pytest.fixture
def go_rust_catalog():
    """Two-language catalog used by the small scenarios"""
    return LabelCatalog(["Go", "Rust"])


@pytest.fixture
def sample_articles():
    """Small hand-written corpus with known counts"""
    return [
        WikipediaArticle("Java", "Java is a language that runs on the JVM like Scala"),
        WikipediaArticle("Scala", "Scala mixes functional and object oriented code , see Java"),
        WikipediaArticle("Python", "Python is popular . Python has many libraries"),
        WikipediaArticle("Web", "JavaScript and CSS power the web , sometimes with PHP"),
        WikipediaArticle("Nothing", "This article mentions no languages at all"),
        WikipediaArticle("Tricky", "Javascript JAVA Pythonic Scala-like C#-ish"),
    ]


@pytest.fixture
def sample_counts():
    """Expected per-language counts for sample_articles"""
    counts = {lang: 0 for lang in DEFAULT_LANGS}
    counts.update({"Java": 2, "Scala": 2, "Python": 1, "JavaScript": 1, "CSS": 1, "PHP": 1})
    return counts


@pytest.fixture
def generated_articles():
    """Deterministic synthetic corpus mentioning the default languages"""
    return generate_articles(300, DEFAULT_LANGS, seed=7)


@pytest.fixture
def sample_dump_file(temp_dir, sample_articles):
    """Write sample_articles to a dump file"""
    filepath = os.path.join(temp_dir, 'wikipedia.dat')
    write_articles(filepath, sample_articles)
    return filepath

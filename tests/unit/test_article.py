"""
Unit tests for WikipediaArticle
"""

import dataclasses

import pytest

from wikirank.article import WikipediaArticle


class TestMentionsLanguage:
    """Tests for the token-level mention predicate"""

    def test_exact_token_matches(self):
        article = WikipediaArticle("t", "I write Go every day")
        assert article.mentions_language("Go")

    def test_substring_of_longer_token_does_not_match(self):
        """'Golang' is not a mention of 'Go'"""
        article = WikipediaArticle("t", "Golang is the informal name")
        assert not article.mentions_language("Go")

    def test_comparison_is_case_sensitive(self):
        article = WikipediaArticle("t", "java and PYTHON")
        assert not article.mentions_language("Java")
        assert not article.mentions_language("Python")

    def test_any_whitespace_separates_tokens(self):
        article = WikipediaArticle("t", "first\tRust\nthen  Go")
        assert article.mentions_language("Rust")
        assert article.mentions_language("Go")

    def test_punctuation_attached_to_token_prevents_match(self):
        article = WikipediaArticle("t", "we used Scala, mostly")
        assert not article.mentions_language("Scala")

    def test_title_is_not_searched(self):
        article = WikipediaArticle("Python", "a snake")
        assert not article.mentions_language("Python")

    def test_empty_text(self):
        assert not WikipediaArticle("t", "").mentions_language("Go")


class TestMentionSet:
    """Tests for multi-language expansion"""

    def test_mention_set_follows_catalog_order(self):
        article = WikipediaArticle("t", "Rust then Go then Rust")
        assert article.mention_set(["Go", "Java", "Rust"]) == ["Go", "Rust"]

    def test_repeated_mentions_appear_once(self):
        article = WikipediaArticle("t", "Go Go Go")
        assert article.mention_set(["Go"]) == ["Go"]

    def test_article_pairs_carry_the_article(self):
        article = WikipediaArticle("t", "Go and Rust")
        pairs = article.to_article_pairs(["Go", "Rust", "C++"])
        assert pairs == [("Go", article), ("Rust", article)]

    def test_count_pairs_carry_unit_counts(self):
        article = WikipediaArticle("t", "Go and Rust")
        assert article.to_count_pairs(["Rust", "Go"]) == [("Rust", 1), ("Go", 1)]

    def test_no_mentions_yields_no_pairs(self):
        article = WikipediaArticle("t", "nothing here")
        assert article.to_count_pairs(["Go"]) == []
        assert article.to_article_pairs(["Go"]) == []


class TestImmutability:

    def test_fields_cannot_be_reassigned(self):
        article = WikipediaArticle("t", "text")
        with pytest.raises(dataclasses.FrozenInstanceError):
            article.text = "other"

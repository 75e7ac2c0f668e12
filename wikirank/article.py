"""
Wikipedia article record
Immutable (title, text) document with the language-mention predicate
used by every ranking strategy
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple


@dataclass(frozen=True)
class WikipediaArticle:
    """A single parsed article"""
    title: str
    text: str

    def mentions_language(self, lang: str) -> bool:
        """
        Check whether the text mentions a language

        Args:
            lang: Language to look for (e.g. "Scala")

        Returns:
            True if lang appears as a whitespace-delimited token of the text
        """
        return lang in self.text.split()

    def mention_set(self, langs: Iterable[str]) -> List[str]:
        """
        Languages from langs mentioned by this article, in catalog order

        The text is tokenized once, so this is cheaper than calling
        mentions_language for every language.
        """
        tokens = set(self.text.split())
        return [lang for lang in langs if lang in tokens]

    def to_article_pairs(self, langs: Iterable[str]) -> List[Tuple[str, "WikipediaArticle"]]:
        """Emit (lang, article) for every mentioned language"""
        return [(lang, self) for lang in self.mention_set(langs)]

    def to_count_pairs(self, langs: Iterable[str]) -> List[Tuple[str, int]]:
        """Emit (lang, 1) for every mentioned language"""
        return [(lang, 1) for lang in self.mention_set(langs)]

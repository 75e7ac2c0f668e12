"""
Label catalog: the ordered list of languages being ranked.
"""

from typing import Dict, Iterable, Iterator, Tuple

DEFAULT_LANGS = (
    "JavaScript", "Java", "PHP", "Python", "C#", "C++", "Ruby", "CSS",
    "Objective-C", "Perl", "Scala", "Haskell", "MATLAB", "Clojure", "Groovy",
)


class LabelCatalog:
    """Read-only ordered sequence of unique labels."""

    def __init__(self, labels: Iterable[str] = DEFAULT_LANGS):
        self._labels: Tuple[str, ...] = tuple(labels)
        self._positions: Dict[str, int] = {}
        for i, label in enumerate(self._labels):
            if label in self._positions:
                raise ValueError(f"Duplicate label in catalog: {label}")
            self._positions[label] = i

    @classmethod
    def from_string(cls, value: str) -> "LabelCatalog":
        """Build a catalog from a comma-separated list, e.g. 'Go,Rust'."""
        return cls(part.strip() for part in value.split(',') if part.strip())

    def position(self, label: str) -> int:
        """Index of label in the catalog; raises KeyError if absent."""
        return self._positions[label]

    @property
    def labels(self) -> Tuple[str, ...]:
        return self._labels

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, label) -> bool:
        return label in self._positions

    def __eq__(self, other) -> bool:
        if isinstance(other, LabelCatalog):
            return self._labels == other._labels
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._labels)

    def __repr__(self) -> str:
        return f"LabelCatalog({list(self._labels)!r})"

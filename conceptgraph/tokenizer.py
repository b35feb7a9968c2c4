"""
Tokenizer Module
================

Concept extraction from raw text.

One whitespace-delimited token becomes one concept. Stop words are
dropped by case-insensitive comparison, but surviving tokens keep their
original casing, order and repetitions: repetition is how downstream
components see salience, and order drives transition detection.
"""

import re
from typing import Any, FrozenSet, Iterable, List, Optional

from .constants import STOP_WORDS

_WHITESPACE = re.compile(r'\s+')


class ConceptExtractor:
    """
    Whitespace tokenizer with stop word removal.

    Attributes:
        stop_words: Lower-cased words to filter out

    Example:
        extractor = ConceptExtractor()
        extractor.extract("The Neural network and the brain")
        # ['Neural', 'network', 'brain']
    """

    DEFAULT_STOP_WORDS = STOP_WORDS

    def __init__(self, stop_words: Optional[Iterable[str]] = None):
        """
        Initialize extractor.

        Args:
            stop_words: Custom stop words; compared lower-cased.
                Defaults to DEFAULT_STOP_WORDS.
        """
        if stop_words is None:
            self.stop_words: FrozenSet[str] = self.DEFAULT_STOP_WORDS
        else:
            self.stop_words = frozenset(word.lower() for word in stop_words)

    def extract(self, text: Any) -> List[str]:
        """
        Extract concepts from text.

        Args:
            text: Input text. Anything that is not a string yields no concepts.

        Returns:
            Concepts in input order, duplicates preserved.
        """
        if not isinstance(text, str):
            return []
        return [
            token for token in _WHITESPACE.split(text)
            if token and token.lower() not in self.stop_words
        ]

    def is_stop_word(self, word: str) -> bool:
        """Check if a word is a stop word."""
        return word.lower() in self.stop_words

"""
Response Assembly
=================

Turns a merged edge list into a short answer plus supporting details.

The answer comes first and stays short: one sentence naming the primary
concepts and, when there are more, one naming the further associations.
The details sentence reports how many associations were found and under
which profiles.

The answer is built as a list of template sentences. The personality
factor sets its tone (reserved, neutral or expressive), then subject
change markers are inserted after the first sentence that mentions either
concept of the transition. Markers are placed between template sentences,
never inside one, so concepts containing punctuation (``Dr.``) stay whole.
"""

import re
from collections import Counter
from typing import Dict, List, Optional, Sequence

from .constants import (
    EXPRESSIVE_PERSONALITY,
    EXPRESSIVE_PREFIX,
    NO_ASSOCIATIONS_SUMMARY,
    PLEASANTRIES,
    RESERVED_PERSONALITY,
)
from .edges import Edge
from .results import AssembledResponse, MergedResult, Transition

# Concepts named in the opening sentence; the rest go into the second one
PRIMARY_CONCEPTS = 3

_TERMINAL_PUNCTUATION = ('.', '!', '?')
_PLEASANTRY = re.compile(
    r'\b(?:' + '|'.join(re.escape(p) for p in sorted(PLEASANTRIES)) + r')\b',
    re.IGNORECASE
)


def join_concepts(concepts: Sequence[str]) -> str:
    """``['a']`` -> ``'a'``; ``['a', 'b', 'c']`` -> ``'a, b and c'``."""
    if len(concepts) <= 1:
        return ''.join(concepts)
    return f"{', '.join(concepts[:-1])} and {concepts[-1]}"


def rank_concepts(edges: Sequence[Edge], limit: int) -> List[str]:
    """
    Most frequent edge endpoints, ties broken by first appearance.

    Args:
        edges: Edges to count endpoints of
        limit: Maximum number of concepts to return

    Returns:
        Up to ``limit`` concepts, most frequent first.
    """
    counts: Counter = Counter()
    for edge in edges:
        counts[edge.source] += 1
        counts[edge.target] += 1
    # Counter iterates in first-seen order and sorted() is stable
    ranked = sorted(counts, key=lambda concept: counts[concept], reverse=True)
    return ranked[:limit]


def mentions(sentence: str, concept: str) -> bool:
    """True if ``concept`` appears in ``sentence`` as a whole word (case-insensitive)."""
    if not concept:
        return False
    pattern = r'(?<!\S)' + re.escape(concept.lower()) + r'(?=[\s,;:.!?]|$)'
    return re.search(pattern, sentence.lower()) is not None


def as_sentence(text: str) -> str:
    """Terminate ``text`` with a period unless it already ends a sentence."""
    return text if text.endswith(_TERMINAL_PUNCTUATION) else text + '.'


def strip_pleasantries(text: str) -> str:
    """Remove pleasantries and the whitespace they leave behind."""
    stripped = _PLEASANTRY.sub('', text)
    stripped = re.sub(r'\s{2,}', ' ', stripped)
    return re.sub(r'\s+([,.!?])', r'\1', stripped).strip()


def apply_tone(sentences: Sequence[str], personality_factor: Optional[float]) -> List[str]:
    """
    Adjust answer sentences to the personality factor.

    Below 0.3 the answer is reserved (pleasantries removed), below 0.6 it
    is left as is, and from 0.6 on the first sentence gets an expressive
    prefix. ``None`` leaves the sentences untouched.
    """
    sentences = list(sentences)
    if personality_factor is None or not sentences:
        return sentences
    if personality_factor < RESERVED_PERSONALITY:
        return [strip_pleasantries(sentence) for sentence in sentences]
    if personality_factor < EXPRESSIVE_PERSONALITY:
        return sentences
    sentences[0] = EXPRESSIVE_PREFIX + sentences[0]
    return sentences


def splice_markers(sentences: Sequence[str], transitions: Sequence[Transition]) -> List[str]:
    """
    Insert transition markers between sentences.

    Each marker goes after the first sentence mentioning either side of its
    transition. Transitions no sentence mentions are left out, and a marker
    is inserted at most once per sentence.

    Args:
        sentences: Answer sentences, each already terminated
        transitions: Transitions in detection order

    Returns:
        Sentences with markers (as sentences of their own) interleaved.
    """
    inserts: Dict[int, List[str]] = {}
    for transition in transitions:
        for index, sentence in enumerate(sentences):
            if mentions(sentence, transition.source) or mentions(sentence, transition.target):
                markers = inserts.setdefault(index, [])
                if transition.marker not in markers:
                    markers.append(transition.marker)
                break

    spliced = []
    for index, sentence in enumerate(sentences):
        spliced.append(sentence)
        spliced.extend(as_sentence(marker) for marker in inserts.get(index, ()))
    return spliced


class ResponseAssembler:
    """
    Formats merged results for callers.

    Attributes:
        top_n: Maximum number of top concepts reported
        personality_factor: Tone of the answer; None keeps the plain template
    """

    def __init__(self, top_n: int = 5, personality_factor: Optional[float] = None):
        self.top_n = top_n
        self.personality_factor = personality_factor

    def summary_sentences(self, top_concepts: Sequence[str]) -> List[str]:
        """Template sentences naming the top concepts; empty when there are none."""
        if not top_concepts:
            return []
        sentences = [f"Primary interpretation involves {join_concepts(top_concepts[:PRIMARY_CONCEPTS])}."]
        further = top_concepts[PRIMARY_CONCEPTS:]
        if further:
            sentences.append(f"Further associations reach {join_concepts(further)}.")
        return sentences

    def summarize(
        self,
        top_concepts: Sequence[str],
        transitions: Optional[Sequence[Transition]] = None
    ) -> str:
        """Toned summary with transition markers, or the fixed fallback."""
        sentences = self.summary_sentences(top_concepts)
        if not sentences:
            return NO_ASSOCIATIONS_SUMMARY
        sentences = apply_tone(sentences, self.personality_factor)
        return ' '.join(splice_markers(sentences, transitions or ()))

    def describe(self, merged: MergedResult) -> str:
        """Supporting detail sentence for a merged result."""
        if merged.is_empty:
            return "Found 0 associations."
        count = len(merged.edges)
        profiles = len(merged.active_profiles)
        details = (
            f"Found {count} association{'s' if count != 1 else ''} across "
            f"{profiles} profile{'s' if profiles != 1 else ''}: "
            f"{', '.join(merged.active_profiles)}."
        )
        strongest = merged.edges[0]
        return details + (
            f" Strongest association: {strongest.source} - {strongest.target} "
            f"({strongest.strength:.2f})."
        )

    def assemble(
        self,
        merged: MergedResult,
        transitions: Optional[Sequence[Transition]] = None
    ) -> AssembledResponse:
        """
        Build the response for a merged result.

        Args:
            merged: Merged profile output
            transitions: Subject changes to announce, in order

        Returns:
            AssembledResponse. An empty merged result yields the fixed
            "No associations found." summary.
        """
        top_concepts = rank_concepts(merged.edges, self.top_n)
        return AssembledResponse(
            summary=self.summarize(top_concepts, transitions),
            details=self.describe(merged),
            top_concepts=top_concepts,
            edge_count=len(merged.edges)
        )

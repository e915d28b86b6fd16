#!/usr/bin/env python3
"""
Text Similarity - Lexical relevance signals for hybrid search.

Two signals are provided:
- trigram_similarity: Jaccard overlap of word trigram sets, following the
  pg_trgm convention (lower-cased words padded with two leading blanks and
  one trailing blank).
- full_text_match: True when every significant query term appears in the
  document after stop-word removal and light suffix stripping, the same
  all-terms semantics as a plain-text tsquery.
"""

import re
from typing import Set, List, Iterable

_WORD_RE = re.compile(r'[a-z0-9]+')

_STOP_WORDS = frozenset({
    'a', 'an', 'and', 'are', 'as', 'at', 'be', 'but', 'by', 'for', 'from',
    'has', 'have', 'in', 'into', 'is', 'it', 'its', 'of', 'on', 'or', 'that',
    'the', 'their', 'this', 'to', 'was', 'were', 'will', 'with',
})

_SUFFIXES = ('ing', 'es', 'ed', 's')


def _words(text: str) -> List[str]:
    return _WORD_RE.findall((text or '').lower())


def trigrams(text: str) -> Set[str]:
    """Return the pg_trgm-style trigram set of a string."""
    result: Set[str] = set()
    for word in _words(text):
        padded = f"  {word} "
        for i in range(len(padded) - 2):
            result.add(padded[i:i + 3])
    return result


def trigram_similarity(left: str, right: str) -> float:
    """Jaccard similarity of trigram sets, in [0, 1]."""
    a = trigrams(left)
    b = trigrams(right)
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


def stem(word: str) -> str:
    """Strip one common English suffix, keeping at least three characters."""
    for suffix in _SUFFIXES:
        if word.endswith(suffix) and len(word) - len(suffix) >= 3:
            return word[:-len(suffix)]
    return word


def lexemes(text: str) -> Set[str]:
    return {stem(w) for w in _words(text) if w not in _STOP_WORDS}


def full_text_match(document: str, query: str) -> bool:
    """True when all significant query terms occur in the document."""
    query_terms = lexemes(query)
    if not query_terms:
        return False
    return query_terms <= lexemes(document)


def any_term_in(terms: Iterable[str], query: str) -> bool:
    """True when any whitespace-separated, lower-cased query word equals one of `terms`."""
    query_words = set((query or '').lower().split())
    return any((term or '').lower() in query_words for term in terms)

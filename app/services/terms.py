"""
Search term derivation.

Turns raw query text into the list of terms matched against content
fields: hyphenated words are expanded into their parts and their joined
form, short tokens and stopwords are dropped.
"""
import re
from typing import Iterable, List, Mapping, Sequence

STOPWORDS = frozenset("""
    a an and are as at be but by for if in into is it no not of on or such
    that the their then there these they this to was will with
""".split())

MIN_TERM_LENGTH = 3

HYPHENATED_PATTERN = re.compile(r"\w+(?:-\w+)+")
TOKEN_SEPARATOR = re.compile(r"[^a-zA-Z0-9_-]")


def _unique(terms: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for term in terms:
        if term and term not in seen:
            seen.add(term)
            result.append(term)
    return result


def derived_terms(query: str) -> List[str]:
    """
    Add components of hyphenated terms.

    e.g. anti-biotics => anti-biotics, anti, biotics, antibiotics
    """
    result: List[str] = []
    for match in HYPHENATED_PATTERN.finditer(query):
        hyphenated = match.group(0)
        result.append(hyphenated)
        result.extend(part for part in hyphenated.split("-") if part)
        result.append(hyphenated.replace("-", ""))
    return result


def processed_terms(query: str) -> List[str]:
    """Drop short tokens and stopwords; survivors are kept as one phrase."""
    tokens = [
        token for token in TOKEN_SEPARATOR.split(query)
        if len(token) >= MIN_TERM_LENGTH and token.lower() not in STOPWORDS
    ]
    return [" ".join(tokens)]


def build_terms(query: str) -> List[str]:
    """
    Final term set for a query.

    An empty list means no term filter should be applied at all.
    """
    query = (query or "").strip()
    if not query:
        return []
    return _unique(derived_terms(query) + processed_terms(query))


def expand_with_synonyms(terms: Sequence[str], synonyms: Mapping[str, Sequence[str]]) -> List[str]:
    """
    Append the synonyms of each term, and of each word of a multi-word term.

    Keys of ``synonyms`` are matched case-insensitively.
    """
    lookup = {word.lower(): words for word, words in synonyms.items()}
    expanded = list(terms)
    for term in terms:
        candidates = [term] + (term.split() if " " in term else [])
        for candidate in candidates:
            expanded.extend(lookup.get(candidate.lower(), ()))
    return _unique(word.strip() for word in expanded)


def lookup_words(terms: Sequence[str]) -> List[str]:
    """Lower-cased terms and term words, used to fetch synonym rows."""
    words = []
    for term in terms:
        words.append(term.lower())
        if " " in term:
            words.extend(word.lower() for word in term.split())
    return _unique(words)

"""Term-importance weights over a small, explicit corpus of documents.

Each call to `score_documents` builds its own table: nothing is cached or
shared between calls, so concurrent scorers never see each other's terms.
"""

import re
from collections.abc import Sequence
from types import MappingProxyType

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lower-case, turn punctuation into spaces, collapse whitespace."""
    text = _NON_WORD.sub(" ", (text or "").lower())
    return _WHITESPACE.sub(" ", text).strip()


def tokenize(text: str) -> list[str]:
    normalized = normalize_text(text)
    return normalized.split(" ") if normalized else []


class TermWeights:
    """Read-only lookup of tf-idf weights per (term, document index)."""

    def __init__(self, terms: Sequence[str], matrix: np.ndarray) -> None:
        self._index = MappingProxyType({t: i for i, t in enumerate(terms)})
        self._matrix = matrix
        self._matrix.setflags(write=False)

    @property
    def n_documents(self) -> int:
        return self._matrix.shape[0]

    @property
    def terms(self) -> list[str]:
        return list(self._index)

    def weight(self, term: str, doc_index: int) -> float:
        col = self._index.get(term)
        if col is None:
            return 0.0
        return float(self._matrix[doc_index, col])


def score_documents(documents: Sequence[str]) -> TermWeights:
    """Build tf-idf weights treating `documents` as the whole corpus.

    tf is the raw term count; idf = 1 + ln(N / (1 + df)).
    """
    normalized = [normalize_text(d) for d in documents]
    vectorizer = CountVectorizer(
        lowercase=False,
        token_pattern=r"(?u)\b\w+\b",
    )
    try:
        counts = vectorizer.fit_transform(normalized).toarray().astype(float)
    except ValueError:
        # Every document empty: no vocabulary
        return TermWeights([], np.zeros((len(documents), 0)))

    n_docs = counts.shape[0]
    df = np.count_nonzero(counts, axis=0)
    idf = 1.0 + np.log(n_docs / (1.0 + df))
    terms = vectorizer.get_feature_names_out().tolist()
    return TermWeights(terms, counts * idf)


def score(document_a: str, document_b: str) -> TermWeights:
    """Two-document form: index 0 is `document_a`, index 1 is `document_b`."""
    return score_documents([document_a, document_b])

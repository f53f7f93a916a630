from __future__ import annotations
from typing import Dict, FrozenSet, Iterator, List, Optional, Sequence
from collections import Counter
import math
from .datatypes import Document
from .preprocessing import is_blank, tokenize

SparseVector = Dict[int, float]  # vocabulary index -> weight

class Vocabulary:
    """Token -> dense index in [0, len). Indices follow first appearance in the corpus."""

    def __init__(self, tokens: Optional[Sequence[str]] = None):
        self._index: Dict[str, int] = {}
        for t in tokens or ():
            self.add(t)

    def add(self, token: str) -> int:
        idx = self._index.get(token)
        if idx is None:
            idx = len(self._index)
            self._index[token] = idx
        return idx

    def __getitem__(self, token: str) -> int:
        return self._index[token]

    def __contains__(self, token: str) -> bool:
        return token in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

def build_vocabulary(corpus: Sequence[Document]) -> Vocabulary:
    vocab = Vocabulary()
    for doc in corpus:
        for tok in tokenize(doc.text):
            vocab.add(tok)
    return vocab

def document_frequencies(corpus: Sequence[Document]) -> Counter:
    """Number of distinct documents containing each token (not total occurrences)."""
    df: Counter = Counter()
    for doc in corpus:
        df.update(set(tokenize(doc.text)))
    return df

def _compute_tf(tokens: List[str]) -> Dict[str, float]:
    """
    TF normalized by the most frequent token of the document:
      tf(w) = count(w) / max_count, in (0, 1]
    """
    counts = Counter(tokens)
    if not counts:
        return {}
    max_count = max(counts.values())
    return {t: c / max_count for t, c in counts.items()}

def _idf(n_docs: int, df: int) -> float:
    # 1 <= df <= N keeps this finite and non-negative
    return math.log(n_docs / df)

def dot(v1: SparseVector, v2: SparseVector) -> float:
    if len(v1) > len(v2):
        v1, v2 = v2, v1
    return sum(w * v2[i] for i, w in v1.items() if i in v2)

def jaccard(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    """|a & b| / |a | b|; two empty sets score 0.0 rather than dividing by zero."""
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union

class TfidfModel:
    """
    Corpus-wide TF-IDF weighting with a per-document vector cache.

    The vocabulary and document frequencies are fixed at construction. Weight
    vectors (and their norms) are built on first access and reused for every
    later pair and every threshold of a sweep; the corpus is immutable for the
    lifetime of the model so nothing is ever invalidated.
    """

    def __init__(self, corpus: Sequence[Document]):
        self.n_docs = len(corpus)
        self.vocabulary = build_vocabulary(corpus)
        self.df = document_frequencies(corpus)
        self._texts: Dict[str, str] = {d.id: d.text for d in corpus}
        self._vectors: Dict[str, SparseVector] = {}
        self._sq_norms: Dict[str, float] = {}

    def idf(self, token: str) -> float:
        return _idf(self.n_docs, self.df[token])

    def _compute_vector(self, text: str) -> SparseVector:
        if is_blank(text):
            return {}
        tf_scores = _compute_tf(tokenize(text))
        weights = {self.vocabulary[t]: tf * self.idf(t) for t, tf in tf_scores.items()}
        # index order, so token-identical documents sum in the same order
        return dict(sorted(weights.items()))

    def vector(self, doc_id: str) -> SparseVector:
        vec = self._vectors.get(doc_id)
        if vec is None:
            vec = self._compute_vector(self._texts[doc_id])
            self._vectors[doc_id] = vec
            self._sq_norms[doc_id] = sum(w * w for w in vec.values())
        return vec

    def norm(self, doc_id: str) -> float:
        self.vector(doc_id)
        return math.sqrt(self._sq_norms[doc_id])

    def cosine(self, a: str, b: str) -> float:
        """Cosine of two cached vectors; 0.0 when they share no weighted token."""
        d = dot(self.vector(a), self.vector(b))
        if d == 0:
            return 0.0
        # sqrt of the product keeps identical vectors at exactly 1.0
        return d / math.sqrt(self._sq_norms[a] * self._sq_norms[b])

    @property
    def cache_size(self) -> int:
        return len(self._vectors)

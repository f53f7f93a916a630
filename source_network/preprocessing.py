from __future__ import annotations
from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple, Union
from .datatypes import CorpusError, Document, Corpus

def is_blank(text: str) -> bool:
    return not text or not text.strip()

def tokenize(text: str) -> List[str]:
    # Whitespace split only; case and stemming are left to the extractor.
    return text.split() if text else []

def token_set(text: str) -> FrozenSet[str]:
    return frozenset(tokenize(text))

def as_corpus(pairs: Iterable[Union[Document, Tuple[str, str]]]) -> Corpus:
    """Turn (id, text) pairs into Documents, keeping their order."""
    corpus: Corpus = []
    for item in pairs:
        if isinstance(item, Document):
            corpus.append(item)
        else:
            doc_id, text = item
            corpus.append(Document(id=doc_id, text=text if text is not None else ""))
    return corpus

def validate_corpus(corpus: Sequence[Document]) -> None:
    """Reject missing and duplicated ids.

    Edges are keyed by id, so two documents sharing one would make the
    output ambiguous (a pair could collapse into a self edge).
    """
    seen = set()
    for pos, doc in enumerate(corpus):
        if not doc.id:
            raise CorpusError(f"Document at position {pos} has no id")
        if doc.id in seen:
            raise CorpusError(f"Duplicate document id: {doc.id}")
        seen.add(doc.id)

class TokenSets:
    """Per-document token sets, tokenized once per run and keyed by id."""

    def __init__(self, corpus: Sequence[Document]):
        self._texts: Dict[str, str] = {d.id: d.text for d in corpus}
        self._cache: Dict[str, FrozenSet[str]] = {}

    def __getitem__(self, doc_id: str) -> FrozenSet[str]:
        toks = self._cache.get(doc_id)
        if toks is None:
            toks = token_set(self._texts[doc_id])
            self._cache[doc_id] = toks
        return toks

    def __len__(self) -> int:
        return len(self._cache)

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple, Union

class CorpusError(ValueError):
    """Raised when a corpus breaks the unique, non-empty id contract."""

@dataclass(frozen=True)
class Document:
    id: str    # canonical class name
    text: str  # author string or normalized comment body, may be empty

@dataclass(frozen=True)
class Edge:
    a: str
    b: str
    weight: float = 1.0  # model score

    def key(self) -> Tuple[str, str]:
        return (self.a, self.b) if self.a <= self.b else (self.b, self.a)

@dataclass
class EdgeSet:
    model: str
    parameter: Union[int, float, None]
    edges: List[Edge] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.edges)

    def __iter__(self):
        return iter(self.edges)

    def pairs(self) -> set:
        # unordered view, useful for comparing edge sets
        return {e.key() for e in self.edges}

Corpus = List[Document]

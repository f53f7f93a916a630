from __future__ import annotations
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union
import networkx as nx
from loguru import logger
from .datatypes import Document, Edge, EdgeSet
from .features import TfidfModel, jaccard
from .preprocessing import TokenSets, is_blank, validate_corpus

Score = Optional[float]
Parameter = Union[int, float, None]

def iter_pairs(n: int) -> Iterator[Tuple[int, int]]:
    """Every unordered index pair of n items once, as (i, j) with j < i."""
    for i in range(n):
        for j in range(i):
            yield i, j

def _check_threshold(threshold: float) -> float:
    if not 0.0 < threshold <= 1.0:
        raise ValueError(f"Threshold must be in (0, 1], got {threshold}")
    return float(threshold)

def _check_min_matches(min_matches: int) -> int:
    if min_matches < 1 or int(min_matches) != min_matches:
        raise ValueError(f"min_matches must be an integer >= 1, got {min_matches}")
    return int(min_matches)

def _collect(corpus: Sequence[Document],
             score: Callable[[Document, Document], Score],
             minimum: float,
             skip_blank: bool = True) -> List[Edge]:
    blank = [is_blank(d.text) for d in corpus] if skip_blank else None
    edges: List[Edge] = []
    for i, j in iter_pairs(len(corpus)):
        if blank is not None and (blank[i] or blank[j]):
            continue
        a, b = corpus[i], corpus[j]
        s = score(a, b)
        if s is not None and s >= minimum:
            edges.append(Edge(a=a.id, b=b.id, weight=s))
    return edges

def build_network_fulltext(corpus: Sequence[Document]) -> EdgeSet:
    """Connect documents whose non-blank texts are equal."""
    validate_corpus(corpus)
    edges = _collect(corpus, lambda a, b: 1.0 if a.text == b.text else None, 1.0)
    return EdgeSet(model="exact", parameter=None, edges=edges)

def build_network_bow(corpus: Sequence[Document], min_matches: int,
                      tokens: Optional[TokenSets] = None) -> EdgeSet:
    """Connect documents sharing at least min_matches distinct tokens."""
    min_matches = _check_min_matches(min_matches)
    validate_corpus(corpus)
    if tokens is None:
        tokens = TokenSets(corpus)
    edges = _collect(corpus, lambda a, b: float(len(tokens[a.id] & tokens[b.id])), min_matches)
    return EdgeSet(model="bow", parameter=min_matches, edges=edges)

def build_network_jaccard(corpus: Sequence[Document], threshold: float,
                          tokens: Optional[TokenSets] = None) -> EdgeSet:
    """Connect documents whose token-set Jaccard ratio reaches threshold."""
    threshold = _check_threshold(threshold)
    validate_corpus(corpus)
    if tokens is None:
        tokens = TokenSets(corpus)
    edges = _collect(corpus, lambda a, b: jaccard(tokens[a.id], tokens[b.id]), threshold)
    return EdgeSet(model="jaccard", parameter=threshold, edges=edges)

def build_network_tfidf_cosine(corpus: Sequence[Document], threshold: float,
                               model: Optional[TfidfModel] = None) -> EdgeSet:
    """
    Connect documents whose TF-IDF cosine similarity reaches threshold.

    Pass a TfidfModel built on the same corpus to reuse its vector cache
    across thresholds. Blank documents get the zero vector, so their dot
    product with anything is 0 and the pair is skipped before the norms are
    touched.
    """
    threshold = _check_threshold(threshold)
    validate_corpus(corpus)
    if model is None:
        model = TfidfModel(corpus)

    def score(a: Document, b: Document) -> Score:
        cos = model.cosine(a.id, b.id)
        return cos if cos != 0 else None

    edges = _collect(corpus, score, threshold, skip_blank=False)
    return EdgeSet(model="tfidf", parameter=threshold, edges=edges)

MATCHERS: Dict[str, Callable[..., EdgeSet]] = {
    "exact": build_network_fulltext,
    "bow": build_network_bow,
    "jaccard": build_network_jaccard,
    "tfidf": build_network_tfidf_cosine,
}

def sweep(model_name: str, corpus: Sequence[Document],
          parameters: Sequence[Parameter] = ()) -> List[EdgeSet]:
    """
    Run one matcher once per parameter value, each producing its own EdgeSet.

    The exact matcher takes no parameter and always runs once. Token sets and
    TF-IDF vectors are computed once for the whole sweep.
    """
    if model_name not in MATCHERS:
        raise ValueError(f"Unknown model: {model_name} (expected one of {sorted(MATCHERS)})")
    corpus = list(corpus)
    validate_corpus(corpus)

    results: List[EdgeSet] = []
    if model_name == "exact":
        results.append(build_network_fulltext(corpus))
    elif model_name == "tfidf":
        tfidf = TfidfModel(corpus)
        logger.debug("TF-IDF vocabulary: {} tokens over {} documents", len(tfidf.vocabulary), tfidf.n_docs)
        for t in parameters:
            results.append(build_network_tfidf_cosine(corpus, t, model=tfidf))
    else:
        tokens = TokenSets(corpus)
        for p in parameters:
            results.append(MATCHERS[model_name](corpus, p, tokens=tokens))

    for es in results:
        logger.info("{} [{}]: {} edges", es.model, es.parameter, len(es))
    return results

def to_networkx(edge_set: EdgeSet, nodes: Optional[Sequence[str]] = None) -> nx.Graph:
    G = nx.Graph()
    if nodes is not None:
        G.add_nodes_from(nodes)
    for e in edge_set:
        G.add_edge(e.a, e.b, weight=e.weight)
    return G

def graph_stats(G: nx.Graph) -> Dict[str, int]:
    return {
        "nodes": G.number_of_nodes(),
        "edges": G.number_of_edges(),
        "connected_nodes": G.number_of_nodes() - nx.number_of_isolates(G),
        "components": nx.number_connected_components(G) if G.number_of_nodes() else 0,
    }

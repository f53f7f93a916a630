from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Optional, Sequence
from loguru import logger
from .config import NetworkConfig, dataset_label
from .datatypes import Corpus, EdgeSet
from .extraction import extract_corpus
from .graphing import graph_stats, sweep, to_networkx
from .writer import (AUTHORS_HEADER, COMMENTS_HEADER, edge_list_name, write_dataset,
                     write_edge_list, write_summary)

def build_networks(corpus: Corpus, cfg: Optional[NetworkConfig] = None) -> List[EdgeSet]:
    # Pipeline glue: every configured model over its parameter sweep
    cfg = cfg or NetworkConfig()
    edge_sets: List[EdgeSet] = []
    for model in cfg.models:
        edge_sets.extend(sweep(model, corpus, cfg.parameters(model)))
    return edge_sets

def run_corpus(corpus: Corpus, dataset: str, kind: str, cfg: NetworkConfig) -> List[Dict]:
    """Build and write every network for one corpus; returns summary rows."""
    outdir = Path(cfg.outdir)
    if cfg.write_datasets:
        header = AUTHORS_HEADER if kind == "authors" else COMMENTS_HEADER
        write_dataset(outdir / f"{kind.upper()}_{dataset}.txt", corpus, header=header)

    nodes = [d.id for d in corpus]
    rows: List[Dict] = []
    for es in build_networks(corpus, cfg):
        write_edge_list(outdir / edge_list_name(kind, dataset, es), es)
        stats = graph_stats(to_networkx(es, nodes=nodes))
        rows.append({"dataset": dataset, "kind": kind, "model": es.model, "parameter": es.parameter, **stats})
    return rows

def run(datasets: Sequence[str], cfg: NetworkConfig) -> List[Dict]:
    rows: List[Dict] = []
    for name in datasets:
        label = dataset_label(name)
        for kind in cfg.kinds:
            corpus = extract_corpus(cfg.dataset_root(name), kind=kind, dataset=label)
            rows.extend(run_corpus(corpus, label, kind, cfg))
    if rows:
        path = write_summary(Path(cfg.outdir) / "summary.csv", rows)
        logger.info("Summary written to {}", path)
    return rows

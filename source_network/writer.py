from __future__ import annotations
import re
from pathlib import Path
from typing import Dict, Iterable, List, Union
import pandas as pd
from .datatypes import Corpus, Document, EdgeSet

EDGE_HEADER = "#CLASS_A CLASS_B"
AUTHORS_HEADER = '#CANONICAL_CLASS_NAME "AUTHOR"'
COMMENTS_HEADER = '#CANONICAL_CLASS_NAME "COMMENTS"'

_DATASET_LINE = re.compile(r'^(\S+)(?:\s+"(.*)")?\s*$')

PathLike = Union[str, Path]

def write_lines(path: PathLike, lines: Iterable[str], header: str = "#") -> Path:
    """Write a header line followed by one line per item."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(header + "\n")
        for line in lines:
            f.write(line + "\n")
    return path

def write_edge_list(path: PathLike, edge_set: EdgeSet, header: str = EDGE_HEADER) -> Path:
    return write_lines(path, (f"{e.a} {e.b}" for e in edge_set), header=header)

def write_dataset(path: PathLike, corpus: Corpus, header: str = AUTHORS_HEADER) -> Path:
    return write_lines(path, (f'{d.id} "{d.text}"' for d in corpus), header=header)

def read_dataset(path: PathLike) -> Corpus:
    """Read an `id "text"` file back into Documents; '#' lines are headers."""
    corpus: Corpus = []
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.rstrip("\n")
            if not line.strip() or line.startswith("#"):
                continue
            m = _DATASET_LINE.match(line)
            if m is None:
                raise ValueError(f"{path}:{lineno}: malformed dataset line")
            corpus.append(Document(id=m.group(1), text=m.group(2) or ""))
    return corpus

def edge_list_name(kind: str, dataset: str, edge_set: EdgeSet) -> str:
    # e.g. AUTHORS_colt_exact.txt, COMMENTS_colt_tfidf_0.7.txt
    name = f"{kind.upper()}_{dataset}_{edge_set.model}"
    if edge_set.parameter is not None:
        name += f"_{edge_set.parameter}"
    return name + ".txt"

def summary_frame(rows: List[Dict]) -> pd.DataFrame:
    columns = ["dataset", "kind", "model", "parameter", "edges", "nodes", "connected_nodes", "components"]
    return pd.DataFrame(rows, columns=columns)

def write_summary(path: PathLike, rows: List[Dict]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    summary_frame(rows).to_csv(path, index=False)
    return path

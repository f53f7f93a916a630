from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List
import numpy as np

# dataset name -> source tree relative to the sources root
DATASETS: Dict[str, str] = {
    "vuze": "Vuze_4901-02_source",
    "jblas": "mikiobraun-jblas-6668ac9/src/main/java",
    "lucene": "lucene-4.1.0/core/src/java",
    "colt": "colt/src",
    "hadoop": "hadoop-2.0.3-alpha/share/hadoop/common/sources/hadoop-common-2.0.3-alpha-sources",
    "jbullet": "jbullet-20101010/src",
    "jung2": "jung2-2_0_1-sources/all_sources",
    "jdk": "jdk1.8.0/src",
}

MODELS = ("exact", "bow", "jaccard", "tfidf")

def threshold_grid(start: float = 0.3, stop: float = 1.0, step: float = 0.1) -> List[float]:
    """start, start + step, ... up to stop (inclusive when a step lands on it), rounded so 0.1 steps do not drift."""
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    n = int(np.floor((stop - start) / step + 1e-9)) + 1
    return [float(t) for t in np.round(start + step * np.arange(n), 6)]

def match_grid(start: int = 1, stop: int = 10) -> List[int]:
    return [int(k) for k in np.arange(start, stop + 1)]

@dataclass
class NetworkConfig:
    sources_root: Path = Path("SoftwareSources")
    outdir: Path = Path("result")
    kinds: List[str] = field(default_factory=lambda: ["authors"])
    models: List[str] = field(default_factory=lambda: list(MODELS))
    bow_matches: List[int] = field(default_factory=match_grid)
    jaccard_thresholds: List[float] = field(default_factory=threshold_grid)
    tfidf_thresholds: List[float] = field(default_factory=threshold_grid)
    write_datasets: bool = True

    def parameters(self, model: str) -> List:
        if model == "bow":
            return list(self.bow_matches)
        if model == "jaccard":
            return list(self.jaccard_thresholds)
        if model == "tfidf":
            return list(self.tfidf_thresholds)
        return []

    def dataset_root(self, name: str) -> Path:
        if name in DATASETS:
            return Path(self.sources_root) / DATASETS[name]
        # anything else is taken as a path to a source tree
        return Path(name)

def dataset_label(name: str) -> str:
    return name if name in DATASETS else Path(name).name

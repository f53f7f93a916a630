"""
main.py
- extract: source tree -> AUTHORS_/COMMENTS_ dataset files
- build:   source tree (or dataset file) -> one edge list per model/parameter + summary.csv
"""
from __future__ import annotations
import argparse
from pathlib import Path
from typing import List, Optional
from loguru import logger

from source_network.config import DATASETS, MODELS, NetworkConfig, dataset_label
from source_network.datatypes import CorpusError
from source_network.extraction import ExtractionError, extract_corpus
from source_network.logs import configure_logging
from source_network.pipeline import run, run_corpus
from source_network.writer import AUTHORS_HEADER, COMMENTS_HEADER, read_dataset, write_dataset, write_summary


def extract(args: argparse.Namespace, cfg: NetworkConfig) -> None:
    for name in args.dataset:
        label = dataset_label(name)
        for kind in cfg.kinds:
            corpus = extract_corpus(cfg.dataset_root(name), kind=kind, dataset=label)
            header = AUTHORS_HEADER if kind == "authors" else COMMENTS_HEADER
            path = write_dataset(Path(cfg.outdir) / f"{kind.upper()}_{label}.txt", corpus, header=header)
            logger.info("[EXTRACT] {} documents -> {}", len(corpus), path)


def build(args: argparse.Namespace, cfg: NetworkConfig) -> None:
    if args.input:
        # a dataset file written earlier; no re-extraction, no rewrite
        if len(cfg.kinds) > 1:
            raise SystemExit("--input holds a single kind; pass one --kind")
        cfg.write_datasets = False
        corpus = read_dataset(args.input)
        label = args.name or Path(args.input).stem
        rows = run_corpus(corpus, label, cfg.kinds[0], cfg)
        write_summary(Path(cfg.outdir) / "summary.csv", rows)
    else:
        if not args.dataset:
            raise SystemExit("build needs --dataset or --input")
        rows = run(args.dataset, cfg)
    logger.info("[BUILD] {} edge sets written to {}/", len(rows), cfg.outdir)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Similarity networks over source-code authors and comments")
    ap.add_argument("--sources-root", default="SoftwareSources")
    ap.add_argument("--outdir", default="result")
    ap.add_argument("--log-level", default="INFO")
    ap.add_argument("--log-file", default=None)
    sub = ap.add_subparsers(dest="command", required=True)

    for cmd in ("extract", "build"):
        p = sub.add_parser(cmd)
        p.add_argument("--dataset", nargs="*", default=[],
                       help=f"known names ({', '.join(DATASETS)}) or paths to source trees")
        p.add_argument("--kind", nargs="+", choices=["authors", "comments"], default=["authors"])
        if cmd == "build":
            p.add_argument("--input", default=None, help="read an existing dataset file instead of extracting")
            p.add_argument("--name", default=None, help="dataset label for --input")
            p.add_argument("--models", nargs="+", choices=list(MODELS), default=list(MODELS))
            p.add_argument("--min-matches", nargs="+", type=int, default=None)
            p.add_argument("--thresholds", nargs="+", type=float, default=None,
                           help="used for both jaccard and tfidf")
    return ap.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> NetworkConfig:
    cfg = NetworkConfig(sources_root=Path(args.sources_root), outdir=Path(args.outdir), kinds=list(args.kind))
    if getattr(args, "models", None):
        cfg.models = list(args.models)
    if getattr(args, "min_matches", None):
        cfg.bow_matches = list(args.min_matches)
    if getattr(args, "thresholds", None):
        cfg.jaccard_thresholds = list(args.thresholds)
        cfg.tfidf_thresholds = list(args.thresholds)
    return cfg


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    cfg = config_from_args(args)
    try:
        if args.command == "extract":
            extract(args, cfg)
        else:
            build(args, cfg)
    except (ExtractionError, CorpusError) as e:
        logger.error("{}", e)
        raise SystemExit(1)


if __name__ == "__main__":
    main()

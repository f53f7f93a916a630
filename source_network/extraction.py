from __future__ import annotations
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union
from loguru import logger
from .datatypes import Corpus, Document

UNKNOWN = "UNKNOWN"

RE_PACKAGE = re.compile(r'^\s*package\s+([\w.$]+)\s*;', re.M)
_AUTHOR_CHARS = r'([:<=">/a-zA-Z @.0-9]+)'
RE_AUTHOR = re.compile(r'(?:User:|author)\s+' + _AUTHOR_CHARS)
# wider net for files without an author tag, mostly license banners
RE_AUTHOR_FALLBACK = re.compile(
    r'(?:Copyright \(c\) 2001-2009|Java port of Bullet \(c\) 2008|Copyright \(c\) 2009,'
    r'|Copyright \(c\) 2009-2011,|User:|Created by|author)\s+' + _AUTHOR_CHARS
)
RE_BLOCK_COMMENT = re.compile(r'/\*.*?\*/', re.S)
RE_LINE_COMMENT = re.compile(r'//[^\n]*')
RE_TAG = re.compile(r'<.*?>')
RE_NON_WORD = re.compile(r'[^a-z0-9]+')

class ExtractionError(ValueError):
    pass

@dataclass(frozen=True)
class AuthorOverride:
    """
    One data-cleaning rule for a dataset's author strings.

    A rule fires when the dataset matches and every guard that is set
    (class_name, author) matches too. `append` adds "|<name>" to the author,
    `replace` substitutes it.
    """
    dataset: str
    class_name: Optional[str] = None
    author: Optional[str] = None
    replace: Optional[str] = None
    append: Optional[str] = None

    def applies(self, dataset: str, class_name: str, author: str) -> bool:
        if self.dataset != dataset:
            return False
        if self.class_name is not None and self.class_name != class_name:
            return False
        if self.author is not None and self.author != author:
            return False
        return True

    def apply(self, author: str) -> str:
        if self.replace is not None:
            author = self.replace
        if self.append is not None:
            author = f"{author}|{self.append}"
        return author

DEFAULT_OVERRIDES = (
    AuthorOverride("jblas", class_name="org.jblas.Eigen", append="Nicolas Oury"),
    AuthorOverride("jblas", class_name="org.jblas.SimpleBlas", append="Nicolas Oury"),
    AuthorOverride("jblas", author="IntelliJ IDEA.", replace="mikio"),
    AuthorOverride("jung2", author="the JUNG Project and the Regents of the University", replace=UNKNOWN),
)

def find_files(root: Union[str, Path], suffix: str = ".java") -> List[Path]:
    root = Path(root)
    if root.is_file():
        return [root] if root.name.endswith(suffix) else []
    found: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            if name.endswith(suffix):
                found.append(Path(dirpath) / name)
    return found

def read_source(path: Union[str, Path]) -> str:
    # latin-1 maps every byte, so odd encodings never fail to decode
    return Path(path).read_text(encoding="latin-1")

def extract_package(source: str) -> str:
    m = RE_PACKAGE.search(source)
    if m is None:
        raise ExtractionError("No package declaration found")
    return m.group(1)

def extract_class_name(path: Union[str, Path]) -> str:
    return Path(path).stem

def canonical_name(source: str, path: Union[str, Path]) -> str:
    return f"{extract_package(source)}.{extract_class_name(path)}"

def extract_author(source: str) -> str:
    """Raw author string, or UNKNOWN when no marker is found."""
    m = RE_AUTHOR.search(source) or RE_AUTHOR_FALLBACK.search(source)
    return m.group(1) if m else UNKNOWN

def clean_author(author: str) -> str:
    author = RE_TAG.sub("", author.strip()).strip()
    if author == '"':
        return UNKNOWN
    return author

def apply_overrides(dataset: str, class_name: str, author: str,
                    overrides: Sequence[AuthorOverride] = DEFAULT_OVERRIDES) -> str:
    for rule in overrides:
        if rule.applies(dataset, class_name, author):
            author = rule.apply(author)
    return author

def _strip_comment(raw: str) -> str:
    if raw.startswith("//"):
        return raw[2:]
    body = raw[2:-2]
    # leading '*' of javadoc continuation lines
    return "\n".join(line.strip().lstrip("*") for line in body.splitlines())

def normalize_comment(text: str) -> str:
    text = RE_TAG.sub(" ", text.lower())
    return RE_NON_WORD.sub(" ", text).strip()

def extract_comments(source: str) -> str:
    """All block and line comments, normalized and joined into one body."""
    parts: List[str] = []
    for m in RE_BLOCK_COMMENT.finditer(source):
        parts.append(_strip_comment(m.group(0)))
    # drop block comments first so '//' inside them is not read twice
    for m in RE_LINE_COMMENT.finditer(RE_BLOCK_COMMENT.sub(" ", source)):
        parts.append(_strip_comment(m.group(0)))
    return normalize_comment(" ".join(parts))

def extract_corpus(root: Union[str, Path],
                   kind: str = "authors",
                   dataset: str = "",
                   overrides: Sequence[AuthorOverride] = DEFAULT_OVERRIDES,
                   suffix: str = ".java") -> Corpus:
    """
    Walk a source tree and build one Document per file.

    kind="authors" uses the cleaned author string, kind="comments" the
    normalized comment body. A later file with an already seen canonical
    name is skipped so ids stay unique.
    """
    if kind not in ("authors", "comments"):
        raise ValueError(f"Unknown corpus kind: {kind}")
    logger.info("Doing project: {} ({})", dataset or root, kind)

    corpus: Corpus = []
    seen = set()
    unknown = 0
    for path in find_files(root, suffix=suffix):
        source = read_source(path)
        try:
            doc_id = canonical_name(source, path)
        except ExtractionError as e:
            raise ExtractionError(f"{e}: {path}") from e
        if doc_id in seen:
            logger.warning("Skipping duplicate class {} in {}", doc_id, path)
            continue
        seen.add(doc_id)

        if kind == "authors":
            raw = extract_author(source)
            if raw == UNKNOWN:
                unknown += 1
            author = apply_overrides(dataset, doc_id, clean_author(raw), overrides)
            # unknown authors stay blank so they never match each other
            text = "" if author == UNKNOWN else author
        else:
            text = extract_comments(source)
        corpus.append(Document(id=doc_id, text=text))

    logger.info("All classes: {}", len(corpus))
    if kind == "authors":
        authors = {d.text for d in corpus}
        logger.info("Unknown author classes: {}", unknown)
        logger.info("Distinct authors: {}", len(authors))
        logger.debug("Authors: {}", sorted(authors))
    return corpus

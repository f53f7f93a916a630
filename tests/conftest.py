import sys
from pathlib import Path

import pytest
from loguru import logger

# project root on sys.path so `source_network` and `main` import without install
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from source_network.datatypes import Document  # noqa: E402

logger.remove()
logger.add(sys.stderr, level="DEBUG", format="{level: <8} | {message}", colorize=False)


@pytest.fixture
def mixed_corpus():
    return [
        Document("org.a.Alpha", "x y z"),
        Document("org.a.Beta", "x y z"),
        Document("org.a.Gamma", "x y w"),
        Document("org.b.Delta", "q r"),
        Document("org.b.Empty", ""),
        Document("org.b.Spaces", "   "),
        Document("org.c.Eps", "x q q q"),
    ]


JAVA_WITH_AUTHOR = """\
/*
 * Copyright (c) 2009, Some Foundation
 */
package org.example.util;

import java.util.List;

/**
 * Handy helpers for <b>lists</b>.
 *
 * @author Jane Doe
 */
public class Lists {
    // returns the first element
    public static Object first(List l) { return l.get(0); }
}
"""

JAVA_NO_AUTHOR = """\
package org.example.util;

public class Plain {
}
"""


@pytest.fixture
def source_tree(tmp_path):
    root = tmp_path / "src"
    pkg = root / "org" / "example" / "util"
    pkg.mkdir(parents=True)
    (pkg / "Lists.java").write_text(JAVA_WITH_AUTHOR, encoding="latin-1")
    (pkg / "Plain.java").write_text(JAVA_NO_AUTHOR, encoding="latin-1")
    (pkg / "notes.txt").write_text("not java", encoding="latin-1")
    return root

import pytest

from source_network.extraction import (UNKNOWN, AuthorOverride, ExtractionError, apply_overrides,
                                       canonical_name, clean_author, extract_author, extract_comments,
                                       extract_corpus, extract_package, find_files)

from conftest import JAVA_NO_AUTHOR, JAVA_WITH_AUTHOR


def test_find_files_only_java_sorted(source_tree):
    files = find_files(source_tree)
    assert [f.name for f in files] == ["Lists.java", "Plain.java"]


def test_extract_package_and_canonical_name():
    assert extract_package(JAVA_WITH_AUTHOR) == "org.example.util"
    assert canonical_name(JAVA_WITH_AUTHOR, "src/org/example/util/Lists.java") == "org.example.util.Lists"


def test_missing_package_is_an_error():
    with pytest.raises(ExtractionError):
        extract_package("public class NoPackage {}")


def test_extract_author_markers():
    assert extract_author(JAVA_WITH_AUTHOR) == "Jane Doe"
    assert extract_author(" * User: slavkoz\n * Date: 3/2/13") == "slavkoz"
    assert extract_author(" * Created by Bob\n") == "Bob"
    assert extract_author(JAVA_NO_AUTHOR) == UNKNOWN


def test_clean_author():
    assert clean_author("  Jane <jane@example.org> ") == "Jane"
    assert clean_author('"') == UNKNOWN


def test_override_rules():
    rules = [
        AuthorOverride("jblas", class_name="org.jblas.Eigen", append="Nicolas Oury"),
        AuthorOverride("jblas", author="IntelliJ IDEA.", replace="mikio"),
    ]
    assert apply_overrides("jblas", "org.jblas.Eigen", "mikio", rules) == "mikio|Nicolas Oury"
    assert apply_overrides("jblas", "org.jblas.Other", "IntelliJ IDEA.", rules) == "mikio"
    assert apply_overrides("colt", "org.jblas.Eigen", "IntelliJ IDEA.", rules) == "IntelliJ IDEA."


def test_extract_comments_normalizes():
    text = extract_comments(JAVA_WITH_AUTHOR)
    assert text == ("copyright c 2009 some foundation handy helpers for lists author jane doe "
                    "returns the first element")
    assert extract_comments(JAVA_NO_AUTHOR) == ""


def test_extract_corpus_authors(source_tree):
    corpus = extract_corpus(source_tree, kind="authors", dataset="demo")
    assert [(d.id, d.text) for d in corpus] == [
        ("org.example.util.Lists", "Jane Doe"),
        ("org.example.util.Plain", ""),
    ]


def test_extract_corpus_comments(source_tree):
    corpus = extract_corpus(source_tree, kind="comments")
    assert corpus[0].text.startswith("copyright")
    assert corpus[1].text == ""


def test_extract_corpus_skips_duplicate_classes(source_tree):
    other = source_tree / "copy" / "org" / "example" / "util"
    other.mkdir(parents=True)
    (other / "Plain.java").write_text(JAVA_NO_AUTHOR, encoding="latin-1")
    corpus = extract_corpus(source_tree)
    ids = [d.id for d in corpus]
    assert ids.count("org.example.util.Plain") == 1


def test_extract_corpus_fails_without_package(tmp_path):
    (tmp_path / "Broken.java").write_text("class Broken {}", encoding="latin-1")
    with pytest.raises(ExtractionError, match="Broken.java"):
        extract_corpus(tmp_path)


def test_extract_corpus_unknown_kind(source_tree):
    with pytest.raises(ValueError):
        extract_corpus(source_tree, kind="imports")


def test_default_override_table():
    assert apply_overrides("jblas", "org.jblas.SimpleBlas", "mikio") == "mikio|Nicolas Oury"
    # the class rule runs first, so the author rule no longer sees a bare "IntelliJ IDEA."
    assert apply_overrides("jblas", "org.jblas.Eigen", "IntelliJ IDEA.") == "IntelliJ IDEA.|Nicolas Oury"
    assert apply_overrides("jblas", "org.jblas.DoubleMatrix", "IntelliJ IDEA.") == "mikio"
    assert apply_overrides("jung2", "edu.uci.ics.jung.graph.Graph",
                           "the JUNG Project and the Regents of the University") == UNKNOWN
    assert apply_overrides("colt", "org.jblas.SimpleBlas", "mikio") == "mikio"


def test_jung_project_author_becomes_blank(tmp_path):
    pkg = tmp_path / "edu" / "uci" / "ics" / "jung" / "graph"
    pkg.mkdir(parents=True)
    (pkg / "Graph.java").write_text(
        "package edu.uci.ics.jung.graph;\n"
        "/**\n * @author the JUNG Project and the Regents of the University\n */\n"
        "public interface Graph {}\n",
        encoding="latin-1",
    )
    corpus = extract_corpus(tmp_path, kind="authors", dataset="jung2")
    assert [(d.id, d.text) for d in corpus] == [("edu.uci.ics.jung.graph.Graph", "")]
    assert extract_corpus(tmp_path, kind="authors", dataset="colt")[0].text == \
        "the JUNG Project and the Regents of the University"

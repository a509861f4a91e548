"""
Conformance: PL/0 program corpus
Programs and expected outcomes live in corpus/cases.yaml, checked against corpus/schema.json.
"""
import json
from pathlib import Path

import pytest
import yaml

CORPUS_DIR = Path(__file__).resolve().parent
CASES_PATH = CORPUS_DIR / "cases.yaml"
SCHEMA_PATH = CORPUS_DIR / "schema.json"


def load_corpus():
    with open(CASES_PATH, encoding="utf-8") as f:
        return yaml.safe_load(f)


CORPUS = load_corpus()
PROGRAMS = CORPUS["programs"]


@pytest.fixture(scope="module")
def schema():
    with open(SCHEMA_PATH) as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Corpus well-formedness
# ---------------------------------------------------------------------------

def test_corpus_loads():
    """Corpus YAML parses and has programs."""
    assert CORPUS is not None
    assert "version" in CORPUS
    assert len(PROGRAMS) > 0


def test_schema_validation(schema):
    """Corpus validates against JSON Schema."""
    jsonschema = pytest.importorskip("jsonschema")
    jsonschema.validate(CORPUS, schema)


def test_program_names_unique():
    names = [p["name"] for p in PROGRAMS]
    duplicates = {n for n in names if names.count(n) > 1}
    assert not duplicates, f"Duplicate program names: {sorted(duplicates)}"


def test_corpus_covers_both_outcomes():
    """Corpus has both accepted and rejected programs."""
    outcomes = {p["expect"] for p in PROGRAMS}
    assert {"valid", "error"} <= outcomes


# ---------------------------------------------------------------------------
# Corpus programs
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("program", PROGRAMS, ids=[p["name"] for p in PROGRAMS])
def test_corpus_program(runner, program):
    result = runner.validate(program["source"])
    expect = program["expect"]

    if expect == "valid":
        assert result.valid, f"Expected valid but got errors: {result.diagnostics}"
        assert not result.warnings, f"Unexpected warnings: {result.warnings}"
    elif expect == "warning":
        assert result.valid, f"Expected valid but got errors: {result.diagnostics}"
    else:
        assert not result.valid, "Expected errors but got valid"

    reported = result.warnings if expect == "warning" else result.diagnostics
    for message in program.get("messages", []):
        assert any(message in d for d in reported), \
            f"Expected '{message}' in: {reported}"

    if "tree" in program:
        assert result.tree == program["tree"]

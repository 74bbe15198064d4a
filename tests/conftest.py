"""Test fixtures and sample corpora."""

from __future__ import annotations

import json

import pytest

from quiz_integrity.contracts import CorpusSource


@pytest.fixture
def math_items() -> list[dict]:
    return [
        {"type": "question", "id": "m1", "number": 1, "question": "What is 2+2?",
         "options": ["3", "4", "5"]},
        {
            "type": "scenario",
            "title": "Shopping",
            "questions": [
                {"type": "question", "number": 2, "question": "How much is 3 apples at $2?",
                 "options": [{"text": "$5"}, {"text": "$6"}, {"text": "$7"}]},
                {"type": "question", "number": 3, "question": "What is 2 + 2?",
                 "options": ["3", "4", "5"]},
            ],
        },
        {"type": "note", "text": "not a question"},
        {"type": "question", "id": "m4", "number": 4, "question": "What is 2+2?",
         "options": ["5", "4", "3"]},
    ]


@pytest.fixture
def math_source(math_items) -> CorpusSource:
    return CorpusSource(name="math-data.json", items=tuple(math_items))


@pytest.fixture
def data_dir(tmp_path, math_items):
    """A data directory with two good sources, one broken source, and a prefix config."""
    root = tmp_path / "data"
    root.mkdir()
    (root / "math-data.json").write_text(
        json.dumps({"quizItems": math_items}, ensure_ascii=False), encoding="utf-8"
    )
    (root / "astro-data.yaml").write_text(
        "quizItems:\n"
        "  - type: question\n"
        "    number: 1\n"
        "    question: What is 2+2?\n"
        "    options: ['4', '3', '5']\n"
        "  - type: question\n"
        "    number: 2\n"
        "    question: Which planet is largest?\n"
        "    options: [Jupiter, Saturn, Earth]\n",
        encoding="utf-8",
    )
    (root / "broken-data.json").write_text("{not json", encoding="utf-8")
    (root / "sub-category-data.json").write_text(
        json.dumps({"quizPrefixInfo": {"math": {}, "astro": {}, "broken": {}}}),
        encoding="utf-8",
    )
    (root / "README.md").write_text("ignored", encoding="utf-8")
    return root

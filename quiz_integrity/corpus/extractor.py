"""Flatten quiz items (plain questions and scenario containers) into question records."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from quiz_integrity.contracts import CorpusSource, QuestionRecord

CONTAINER_TYPES = frozenset({"scenario", "case-study", "case_study"})


def _is_container(item: Mapping) -> bool:
    kind = item.get("type")
    return (
        isinstance(kind, str)
        and kind in CONTAINER_TYPES
        and isinstance(item.get("questions"), list)
    )


def _is_question(item: Mapping) -> bool:
    return item.get("type") == "question" or bool(item.get("question"))


def iter_questions(items: Iterable[Any]) -> Iterator[Mapping]:
    """Yield every question item in order, descending into containers.

    A container's children are emitted before the next top-level item.
    Items that are neither questions nor containers are skipped.
    """
    for item in items:
        if not isinstance(item, Mapping):
            continue
        if _is_container(item):
            yield from iter_questions(item["questions"])
        elif _is_question(item):
            yield item


def _sequence_number(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    # isdecimal rejects superscripts and other digits int() cannot parse
    if isinstance(raw, str) and raw.strip().isdecimal():
        return int(raw)
    return None


def _identifier(raw: Any) -> str | None:
    if raw is None or raw == "" or raw == "N/A":
        return None
    return str(raw)


def iter_records(source: CorpusSource) -> Iterator[QuestionRecord]:
    """Yield QuestionRecords for one source, in source order."""
    for item in iter_questions(source.items):
        yield QuestionRecord(
            identifier=_identifier(item.get("id")),
            sequence_number=_sequence_number(item.get("number")),
            source_name=source.name,
            prompt_text=item.get("question"),
            options=item.get("options"),
        )

"""Tests for canonical — option text extraction, eligibility, dedupe key."""

from __future__ import annotations

import itertools

import pytest

from quiz_integrity.canonical import (
    canonicalize,
    is_eligible,
    make_dedupe_key,
    option_text,
    parse_option,
)
from quiz_integrity.contracts import PlainText, QuestionRecord, StructuredText
from quiz_integrity.errors import MalformedRecordError


def _record(prompt="What is 2+2?", options=None, **overrides) -> QuestionRecord:
    base = QuestionRecord(
        identifier="q1",
        sequence_number=1,
        source_name="math-data.json",
        prompt_text=prompt,
        options=["3", "4", "5"] if options is None else options,
    )
    base.update(overrides)
    return base


class TestParseOption:
    def test_plain_string_is_trimmed(self):
        assert parse_option("  Jupiter ") == PlainText("Jupiter")

    def test_structured_text_is_trimmed(self):
        assert parse_option({"text": " Saturn  ", "correct": True}) == StructuredText("Saturn")

    def test_structured_without_text_falls_back_to_str(self):
        item = {"image": "a.png"}
        assert parse_option(item) == PlainText(str(item))

    def test_structured_with_empty_text_falls_back_to_str(self):
        assert isinstance(parse_option({"text": ""}), PlainText)

    def test_number_option(self):
        assert option_text(42) == "42"


class TestEligibility:
    def test_valid_record(self):
        assert is_eligible(_record())

    def test_missing_prompt(self):
        assert not is_eligible(_record(prompt=None))

    def test_blank_prompt(self):
        assert not is_eligible(_record(prompt="   "))

    def test_options_not_a_sequence(self):
        assert not is_eligible(_record(options="3,4,5"))

    def test_empty_options(self):
        assert not is_eligible(_record(options=[]))

    def test_canonicalize_raises_for_malformed(self):
        with pytest.raises(MalformedRecordError) as exc:
            canonicalize(_record(options=[]))
        assert exc.value.reason == "empty options"


class TestCanonicalize:
    def test_trims_prompt_and_options(self):
        canon = canonicalize(_record(prompt="  What is 2+2?\n", options=[" 3", {"text": "4 "}]))
        assert canon.canonical_prompt == "What is 2+2?"
        assert canon.option_texts == frozenset({"3", "4"})

    def test_carries_back_reference(self):
        canon = canonicalize(_record())
        assert canon.source_name == "math-data.json"
        assert canon.identifier == "q1"
        assert canon.sequence_number == 1

    def test_immutable(self):
        canon = canonicalize(_record())
        with pytest.raises(AttributeError):
            canon.canonical_prompt = "other"

    def test_dedupe_key_ignores_option_order(self):
        keys = {
            canonicalize(_record(options=list(perm))).dedupe_key
            for perm in itertools.permutations(["3", "4", "5"])
        }
        assert len(keys) == 1

    def test_dedupe_key_mixed_option_shapes(self):
        a = canonicalize(_record(options=["3", "4", "5"]))
        b = canonicalize(_record(options=[{"text": "5"}, "4", {"text": " 3 "}]))
        assert a.dedupe_key == b.dedupe_key

    def test_dedupe_key_differs_on_prompt(self):
        a = canonicalize(_record(prompt="What is 2+2?"))
        b = canonicalize(_record(prompt="What is 2 + 2?"))
        assert a.dedupe_key != b.dedupe_key

    def test_delimiter_in_text_does_not_collide(self):
        a = make_dedupe_key("a|b", frozenset({"c"}))
        b = make_dedupe_key("a", frozenset({"b|c"}))
        assert a != b

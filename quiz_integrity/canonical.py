"""Canonical form of a question record: trimmed prompt, option-text set, dedupe key."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from quiz_integrity.contracts import (
    CanonicalRecord,
    OptionItem,
    PlainText,
    QuestionRecord,
    StructuredText,
)
from quiz_integrity.errors import MalformedRecordError

# ASCII record/unit separators cannot appear in typed quiz text, so the key
# never collides across different prompt/option splits.
KEY_DELIMITER = "\x1e"
OPTION_DELIMITER = "\x1f"


def parse_option(item: Any) -> OptionItem:
    """Resolve a raw option item into its tagged variant."""
    if isinstance(item, Mapping):
        text = item.get("text")
        if text:
            return StructuredText(str(text).strip())
    return PlainText(str(item).strip())


def option_text(item: Any) -> str:
    return parse_option(item).text


def ineligibility_reason(record: QuestionRecord) -> str | None:
    """Why the record cannot be checked, or None when it is eligible."""
    prompt = record.get("prompt_text")
    if not isinstance(prompt, str) or not prompt.strip():
        return "missing prompt"
    options = record.get("options")
    if not isinstance(options, (list, tuple)):
        return "options is not a sequence"
    if not options:
        return "empty options"
    return None


def is_eligible(record: QuestionRecord) -> bool:
    return ineligibility_reason(record) is None


def make_dedupe_key(prompt: str, option_texts: frozenset[str]) -> str:
    return prompt + KEY_DELIMITER + OPTION_DELIMITER.join(sorted(option_texts))


def canonicalize(record: QuestionRecord) -> CanonicalRecord:
    """Build the comparable view of an eligible record.

    Raises MalformedRecordError for records that cannot be checked.
    """
    reason = ineligibility_reason(record)
    if reason is not None:
        raise MalformedRecordError(record, reason)

    prompt = record["prompt_text"].strip()
    texts = frozenset(option_text(item) for item in record["options"])
    return CanonicalRecord(
        source_name=record["source_name"],
        identifier=record.get("identifier"),
        sequence_number=record.get("sequence_number"),
        canonical_prompt=prompt,
        option_texts=texts,
        dedupe_key=make_dedupe_key(prompt, texts),
    )

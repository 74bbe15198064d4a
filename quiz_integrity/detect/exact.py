"""Exact-duplicate index keyed on the canonical dedupe key."""

from __future__ import annotations

from quiz_integrity.contracts import CanonicalRecord, ExactDuplicateFinding, record_ref


class ExactDuplicateIndex:
    """Single-pass index: the first record seen per key is the original.

    Records must be added in source order for the original/duplicate
    direction to be reproducible.
    """

    def __init__(self) -> None:
        self._originals: dict[str, CanonicalRecord] = {}
        self.survivors: list[CanonicalRecord] = []
        self.findings: list[ExactDuplicateFinding] = []

    def add(self, record: CanonicalRecord) -> ExactDuplicateFinding | None:
        """Index a record. Returns a finding when its key was already seen."""
        original = self._originals.get(record.dedupe_key)
        if original is None:
            self._originals[record.dedupe_key] = record
            self.survivors.append(record)
            return None

        finding = ExactDuplicateFinding(original=record_ref(original), duplicate=record_ref(record))
        self.findings.append(finding)
        return finding

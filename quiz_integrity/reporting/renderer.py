"""Presentation adapters for a CheckReport: plain text, Markdown, JSON, YAML."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

import yaml

from quiz_integrity.contracts import CheckReport

FORMATS = ("text", "markdown", "json", "yaml")


def format_identifier(ref: Mapping[str, Any]) -> str:
    """``"file.json (ID: q1, #12)"``, or just the source name when both are missing."""
    parts = []
    if ref.get("identifier"):
        parts.append(f"ID: {ref['identifier']}")
    if ref.get("sequence_number") is not None:
        parts.append(f"#{ref['sequence_number']}")
    source = ref.get("source", "")
    return f"{source} ({', '.join(parts)})" if parts else source


def _pct(score: float) -> str:
    return f"{score * 100:.1f}%"


def _summary_lines(report: CheckReport) -> list[str]:
    lines = [f"Checked {report['sources_checked']} sources, {report['records_checked']} records."]
    if report["sources_filtered"]:
        lines.append(f"Skipped {report['sources_filtered']} sources without a recognized prefix.")
    if report["sources_failed"]:
        lines.append(
            f"Failed to load {report['sources_failed']} sources: "
            + ", ".join(report["failed_sources"])
        )
    if report["records_skipped"]:
        lines.append(f"Skipped {report['records_skipped']} malformed records.")

    if report["duplicate_count"] == 0:
        lines.append("No duplicate questions found.")
    else:
        lines.append(f"Found {report['duplicate_count']} duplicate question instances.")

    if not report["similarity_checked"]:
        lines.append("Similarity check skipped (quick mode).")
    elif report["similar_pair_count"] == 0:
        lines.append("No highly similar question pairs found.")
    else:
        lines.append(f"Found {report['similar_pair_count']} pairs of similar questions.")

    lines.append("PASS" if report["passed"] else "FAIL")
    return lines


def render_text(report: CheckReport) -> str:
    lines: list[str] = []

    if report["duplicates"]:
        lines.append("--- Found Duplicates ---")
        for n, finding in enumerate(report["duplicates"], start=1):
            lines.append("")
            lines.append(f"DUPLICATE #{n}:")
            lines.append(f"  - First instance: {format_identifier(finding['original'])}")
            lines.append(f"    > {finding['original']['prompt']}")
            lines.append(f"  - Duplicate instance: {format_identifier(finding['duplicate'])}")
            lines.append(f"    > {finding['duplicate']['prompt']}")
        lines.append("")

    if report["similar_pairs"]:
        lines.append("--- Found Similar Questions ---")
        for n, finding in enumerate(report["similar_pairs"], start=1):
            lines.append("")
            lines.append(
                f"SIMILAR PAIR #{n} (Question: {_pct(finding['prompt_similarity'])},"
                f" Options: {_pct(finding['option_similarity'])}):"
            )
            lines.append(f"  - Q1: {format_identifier(finding['first'])}")
            lines.append(f"    > {finding['first']['prompt']}")
            lines.append(f"  - Q2: {format_identifier(finding['second'])}")
            lines.append(f"    > {finding['second']['prompt']}")
        lines.append("")

    lines.append("--- Check complete ---")
    lines.extend(_summary_lines(report))
    return "\n".join(lines)


def render_markdown(report: CheckReport) -> str:
    """Markdown report with YAML frontmatter carrying the counts."""
    frontmatter = {
        "title": "Question Bank Integrity Report",
        "generated": datetime.now(timezone.utc).isoformat(),
        "sources_checked": report["sources_checked"],
        "sources_failed": report["sources_failed"],
        "records_checked": report["records_checked"],
        "duplicate_count": report["duplicate_count"],
        "similar_pair_count": report["similar_pair_count"],
        "passed": report["passed"],
    }

    lines: list[str] = []
    lines.append("---")
    lines.append(yaml.dump(frontmatter, default_flow_style=False, sort_keys=False).strip())
    lines.append("---")
    lines.append("")
    lines.append("# Question Bank Integrity Report")
    lines.append("")

    # --- Exact duplicates ---
    lines.append("## Exact Duplicates")
    lines.append("")
    if report["duplicates"]:
        lines.append("| # | Original | Duplicate | Prompt |")
        lines.append("|---|----------|-----------|--------|")
        for n, finding in enumerate(report["duplicates"], start=1):
            prompt = finding["duplicate"]["prompt"].replace("|", "\\|")
            lines.append(
                f"| {n} | {format_identifier(finding['original'])}"
                f" | {format_identifier(finding['duplicate'])} | {prompt} |"
            )
    else:
        lines.append("None.")
    lines.append("")

    # --- Similar pairs ---
    lines.append("## Similar Pairs")
    lines.append("")
    if not report["similarity_checked"]:
        lines.append("Not checked.")
    elif report["similar_pairs"]:
        lines.append("| # | Q1 | Q2 | Question | Options |")
        lines.append("|---|----|----|----------|---------|")
        for n, finding in enumerate(report["similar_pairs"], start=1):
            lines.append(
                f"| {n} | {format_identifier(finding['first'])}"
                f" | {format_identifier(finding['second'])}"
                f" | {_pct(finding['prompt_similarity'])}"
                f" | {_pct(finding['option_similarity'])} |"
            )
    else:
        lines.append("None.")
    lines.append("")

    lines.append("## Summary")
    lines.append("")
    for line in _summary_lines(report):
        lines.append(f"- {line}")
    return "\n".join(lines)


def report_to_dict(report: CheckReport) -> dict[str, Any]:
    """Plain-data copy of the report with scores rounded to 4 places."""
    data = dict(report)
    data["similar_pairs"] = [
        {
            **finding,
            "prompt_similarity": round(finding["prompt_similarity"], 4),
            "option_similarity": round(finding["option_similarity"], 4),
        }
        for finding in report["similar_pairs"]
    ]
    return data


def render_json(report: CheckReport) -> str:
    return json.dumps(report_to_dict(report), indent=2, ensure_ascii=False)


def render_yaml(report: CheckReport) -> str:
    return yaml.safe_dump(
        report_to_dict(report), allow_unicode=True, default_flow_style=False, sort_keys=False
    )


def render(report: CheckReport, fmt: str = "text") -> str:
    if fmt == "text":
        return render_text(report)
    if fmt == "markdown":
        return render_markdown(report)
    if fmt == "json":
        return render_json(report)
    if fmt == "yaml":
        return render_yaml(report)
    raise ValueError(f"Unsupported format {fmt!r}. Use one of: {', '.join(FORMATS)}")

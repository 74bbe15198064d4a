"""Load a corpus snapshot from JSON/YAML source files.

Each run loads its own snapshot; nothing is cached between runs. A source
that cannot be loaded is recorded as a failure and the rest still load.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml

from quiz_integrity.contracts import CorpusSnapshot, CorpusSource, SourceFailure
from quiz_integrity.errors import ConfigurationLoadError, SourceLoadError

SOURCE_SUFFIXES = ("-data.json", "-data.yaml", "-data.yml")
PREFIX_CONFIG_STEM = "sub-category-data"


def _parse_file(path: Path) -> Any:
    """Parse a JSON or YAML file. Raises ValueError on any read/parse problem."""
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ValueError(f"could not read file ({e})") from e

    if path.suffix in (".yaml", ".yml"):
        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ValueError(f"invalid YAML ({e})") from e
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON ({e})") from e


def discover_source_files(data_dir: str | Path) -> list[Path]:
    """Data files in a directory, sorted by name so runs are reproducible."""
    root = Path(data_dir)
    if not root.is_dir():
        return []
    return sorted(
        (
            p
            for p in root.iterdir()
            if p.is_file()
            and p.name.endswith(SOURCE_SUFFIXES)
            and not p.name.startswith(PREFIX_CONFIG_STEM + ".")
        ),
        key=lambda p: p.name,
    )


def load_source(path: str | Path) -> CorpusSource:
    """Load one source file into an immutable CorpusSource.

    Accepts a mapping with a ``quizItems`` list or a bare list of items.
    """
    path = Path(path)
    try:
        data = _parse_file(path)
    except ValueError as e:
        raise SourceLoadError(path.name, str(e)) from e

    if isinstance(data, Mapping):
        data = data.get("quizItems")
    if not isinstance(data, list):
        raise SourceLoadError(path.name, "no 'quizItems' array found")
    return CorpusSource(name=path.name, items=tuple(data))


def load_prefixes(path: str | Path) -> frozenset[str] | None:
    """Load recognized source-name prefixes from the prefix config.

    Returns None when the file does not exist (no filter). ``quizPrefixInfo``
    may be a list of ``{"prefix": ...}`` items or a mapping keyed by prefix.
    """
    path = Path(path)
    if not path.exists():
        return None
    try:
        data = _parse_file(path)
    except ValueError as e:
        raise ConfigurationLoadError(str(path), str(e)) from e

    info = data.get("quizPrefixInfo") if isinstance(data, Mapping) else None
    if isinstance(info, Mapping):
        prefixes = [str(k) for k in info]
    elif isinstance(info, list):
        prefixes = [
            str(entry["prefix"])
            for entry in info
            if isinstance(entry, Mapping) and entry.get("prefix")
        ]
    else:
        raise ConfigurationLoadError(str(path), "no 'quizPrefixInfo' found")
    return frozenset(prefixes)


def load_snapshot(
    paths: Iterable[str | Path],
    *,
    prefixes: frozenset[str] | None = None,
) -> CorpusSnapshot:
    """Load every path, collecting failures instead of raising."""
    sources: list[CorpusSource] = []
    failures: list[SourceFailure] = []
    for path in paths:
        try:
            sources.append(load_source(path))
        except SourceLoadError as e:
            failures.append(SourceFailure(name=e.source, reason=e.reason))
    return CorpusSnapshot(sources=tuple(sources), failures=tuple(failures), prefixes=prefixes)


def snapshot_from_items(
    named_items: Mapping[str, list[Any]],
    *,
    prefixes: frozenset[str] | None = None,
) -> CorpusSnapshot:
    """Build a snapshot from already-loaded item lists, keyed by source name."""
    sources = tuple(
        CorpusSource(name=name, items=tuple(items)) for name, items in named_items.items()
    )
    return CorpusSnapshot(sources=sources, prefixes=prefixes)

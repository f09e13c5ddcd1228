"""The extract workflow: scan a source tree, then template or synchronize.

Without locales, the aggregated messages are rendered to a gettext
template (POT). With a locales directory and at least one language, each
``<locales_dir>/<language>/messages.po`` catalog is synchronized instead
and no template is written.

Python 3.11+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from potsync.catalog.store import PathCatalogStore
from potsync.constants import (
    DEFAULT_EXTRACT_EXTENSIONS,
    DEFAULT_FUZZY_THRESHOLD,
    DEFAULT_TEMPLATE_FILENAME,
)
from potsync.extraction.aggregator import extract_messages
from potsync.extraction.files import collect_files, read_sources
from potsync.extraction.types import ExtractedMessage
from potsync.sync.merger import validate_fuzzy_threshold
from potsync.sync.orchestrator import synchronize_messages
from potsync.sync.results import SyncSummary
from potsync.syntax.template import render_template

__all__ = ["ExtractResult", "extract"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExtractResult:
    """Result of extract().

    Attributes:
        messages: Aggregated messages
        out_file: Template path (written unless dry run or synchronizing;
            an existing template is left untouched when synchronizing)
        skipped: Inputs that were not collected
        summary: Synchronization summary when locales were synchronized
    """

    messages: tuple[ExtractedMessage, ...]
    out_file: Path
    skipped: tuple[str, ...] = ()
    summary: SyncSummary | None = None

    @property
    def synchronized(self) -> bool:
        """True when locale catalogs were synchronized instead of a template."""
        return self.summary is not None


def extract(
    sources: Iterable[str] = ("src",),
    *,
    cwd: str | Path | None = None,
    out_file: str | Path = DEFAULT_TEMPLATE_FILENAME,
    extensions: Iterable[str] | None = None,
    dry_run: bool = False,
    locales_dir: str | Path | None = None,
    languages: Iterable[str] = (),
    default_locale: str | None = None,
    fuzzy: bool = True,
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD,
) -> ExtractResult:
    """Extract messages from a source tree.

    Args:
        sources: Files or directories to scan, relative to cwd
        cwd: Base directory (default: current directory)
        out_file: Template path, relative to cwd
        extensions: Extensions to scan (default: DEFAULT_EXTRACT_EXTENSIONS)
        dry_run: Write nothing
        locales_dir: Directory holding one sub-directory per language
        languages: Languages to synchronize; the default locale is added
            if missing
        default_locale: Language whose new entries repeat the source text
        fuzzy: Enable fuzzy matching during synchronization
        fuzzy_threshold: Minimum similarity for a fuzzy match, in [0, 1]

    Returns:
        ExtractResult

    Raises:
        ConfigurationError: If fuzzy_threshold is outside [0, 1]
        OSError: If a source cannot be read or the template written
    """
    validate_fuzzy_threshold(fuzzy_threshold)
    base = (Path(cwd) if cwd is not None else Path.cwd()).resolve()
    collected = collect_files(
        sources, cwd=base, extensions=extensions or DEFAULT_EXTRACT_EXTENSIONS
    )
    messages = extract_messages(read_sources(collected.files, cwd=base))
    out_path = (base / out_file).resolve()
    logger.info("Extracted %d messages from %d files", len(messages), len(collected.files))

    locale_list = list(dict.fromkeys(languages))
    if default_locale and locale_list and default_locale not in locale_list:
        locale_list.append(default_locale)

    if locales_dir is None or not locale_list:
        if not dry_run:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(render_template(messages), encoding="utf-8", newline="\n")
            logger.info("Wrote template %s", out_path)
        return ExtractResult(messages=messages, out_file=out_path, skipped=collected.skipped)

    locales_root = (base / locales_dir).resolve()
    store = PathCatalogStore(
        base_path=str(locales_root / "{locale}"), root_dir=str(locales_root)
    )
    summary = synchronize_messages(
        messages,
        locale_list,
        store,
        default_locale=default_locale,
        fuzzy=fuzzy,
        fuzzy_threshold=fuzzy_threshold,
        dry_run=dry_run,
    )

    return ExtractResult(
        messages=messages,
        out_file=out_path,
        skipped=collected.skipped,
        summary=summary,
    )

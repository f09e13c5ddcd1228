"""Compilation of PO catalogs into runtime artifacts.

Two formats are produced:

- JSON: ``{"charset", "headers", "translations": {context: {msgid: {...}}}}``,
  written without dependencies.
- MO: GNU gettext binary catalogs, written with Babel's mofile module
  (requires the ``potsync[babel]`` extra).

Obsolete entries are never compiled. Fuzzy entries are compiled like any
other translation unless include_fuzzy is cleared.

Python 3.11+.
"""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO

from potsync.catalog.model import Catalog, CatalogEntry
from potsync.catalog.pofile import parse_catalog
from potsync.core.babel_compat import get_babel_catalog_class, get_babel_mofile, require_babel
from potsync.diagnostics import ConfigurationError, Diagnostic, DiagnosticCode
from potsync.enums import CompileFormat
from potsync.extraction.files import collect_files
from potsync.locale_utils import is_known_locale, normalize_locale

__all__ = [
    "CompileArtifact",
    "CompileResult",
    "catalog_to_json",
    "compile_catalogs",
    "write_mo",
]

logger = logging.getLogger(__name__)

_DEFAULT_CHARSET = "utf-8"

# Date headers are not copied into the Babel catalog.
_BABEL_IGNORED_HEADERS = frozenset({"pot-creation-date", "po-revision-date"})


@dataclass(frozen=True, slots=True)
class CompileArtifact:
    """One compiled catalog.

    Attributes:
        input_file: Source catalog
        output_file: Written artifact
        format: Artifact format
    """

    input_file: Path
    output_file: Path
    format: CompileFormat


@dataclass(frozen=True, slots=True)
class CompileResult:
    """Result of compile_catalogs().

    Attributes:
        artifacts: Written artifacts, in input order
        skipped: Inputs that were not collected
    """

    artifacts: tuple[CompileArtifact, ...] = ()
    skipped: tuple[str, ...] = ()


def _charset(catalog: Catalog) -> str:
    content_type = catalog.headers.get("Content-Type", "")
    for param in content_type.split(";"):
        name, _, value = param.strip().partition("=")
        if name.strip().lower() == "charset" and value.strip():
            return value.strip().lower()
    return _DEFAULT_CHARSET


def _compiled_entries(catalog: Catalog, *, include_fuzzy: bool) -> Iterable[CatalogEntry]:
    for entry in catalog.sorted_entries():
        if not entry.msgid or entry.is_obsolete:
            continue
        if entry.is_fuzzy and not include_fuzzy:
            continue
        yield entry


def catalog_to_json(catalog: Catalog, *, include_fuzzy: bool = True) -> dict[str, Any]:
    """Convert a catalog to the JSON translation payload.

    ``msgstr`` is a string for non-plural entries and a list for plural
    ones; ``msgctxt`` and ``msgid_plural`` appear only when set.

    Example:
        >>> catalog = parse_catalog('msgid "Hi"\\nmsgstr "Hola"\\n')
        >>> catalog_to_json(catalog)["translations"]
        {'': {'Hi': {'msgid': 'Hi', 'msgstr': 'Hola'}}}
    """
    translations: dict[str, dict[str, dict[str, Any]]] = {}
    for entry in _compiled_entries(catalog, include_fuzzy=include_fuzzy):
        slots = entry.slots
        translation: dict[str, Any] = {
            "msgid": entry.msgid,
            "msgstr": slots if entry.is_plural else slots[0] if slots else "",
        }
        if entry.context:
            translation["msgctxt"] = entry.context
        if entry.plural_id:
            translation["msgid_plural"] = entry.plural_id
        translations.setdefault(entry.context, {})[entry.msgid] = translation
    return {
        "charset": _charset(catalog),
        "headers": dict(catalog.headers),
        "translations": translations,
    }


def _babel_headers(catalog: Catalog) -> Iterable[tuple[str, str]]:
    for name, value in catalog.headers.items():
        key = name.lower()
        if key in _BABEL_IGNORED_HEADERS:
            continue
        if key == "language" and value:
            # Babel only accepts POSIX identifiers it can parse
            if not is_known_locale(value):
                logger.warning("Language %r is not a known CLDR locale; omitted from MO", value)
                continue
            value = normalize_locale(value)
        yield name, value


def write_mo(fileobj: BinaryIO, catalog: Catalog, *, include_fuzzy: bool = True) -> None:
    """Write a catalog in GNU MO format.

    Raises:
        BabelImportError: If Babel is not installed
    """
    babel_catalog_class = get_babel_catalog_class()
    mofile = get_babel_mofile()

    babel_catalog = babel_catalog_class(fuzzy=False)
    babel_catalog.mime_headers = list(_babel_headers(catalog))
    for entry in _compiled_entries(catalog, include_fuzzy=include_fuzzy):
        slots = entry.slots
        if entry.is_plural:
            babel_catalog.add(
                (entry.msgid, entry.plural_id),
                tuple(slots),
                flags=entry.flags,
                context=entry.context or None,
            )
        else:
            babel_catalog.add(
                entry.msgid,
                slots[0] if slots else "",
                flags=entry.flags,
                context=entry.context or None,
            )
    mofile.write_mo(fileobj, babel_catalog, use_fuzzy=include_fuzzy)


def _output_directory(input_file: Path, out_dir: Path | None, base: Path) -> Path:
    if out_dir is None:
        return input_file.parent
    try:
        return out_dir / input_file.parent.relative_to(base)
    except ValueError:
        return out_dir


def _parse_format(output_format: str) -> CompileFormat:
    try:
        return CompileFormat(output_format)
    except ValueError:
        raise ConfigurationError(
            Diagnostic(
                code=DiagnosticCode.UNSUPPORTED_FORMAT,
                message=f"Unsupported compile format {output_format!r}",
                hint="Use 'json' or 'mo'",
            )
        ) from None


def compile_catalogs(
    inputs: Iterable[str] = ("locales",),
    *,
    cwd: str | Path | None = None,
    out_dir: str | Path | None = None,
    output_format: CompileFormat | str = CompileFormat.JSON,
    pretty: bool = False,
    include_fuzzy: bool = True,
) -> CompileResult:
    """Compile every .po catalog under the given files and directories.

    Args:
        inputs: Files or directories, relative to cwd
        cwd: Base directory (default: current directory)
        out_dir: Destination root. Artifacts mirror the catalog's directory
            relative to cwd below it; by default they are written next to
            each catalog.
        output_format: "json" or "mo"
        pretty: Indent JSON output
        include_fuzzy: Compile entries flagged fuzzy (cleared by --exclude-fuzzy)

    Returns:
        CompileResult listing written artifacts and skipped inputs

    Raises:
        ConfigurationError: If output_format is not supported
        BabelImportError: If MO output is requested without Babel
        CatalogSyntaxError: If a catalog is malformed
        OSError: If a catalog cannot be read or an artifact written
    """
    fmt = _parse_format(output_format)
    if fmt is CompileFormat.MO:
        require_babel("MO compilation")

    base = (Path(cwd) if cwd is not None else Path.cwd()).resolve()
    destination = None if out_dir is None else (base / out_dir).resolve()
    collected = collect_files(inputs, cwd=base, extensions=(".po",))

    artifacts: list[CompileArtifact] = []
    for input_file in collected.files:
        catalog = parse_catalog(
            input_file.read_text(encoding="utf-8"), source_path=str(input_file)
        )
        target_dir = _output_directory(input_file, destination, base)
        target_dir.mkdir(parents=True, exist_ok=True)
        output_file = target_dir / f"{input_file.stem}.{fmt}"

        match fmt:
            case CompileFormat.JSON:
                payload = catalog_to_json(catalog, include_fuzzy=include_fuzzy)
                if pretty:
                    text = json.dumps(payload, ensure_ascii=False, indent=2) + "\n"
                else:
                    text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
                output_file.write_text(text, encoding="utf-8", newline="\n")
            case CompileFormat.MO:
                buffer = io.BytesIO()
                write_mo(buffer, catalog, include_fuzzy=include_fuzzy)
                output_file.write_bytes(buffer.getvalue())

        logger.info("Compiled %s -> %s", input_file, output_file)
        artifacts.append(
            CompileArtifact(input_file=input_file, output_file=output_file, format=fmt)
        )
    return CompileResult(artifacts=tuple(artifacts), skipped=collected.skipped)

"""Load an OpenAPI document from a file, a URL, or stdin.

The compiler never does I/O; this module is the outer surface that turns a
*source* string into the parsed, in-memory document tree the walker expects.
JSON and YAML are both accepted, with the format guessed from the file
extension or response ``Content-Type`` and confirmed by parsing.

Public functions:

* :func:`load_spec` -- read and parse a document from any supported source.
* :func:`validate_openapi_version` -- accept OpenAPI 3.x, reject Swagger 2.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from specfields.exceptions import SpecParseError

_URL_PREFIXES = ("http://", "https://")
_YAML_SUFFIXES = (".yaml", ".yml")


def load_spec(source: str) -> dict[str, Any]:
    """Load an OpenAPI document from *source*.

    Args:
        source: ``"-"`` for stdin, an ``http(s)://`` URL, or a file path.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SpecParseError: If the source cannot be read or does not contain a
            JSON/YAML mapping.
    """
    if source == "-":
        return _load_from_stdin()
    if source.startswith(_URL_PREFIXES):
        return _load_from_url(source)
    return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc
    if not content.strip():
        raise SpecParseError("No input received from stdin")
    return _parse_content(content)


def _load_from_url(url: str) -> dict[str, Any]:
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch spec from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"
    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Spec file not found: {path}")
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc
    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = "yaml" if suffix in _YAML_SUFFIXES else "json" if suffix == ".json" else ""
    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON, falling back to YAML.

    A ``"json"`` hint disables the YAML fallback; a ``"yaml"`` hint skips
    the JSON attempt.

    Raises:
        SpecParseError: If neither parser yields a mapping.
    """
    if hint != "yaml":
        try:
            return _require_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc

    try:
        return _require_mapping(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        raise SpecParseError(f"Failed to parse spec as JSON or YAML: {exc}") from exc


def _require_mapping(document: Any) -> dict[str, Any]:
    if not isinstance(document, dict):
        kind = "empty document" if document is None else type(document).__name__
        raise SpecParseError(f"Spec must be a JSON/YAML object (got {kind})")
    return document


def validate_openapi_version(document: dict[str, Any]) -> str:
    """Return the document's ``openapi`` version if it is a 3.x version.

    Raises:
        SpecParseError: For Swagger 2.x documents, a missing ``openapi``
            field, or any non-3.x version.
    """
    if "swagger" in document:
        raise SpecParseError(
            f"Swagger {document['swagger']} is not supported. "
            "Only OpenAPI 3.x documents can be compiled."
        )

    version = document.get("openapi")
    if version is None:
        raise SpecParseError("Missing 'openapi' field. Is this an OpenAPI 3.x document?")

    version_str = str(version)
    if not version_str.startswith("3."):
        raise SpecParseError(
            f"Unsupported OpenAPI version: {version_str}. Only 3.x is supported."
        )
    return version_str

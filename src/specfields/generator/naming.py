"""Human-readable labels and machine names for compiled fields.

* :func:`start_case` turns identifiers and enum literals into labels
  (``"petId"`` -> ``"Pet Id"``, ``"a_b"`` -> ``"A B"``).
* :func:`parameter_field_name` and :func:`property_field_name` build the
  ``name`` of a field.  Dots are replaced by hyphens because the host platform
  reads dots in field names as nested-property paths.
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import quote

# Characters encodeURIComponent leaves alone beyond quote()'s own safe set.
_URI_COMPONENT_SAFE = "!*'()"

_SEPARATOR_RE = re.compile(r"[\W_]+")


def start_case(value: Any) -> str:
    """Split *value* into words and capitalise the first letter of each.

    Word boundaries are separators (spaces, ``_``, ``-``, ``.``, other
    punctuation), lower-to-upper case changes, the end of an acronym, and
    letter/digit changes.  Letters after the first of each word keep their
    case, so acronyms survive.

    Example::

        >>> start_case("X-Request-ID")
        'X Request ID'
        >>> start_case("HTTPServer")
        'HTTP Server'
        >>> start_case("page2size")
        'Page 2 Size'
    """
    if value is None:
        return ""
    text = str(value)
    text = re.sub(r"([a-z])([A-Z])", r"\1 \2", text)
    text = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1 \2", text)
    text = re.sub(r"([^\W\d_])(\d)", r"\1 \2", text)
    text = re.sub(r"(\d)([^\W\d_])", r"\1 \2", text)
    words = [word for word in _SEPARATOR_RE.split(text) if word]
    return " ".join(word[0].upper() + word[1:] for word in words)


def property_field_name(name: str) -> str:
    """Field name for a request-body property: dots become hyphens."""
    return name.replace(".", "-")


def parameter_field_name(name: str) -> str:
    """Field name for a parameter: dots become hyphens, then percent-encoding.

    The encoding matches JavaScript's ``encodeURIComponent``.

    Example::

        >>> parameter_field_name("filter.status")
        'filter-status'
        >>> parameter_field_name("sw_corner[]")
        'sw_corner%5B%5D'
    """
    return quote(property_field_name(name), safe=_URI_COMPONENT_SAFE)

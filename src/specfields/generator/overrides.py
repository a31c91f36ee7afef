"""Apply user overrides to compiled fields.

Overrides are the last layer of a build: they run after every operation has
been compiled and win over anything the compiler inferred.  A typical use is
pinning a default or rewording a label the document gets wrong::

    {"overrides": [
        {"find": {"name": "limit"}, "replace": {"default": 50}},
        {"find": {"routing": {"request": {"headers": {"X-Request-Id": "={{ $value }}"}}}},
         "replace": {"description": "Leave empty to let the server generate one"}}
    ]}

Matching and replacing both work on the serialised field
(:meth:`~specfields.models.FieldDescriptor.to_dict`), so keys are the
camelCase names that appear in ``specfields build`` output.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from specfields.exceptions import ConfigError
from specfields.models import FieldDescriptor, Override
from specfields.output import debug


def is_match(value: Any, pattern: Any) -> bool:
    """Return ``True`` if *value* contains everything in *pattern*.

    Dicts match when every key of *pattern* is present and matches; lists
    match when every entry of *pattern* matches some entry of *value*; any
    other pattern must be equal.
    """
    if isinstance(pattern, dict):
        return isinstance(value, dict) and all(
            key in value and is_match(value[key], expected) for key, expected in pattern.items()
        )
    if isinstance(pattern, list):
        return isinstance(value, list) and all(
            any(is_match(item, expected) for item in value) for expected in pattern
        )
    return value == pattern


def apply_overrides(
    fields: list[FieldDescriptor], overrides: list[Override]
) -> list[FieldDescriptor]:
    """Return *fields* with every matching override applied, in order.

    Overrides are applied one after another, so a later override sees the
    result of an earlier one.  Fields no override matches are returned as
    the same objects.

    Raises:
        ConfigError: If a replacement produces an invalid field.
    """
    if not overrides:
        return fields

    result = []
    for field in fields:
        data = field.to_dict()
        changed = False
        for override in overrides:
            if is_match(data, override.find):
                data = {**data, **override.replace}
                changed = True
        if not changed:
            result.append(field)
            continue
        try:
            result.append(FieldDescriptor.model_validate(data))
        except ValidationError as exc:
            raise ConfigError(f"Override produced an invalid field '{field.name}': {exc}") from exc
        debug(f"Applied overrides to field {field.name}")
    return result

"""Response normalization.

The Concourse API mixes snake_case and kebab-case field names. Every payload
handed to callers is converted so that all mapping keys are camelCase, at any
depth.
"""

import re
from typing import Any, Mapping

_SEPARATORS = re.compile(r"[_\-.\s]+")


def _lower_first(word: str) -> str:
    if word.isupper() and word[:1].isupper():
        return word.lower()
    return word[:1].lower() + word[1:]


def _upper_first(word: str) -> str:
    if word.isupper():
        word = word.lower()
    return word[:1].upper() + word[1:]


def camelize(key: str) -> str:
    """Convert a snake, kebab, dotted or spaced key to camelCase.

    Keys that are already camelCase are returned unchanged.
    """
    words = [word for word in _SEPARATORS.split(key) if word]
    if not words:
        return key
    return _lower_first(words[0]) + "".join(_upper_first(word) for word in words[1:])


def camelcase_keys_deep(value: Any) -> Any:
    """Recursively camelCase every mapping key within value.

    Lists and tuples are normalized element by element with order preserved;
    scalars are returned as is.
    """
    if isinstance(value, Mapping):
        return {
            (camelize(key) if isinstance(key, str) else key): camelcase_keys_deep(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [camelcase_keys_deep(item) for item in value]
    if isinstance(value, tuple):
        return tuple(camelcase_keys_deep(item) for item in value)
    return value

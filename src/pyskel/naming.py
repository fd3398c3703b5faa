"""Project and package name helpers."""

from __future__ import annotations

import keyword
import re
import unicodedata
from typing import Iterable

__all__ = [
    "derive_package_name",
    "is_valid_package_name",
    "is_valid_project_name",
    "slugify",
    "suggest_project_name",
]


_SEPARATORS = re.compile(r"[\s\-_.]+")
# Distribution names must start and end with a letter or digit.
_PROJECT_NAME = re.compile(r"^[A-Za-z0-9]([A-Za-z0-9._-]*[A-Za-z0-9])?$")


def slugify(value: str | Iterable[str], *, separator: str = "-") -> str:
    """Create a lowercase, ASCII, kebab-case slug from ``value``.

    Parameters
    ----------
    value:
        The text to normalise. When an iterable of strings is provided the values
        are joined with spaces before slugification.
    separator:
        The character used to join individual words.
    """

    if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
        value = " ".join(str(part) for part in value)

    text = unicodedata.normalize("NFKD", str(value))
    text = text.encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^\w\s\-.]", "", text)
    text = text.strip().lower()

    if not text:
        return ""

    collapsed = _SEPARATORS.sub(separator, text)
    collapsed = re.sub(rf"{re.escape(separator)}+", separator, collapsed)
    return collapsed.strip(separator)


def derive_package_name(project_name: str) -> str:
    """Return the import package for ``project_name``.

    Every ``-`` becomes ``_``; no other character is touched. Use
    :func:`is_valid_package_name` to check the result.
    """

    return project_name.replace("-", "_")


def is_valid_package_name(name: str) -> bool:
    """Return ``True`` when ``name`` can be imported as a top level package."""

    return name.isascii() and name.isidentifier() and not keyword.iskeyword(name)


def is_valid_project_name(name: str) -> bool:
    """Return ``True`` when ``name`` is an ASCII distribution name usable as a TOML bare key."""

    return name.isascii() and bool(_PROJECT_NAME.match(name))


def suggest_project_name(name: str) -> str | None:
    """Return a kebab-case name close to ``name`` that derives a valid package."""

    candidate = slugify(name)
    # Leading digits survive slugify but not the identifier check.
    candidate = candidate.lstrip("0123456789-")
    if not candidate or candidate == name:
        return None
    if not is_valid_project_name(candidate) or not is_valid_package_name(derive_package_name(candidate)):
        return None
    return candidate

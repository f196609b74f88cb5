"""URL slugs derived from human-readable names."""

import re

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^a-z0-9_-]")
_REPEATED_HYPHENS = re.compile(r"-{2,}")


def slugify(name: str) -> str:
    """Derive a URL-safe slug from ``name``.

    Lowercases, turns whitespace runs into hyphens, drops every character
    that is not a word character or hyphen, then collapses repeated hyphens
    and trims them from both ends::

        >>> slugify("Dry Fruits & Nuts")
        'dry-fruits-nuts'
    """
    slug = _WHITESPACE.sub("-", (name or "").strip().lower())
    slug = _NON_WORD.sub("", slug)
    slug = _REPEATED_HYPHENS.sub("-", slug)
    return slug.strip("-")

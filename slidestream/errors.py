"""Parser errors."""

from __future__ import annotations


class MalformedInputError(ValueError):
    """Markup text is not valid UTF-8.

    Tag-level problems never raise; only text that cannot be represented in the
    expected encoding is rejected.
    """

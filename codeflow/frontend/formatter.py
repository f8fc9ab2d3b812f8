"""Display-label normalization for syntax-tree text spans."""

import re
from typing import Any, Union

_WHITESPACE = re.compile(r"\s+")


def node_text(node: Any) -> str:
    """Return a syntax node's source span as a string."""
    text: Union[bytes, str, None] = getattr(node, "text", None)
    if text is None:
        return ""
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return text


class TextFormatter:
    """
    Turns raw source text into short flowchart labels.

    Single statements are collapsed to one line and truncated at
    ``max_length``. Grouped statements keep one label line per source line,
    each truncated at ``grouped_max_length``.
    """

    ellipsis = "..."
    max_length = 25
    grouped_max_length = 30

    @classmethod
    def _truncate(cls, text: str, limit: int) -> str:
        if len(text) > limit:
            return text[:limit - len(cls.ellipsis)] + cls.ellipsis
        return text

    @classmethod
    def collapse(cls, text: str) -> str:
        return _WHITESPACE.sub(" ", text).strip()

    @classmethod
    def clean(cls, text: str, grouped: bool = False) -> str:
        if grouped:
            return "\n".join(
                cls._truncate(cls.collapse(line), cls.grouped_max_length)
                for line in text.split("\n")
            )
        return cls._truncate(cls.collapse(text), cls.max_length)

    @classmethod
    def clean_node(cls, node: Any, grouped: bool = False) -> str:
        return cls.clean(node_text(node), grouped=grouped)

"""Exception types raised by htmlforge.

Two families exist: :class:`ValidationError` is raised from ``build()`` when
a node's required-field rule is unmet, and :class:`UsageError` is raised
while a tree is being assembled in an order the builders do not allow.
"""

from __future__ import annotations

from typing import Any, Optional


class HtmlForgeError(Exception):
    """Base class for every error raised by this package."""


class ValidationError(HtmlForgeError, ValueError):
    """A node failed its self-validation during ``build()``.

    Attributes:
        node: The offending node, when known.
    """

    def __init__(self, message: str, node: Optional[Any] = None) -> None:
        super().__init__(message)
        self.node = node


class UsageError(HtmlForgeError, RuntimeError):
    """A builder or node mutator was called out of sequence."""

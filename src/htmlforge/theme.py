"""Theme store: named style/attribute bundles keyed by selector.

A selector is either a bare tag name (``"h1"``) or a class selector
prefixed with a dot (``".button"``).  Lookups are exact and
case-insensitive; a miss yields an empty :class:`ElementStyle`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional


def _normalise(mapping: Optional[Mapping[str, str]]) -> dict[str, str]:
    """Lower-case the keys of *mapping*, keeping values verbatim."""
    result: dict[str, str] = {}
    for key, value in (mapping or {}).items():
        result[key.lower()] = value
    return result


# ---------------------------------------------------------------------------
# ElementStyle
# ---------------------------------------------------------------------------

@dataclass
class ElementStyle:
    """CSS properties and HTML attributes associated with one selector."""

    styles: dict[str, str] = field(default_factory=dict)
    attributes: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.styles = _normalise(self.styles)
        self.attributes = _normalise(self.attributes)

    # -- convenience helpers ------------------------------------------------

    @classmethod
    def empty(cls) -> ElementStyle:
        return cls()

    def set_style(self, key: str, value: str) -> ElementStyle:
        self.styles[key.lower()] = value
        return self

    def set_attribute(self, key: str, value: str) -> ElementStyle:
        self.attributes[key.lower()] = value
        return self

    def merged(self, other: ElementStyle) -> ElementStyle:
        """Return a copy with *other*'s entries layered on top."""
        return ElementStyle(
            styles={**self.styles, **other.styles},
            attributes={**self.attributes, **other.attributes},
        )

    def is_empty(self) -> bool:
        return not self.styles and not self.attributes


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------

class Theme:
    """Lookup table from selector to :class:`ElementStyle`.

    Usage::

        theme = Theme()
        theme.add_style("p", ElementStyle(styles={"font-size": "14px"}))
        theme.add_style(".button", ElementStyle(attributes={"class": "btn"}))
        theme.get_style_for("P").styles   # {"font-size": "14px"}
    """

    def __init__(self, styles: Optional[Mapping[str, ElementStyle]] = None) -> None:
        self._styles: dict[str, ElementStyle] = {}
        for selector, style in (styles or {}).items():
            self.add_style(selector, style)

    # -- public API ---------------------------------------------------------

    def add_style(self, selector: str, style: ElementStyle) -> Theme:
        """Insert or overwrite the bundle for *selector*."""
        self._styles[selector.lower()] = style
        return self

    def get_style_for(self, selector: str) -> ElementStyle:
        """Return the bundle for *selector*, or an empty one on a miss."""
        style = self._styles.get(selector.lower())
        if style is None:
            return ElementStyle.empty()
        return style

    def selectors(self) -> list[str]:
        """Return all registered selectors, sorted."""
        return sorted(self._styles.keys())

    def copy(self) -> Theme:
        return Theme(dict(self._styles))

    def __contains__(self, selector: object) -> bool:
        return isinstance(selector, str) and selector.lower() in self._styles

    def __len__(self) -> int:
        return len(self._styles)

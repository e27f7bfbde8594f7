"""Resolution and rendering engine.

Turns a node tree into one HTML string with every style inlined.  For each
element the final attributes, styles and classes are resolved by layering,
in order (later wins):

1. the theme bundle for the element's tag,
2. the theme bundle for each locally applied class (``"." + class``),
3. the node's own local styles and attributes,
4. the node's local classes (always present in the output).

An attribute named ``class`` never overwrites anything; its tokens join the
class set.  Rendering never mutates the tree, so repeated builds of an
unchanged tree are byte-identical.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from htmlforge.errors import ValidationError
from htmlforge.nodes import (
    SELF_CLOSING_TAGS,
    ElementNode,
    Image,
    Link,
    Node,
    RawHtml,
    RawText,
    Table,
)
from htmlforge.theme import ElementStyle, Theme


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def escape_html(s: str) -> str:
    """Encode ``&``, ``<``, ``>`` and ``"``; every other character is kept."""
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _parse_declarations(css: str) -> dict[str, str]:
    """Split an inline ``style`` value into ``property -> value`` pairs."""
    declarations: dict[str, str] = {}
    for chunk in css.split(";"):
        prop, sep, value = chunk.partition(":")
        if not sep or not prop.strip():
            continue
        declarations[prop.strip().lower()] = value.strip()
    return declarations


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


# ---------------------------------------------------------------------------
# Resolved element
# ---------------------------------------------------------------------------

@dataclass
class ResolvedElement:
    """Final attribute/style/class set for one element."""

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    styles: dict[str, str] = field(default_factory=dict)
    classes: list[str] = field(default_factory=list)

    @property
    def self_closing(self) -> bool:
        return self.tag in SELF_CLOSING_TAGS

    @property
    def style_text(self) -> str:
        return ";".join(f"{key}:{value}" for key, value in self.styles.items())

    def open_tag(self) -> str:
        parts = [f"<{self.tag}"]
        for name, value in self.attributes.items():
            parts.append(f' {name}="{escape_html(value)}"')
        if self.classes:
            parts.append(f' class="{escape_html(" ".join(self.classes))}"')
        if self.styles:
            parts.append(f' style="{escape_html(self.style_text)}"')
        parts.append(" />" if self.self_closing else ">")
        return "".join(parts)

    def close_tag(self) -> str:
        return "" if self.self_closing else f"</{self.tag}>"


class _Resolution:
    """Working maps used while layering theme and local values."""

    def __init__(self) -> None:
        self.attributes: dict[str, str] = {}
        self.styles: dict[str, str] = {}
        self.class_tokens: list[str] = []

    def merge_bundle(self, bundle: ElementStyle) -> None:
        self.merge_styles(bundle.styles)
        self.merge_attributes(bundle.attributes)

    def merge_styles(self, source: Mapping[str, str]) -> None:
        for key, value in source.items():
            self.styles[key.lower()] = value

    def merge_attributes(self, source: Mapping[str, str]) -> None:
        for key, value in source.items():
            name = key.lower()
            if name == "class":
                self.class_tokens.extend(value.split())
            elif name == "style":
                self.merge_styles(_parse_declarations(value))
            else:
                self.attributes[name] = value


# ---------------------------------------------------------------------------
# HtmlRenderer
# ---------------------------------------------------------------------------

class HtmlRenderer:
    """Render nodes to HTML against a :class:`~htmlforge.theme.Theme`."""

    def __init__(self, theme: Optional[Theme] = None) -> None:
        self.theme: Theme = theme if theme is not None else Theme()

    # ======================================================================
    # Public API
    # ======================================================================

    def render(self, node: Node) -> str:
        """Return the HTML for *node* and its subtree.

        Raises:
            ValidationError: If any node in the subtree fails validation.
                Nothing is returned in that case.
        """
        handler = getattr(self, f"_render_{node.type.value}", None)
        if handler is not None:
            return handler(node)
        if isinstance(node, ElementNode):
            return self._render_element(node)
        raise TypeError(f"Cannot render {type(node).__name__}")

    def render_all(self, nodes: list[Node]) -> str:
        return "".join(self.render(node) for node in nodes)

    def validate(self, node: Node) -> None:
        """Run the variant-specific validation rule for *node* only."""
        validator = getattr(self, f"_validate_{node.type.value}", None)
        if validator is not None:
            validator(node)

    def resolve(self, node: ElementNode) -> ResolvedElement:
        """Compute the final attributes, styles and classes for *node*."""
        work = _Resolution()

        work.merge_bundle(self.theme.get_style_for(node.tag))

        for class_name in node.classes:
            work.merge_bundle(self.theme.get_style_for("." + class_name))

        work.merge_styles(node.styles)
        work.merge_attributes(node.attributes)

        # Local classes lead; contributed tokens follow, duplicates dropped.
        classes = list(dict.fromkeys([*node.classes, *work.class_tokens]))

        return ResolvedElement(
            tag=node.tag,
            attributes=work.attributes,
            styles=work.styles,
            classes=classes,
        )

    # ======================================================================
    # Per-NodeType renderers
    # ======================================================================

    def _render_raw_text(self, node: RawText) -> str:
        return escape_html(node.text)

    def _render_raw_html(self, node: RawHtml) -> str:
        return node.markup

    def _render_element(self, node: ElementNode) -> str:
        self.validate(node)
        resolved = self.resolve(node)
        if resolved.self_closing:
            return resolved.open_tag()
        body = "".join(self.render(child) for child in node.children)
        return f"{resolved.open_tag()}{body}{resolved.close_tag()}"

    # ======================================================================
    # Per-NodeType validators
    # ======================================================================

    def _validate_link(self, node: Link) -> None:
        if _is_blank(node.attributes.get("href")):
            raise ValidationError("Link 'href' attribute cannot be empty.", node)

    def _validate_image(self, node: Image) -> None:
        if _is_blank(node.attributes.get("src")):
            raise ValidationError("Image 'src' attribute cannot be empty.", node)

    def _validate_table(self, node: Table) -> None:
        if node.has_spans or node.expected_column_count is None:
            return
        expected = node.expected_column_count
        for index, row in enumerate(node.rows):
            if row.child_count != expected:
                raise ValidationError(
                    f"Table validation failed: row {index} has {row.child_count} cells, "
                    f"but expected {expected}.",
                    node,
                )


def render_node(node: Node, theme: Optional[Theme] = None) -> str:
    """Render a single node tree with *theme* (an empty theme if ``None``)."""
    return HtmlRenderer(theme).render(node)

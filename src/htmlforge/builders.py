"""Fluent, callback-based construction layer.

Builders are sugar over :mod:`htmlforge.nodes`: every call creates or
configures node instances, so a tree assembled here is identical to one
assembled by instantiating nodes directly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, Optional, TypeVar, Union

from htmlforge.markdown import MarkdownImporter
from htmlforge.nodes import (
    ElementNode,
    Em,
    GenericElement,
    Image,
    InlineContent,
    Link,
    ListItem,
    ListNode,
    Node,
    RawHtml,
    RawText,
    Strong,
    Table,
    TableCell,
    TableRow,
    TextElement,
)

if TYPE_CHECKING:
    from htmlforge.document import HtmlDocument

_N = TypeVar("_N", bound=ElementNode)
_B = TypeVar("_B", bound="ElementBuilder")


def with_(node: _N, configure: Callable[[_N], object]) -> _N:
    """Apply *configure* to a freshly constructed *node* and return it."""
    configure(node)
    return node


# ---------------------------------------------------------------------------
# Generic element builder
# ---------------------------------------------------------------------------

class ElementBuilder(Generic[_N]):
    """Common chaining methods shared by the element builders."""

    def __init__(self, node: _N) -> None:
        self._node = node

    def style(self: _B, key: str, value: str) -> _B:
        self._node.add_style(key, value)
        return self

    def class_(self: _B, class_name: str) -> _B:
        self._node.add_class(class_name)
        return self

    def attr(self: _B, key: str, value: str) -> _B:
        self._node.add_attribute(key, value)
        return self

    @property
    def node(self) -> _N:
        return self._node

    def get_node(self) -> _N:
        return self._node


TextConfig = Callable[["TextContentBuilder"], object]
TextOrConfig = Union[str, TextConfig]


# ---------------------------------------------------------------------------
# Inline content
# ---------------------------------------------------------------------------

class TextContentBuilder(ElementBuilder[ElementNode]):
    """Fill an element with inline content: text, bold, italic, links..."""

    def raw(self, text: str) -> TextContentBuilder:
        self._node.add_child(RawText(text))
        return self

    def bold(self, content: TextOrConfig) -> TextContentBuilder:
        return self._nest(Strong(), content)

    def italic(self, content: TextOrConfig) -> TextContentBuilder:
        return self._nest(Em(), content)

    def link(self, href: str, content: TextOrConfig) -> TextContentBuilder:
        return self._nest(Link(href), content)

    def element(self, tag: str, content: TextOrConfig) -> TextContentBuilder:
        """Wrap *content* in an arbitrary inline tag (``span``, ``code``...)."""
        return self._nest(GenericElement(tag), content)

    def image(self, src: str, alt: str = "") -> TextContentBuilder:
        self._node.add_child(Image(src, alt))
        return self

    def raw_html(self, markup: str) -> TextContentBuilder:
        self._node.add_child(RawHtml(markup))
        return self

    def line_break(self) -> TextContentBuilder:
        return self.raw_html("<br />")

    def add(self, node: InlineContent) -> TextContentBuilder:
        self._node.add_child(node)
        return self

    def _nest(self, child: ElementNode, content: TextOrConfig) -> TextContentBuilder:
        builder = TextContentBuilder(child)
        if isinstance(content, str):
            builder.raw(content)
        else:
            content(builder)
        self._node.add_child(child)
        return self


def _fill(node: _N, content: TextOrConfig) -> _N:
    builder = TextContentBuilder(node)
    if isinstance(content, str):
        builder.raw(content)
    else:
        content(builder)
    return node


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

class ListBuilder(ElementBuilder[ListNode]):

    def item(self, content: Union[InlineContent, TextConfig]) -> ListBuilder:
        if isinstance(content, (str, Node)):
            self._node.add_item(content)
        else:
            self._node.add_child(_fill(ListItem(), content))
        return self


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

CellContent = Union[InlineContent, TextConfig]


class RowBuilder(ElementBuilder[TableRow]):
    """Collect cells for one row.  Inside a header, :meth:`cell` emits ``th``."""

    def __init__(self, node: TableRow, *, header: bool = False) -> None:
        super().__init__(node)
        self._header = header

    def cell(self, content: CellContent, *, row_span: int = 1, col_span: int = 1) -> RowBuilder:
        return self._add_cell(content, self._header, row_span, col_span)

    def header_cell(self, content: CellContent, *, row_span: int = 1, col_span: int = 1) -> RowBuilder:
        return self._add_cell(content, True, row_span, col_span)

    def _add_cell(self, content: CellContent, header: bool, row_span: int, col_span: int) -> RowBuilder:
        cell = TableCell(header=header, row_span=row_span, col_span=col_span)
        if isinstance(content, (str, Node)):
            cell.add_child(content)
        else:
            _fill(cell, content)
        self._node.add_cell(cell)
        return self


class TableBuilder(ElementBuilder[Table]):
    """Build a table row by row; the first header/row fixes the column count."""

    def header(self, config: Callable[[RowBuilder], object]) -> TableBuilder:
        builder = RowBuilder(TableRow(), header=True)
        config(builder)
        self._node.append_row(builder.node, header=True)
        return self

    def row(self, config: Callable[[RowBuilder], object]) -> TableBuilder:
        builder = RowBuilder(TableRow())
        config(builder)
        self._node.append_row(builder.node)
        return self


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

class DocumentBuilder:
    """Top-level builder handed to :class:`~htmlforge.document.HtmlDocument`.

    Usage::

        HtmlDocument(theme, lambda doc: (
            doc.heading1("Welcome")
               .paragraph(lambda p: p.raw("Hello ").bold("world"))
               .table(lambda t: t.header(lambda r: r.cell("A").cell("B"))
                                 .row(lambda r: r.cell("1").cell("2")))
        ))
    """

    def __init__(self, document: HtmlDocument) -> None:
        self._doc = document

    def add_node(self, node: Node) -> DocumentBuilder:
        self._doc.add(node)
        return self

    # -- text ---------------------------------------------------------------

    def text(self, content: TextOrConfig, tag: str = "p") -> DocumentBuilder:
        return self.add_node(_fill(TextElement(tag=tag), content))

    def heading(self, level: int, content: TextOrConfig) -> DocumentBuilder:
        level = max(1, min(6, level))
        return self.text(content, f"h{level}")

    def heading1(self, content: TextOrConfig) -> DocumentBuilder:
        return self.heading(1, content)

    def heading2(self, content: TextOrConfig) -> DocumentBuilder:
        return self.heading(2, content)

    def heading3(self, content: TextOrConfig) -> DocumentBuilder:
        return self.heading(3, content)

    def paragraph(self, content: TextOrConfig) -> DocumentBuilder:
        return self.text(content, "p")

    def link(self, href: str, content: TextOrConfig) -> DocumentBuilder:
        """A paragraph holding a single link."""
        return self.paragraph(lambda p: p.link(href, content))

    # -- media / structure --------------------------------------------------

    def image(self, src: str, alt: str = "") -> DocumentBuilder:
        return self.add_node(Image(src, alt))

    def list(self, config: Callable[[ListBuilder], object]) -> DocumentBuilder:
        builder = ListBuilder(ListNode(ordered=False))
        config(builder)
        return self.add_node(builder.node)

    def ordered_list(self, config: Callable[[ListBuilder], object]) -> DocumentBuilder:
        builder = ListBuilder(ListNode(ordered=True))
        config(builder)
        return self.add_node(builder.node)

    def table(self, config: Callable[[TableBuilder], object]) -> DocumentBuilder:
        builder = TableBuilder(Table())
        config(builder)
        return self.add_node(builder.node)

    def element(
        self,
        tag: str,
        config: Optional[Callable[[TextContentBuilder], object]] = None,
    ) -> DocumentBuilder:
        """Generic tag wrapper, e.g. ``doc.element("div", lambda d: d.class_("card"))``."""
        node = GenericElement(tag)
        if config is not None:
            config(TextContentBuilder(node))
        return self.add_node(node)

    def spacer(self, height: str = "16px") -> DocumentBuilder:
        """Fixed-height vertical gap that survives email clients."""
        node = GenericElement("div", RawHtml("&nbsp;"))
        node.add_class("spacer")
        node.add_style("height", height)
        node.add_style("line-height", height)
        return self.add_node(node)

    def divider(self) -> DocumentBuilder:
        node = GenericElement("div")
        node.add_class("divider")
        node.add_style("border-top", "1px solid #dddddd")
        node.add_style("margin", "16px 0")
        return self.add_node(node)

    def raw_html(self, markup: str) -> DocumentBuilder:
        return self.add_node(RawHtml(markup))

    def markdown(self, text: str) -> DocumentBuilder:
        """Append the node tree produced from Markdown *text*."""
        for node in MarkdownImporter().to_nodes(text):
            self.add_node(node)
        return self


"""Node model for the HTML render tree.

The tree is a closed set of variants tagged by :class:`NodeType`.  Two
leaves carry content only (:class:`RawText`, :class:`RawHtml`); every other
variant is an :class:`ElementNode` that owns a tag, local classes, styles,
attributes and an ordered list of children.

Nodes are built bottom-up and attached exactly once, so the tree can never
contain a cycle.  Rendering lives in :mod:`htmlforge.renderer`; ``build()``
on any node simply delegates there.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Iterator, Optional, TypeVar, Union

from htmlforge.errors import UsageError

if TYPE_CHECKING:
    from htmlforge.theme import Theme

# Tags serialised as ``<tag ... />``; they never hold children.
SELF_CLOSING_TAGS = frozenset({"img"})


# ---------------------------------------------------------------------------
# Node types
# ---------------------------------------------------------------------------

class NodeType(Enum):
    RAW_TEXT = "raw_text"
    RAW_HTML = "raw_html"
    TEXT = "text"
    STRONG = "strong"
    EM = "em"
    LINK = "link"
    IMAGE = "image"
    LIST = "list"
    LIST_ITEM = "list_item"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    ELEMENT = "element"


class Node:
    """Anything that can be rendered to an HTML string."""

    type: ClassVar[NodeType]

    def build(self, theme: Optional[Theme] = None) -> str:
        """Render this node (and its subtree) with *theme*."""
        from htmlforge.renderer import render_node

        return render_node(self, theme)


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RawText(Node):
    """Literal text; HTML-encoded on output."""

    type: ClassVar[NodeType] = NodeType.RAW_TEXT

    text: str


@dataclass(frozen=True)
class RawHtml(Node):
    """Trusted markup emitted verbatim, without escaping or validation."""

    type: ClassVar[NodeType] = NodeType.RAW_HTML

    markup: str


Content = Union[Node, str]

_E = TypeVar("_E", bound="ElementNode")


def _coerce(content: Content) -> Node:
    if isinstance(content, Node):
        return content
    if isinstance(content, str):
        return RawText(content)
    raise TypeError(f"Expected a Node or str, got {type(content).__name__}")


# ---------------------------------------------------------------------------
# Element base
# ---------------------------------------------------------------------------

class ElementNode(Node):
    """Base for every node that renders as ``<tag ...>``."""

    type: ClassVar[NodeType] = NodeType.ELEMENT

    def __init__(self, tag: str, *content: Content) -> None:
        if not tag or not tag.strip():
            raise UsageError("Element tag cannot be empty.")
        self._tag = tag.strip().lower()
        self.classes: list[str] = []
        self.styles: dict[str, str] = {}
        self.attributes: dict[str, str] = {}
        self.children: list[Node] = []
        self._attached = False
        for item in content:
            self.add_child(item)

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def attached(self) -> bool:
        return self._attached

    # -- mutators -----------------------------------------------------------

    def add_child(self: _E, child: Content) -> _E:
        if self.tag in SELF_CLOSING_TAGS:
            raise UsageError(f"<{self.tag}> is self-closing and cannot have children.")
        node = _coerce(child)
        if isinstance(node, ElementNode):
            if node is self or node.contains(self):
                raise UsageError(f"Cannot attach <{node.tag}> inside itself.")
            node.claim()
        self.children.append(node)
        return self

    def add_class(self: _E, class_name: str) -> _E:
        """Apply one or more space-separated class names; blanks are ignored."""
        for token in (class_name or "").split():
            self.classes.append(token)
        return self

    def add_style(self: _E, key: str, value: str) -> _E:
        self.styles[key.strip().lower()] = value
        return self

    def add_attribute(self: _E, key: str, value: str) -> _E:
        self.attributes[key.strip().lower()] = value
        return self

    # -- ownership ----------------------------------------------------------

    def claim(self) -> None:
        """Mark this node as owned by a parent (or a document root)."""
        if self._attached:
            raise UsageError(
                f"<{self.tag}> is already attached to a parent; nodes cannot be shared."
            )
        self._attached = True

    def iter_descendants(self) -> Iterator[Node]:
        for child in self.children:
            yield child
            if isinstance(child, ElementNode):
                yield from child.iter_descendants()

    def contains(self, node: Node) -> bool:
        return any(descendant is node for descendant in self.iter_descendants())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tag={self.tag!r}, children={len(self.children)})"


# ---------------------------------------------------------------------------
# Concrete variants
# ---------------------------------------------------------------------------

class TextElement(ElementNode):
    """Block of text content: paragraphs, headings and similar."""

    type: ClassVar[NodeType] = NodeType.TEXT

    def __init__(self, *content: Content, tag: str = "p") -> None:
        super().__init__(tag, *content)


class Strong(ElementNode):
    type: ClassVar[NodeType] = NodeType.STRONG

    def __init__(self, *content: Content) -> None:
        super().__init__("strong", *content)


class Em(ElementNode):
    type: ClassVar[NodeType] = NodeType.EM

    def __init__(self, *content: Content) -> None:
        super().__init__("em", *content)


class Link(ElementNode):
    """Anchor element; requires a non-blank ``href``."""

    type: ClassVar[NodeType] = NodeType.LINK

    def __init__(self, href: str, *content: Content) -> None:
        super().__init__("a", *content)
        self.add_attribute("href", href)

    @property
    def href(self) -> Optional[str]:
        return self.attributes.get("href")


class Image(ElementNode):
    """Self-closing image element; requires a non-blank ``src``."""

    type: ClassVar[NodeType] = NodeType.IMAGE

    def __init__(self, src: str, alt: str = "") -> None:
        super().__init__("img")
        self.add_attribute("src", src)
        if alt:
            self.add_attribute("alt", alt)

    @property
    def src(self) -> Optional[str]:
        return self.attributes.get("src")


class GenericElement(ElementNode):
    """Any other tag (``div``, ``span``, ``pre`` ...) with no extra rules."""

    type: ClassVar[NodeType] = NodeType.ELEMENT

    def __init__(self, tag: str, *content: Content) -> None:
        super().__init__(tag, *content)


# Content accepted inside list items and table cells.  Lists and tables are
# deliberately absent; the restriction is expressed only in the annotations.
InlineContent = Union[RawText, RawHtml, TextElement, Strong, Em, Link, Image, GenericElement, str]


class ListItem(ElementNode):
    type: ClassVar[NodeType] = NodeType.LIST_ITEM

    def __init__(self, *content: InlineContent) -> None:
        super().__init__("li", *content)


class ListNode(ElementNode):
    """``<ul>`` or ``<ol>``."""

    type: ClassVar[NodeType] = NodeType.LIST

    def __init__(self, ordered: bool = False) -> None:
        super().__init__("ol" if ordered else "ul")
        self.ordered = ordered

    def add_item(self, content: InlineContent) -> ListNode:
        item = content if isinstance(content, ListItem) else ListItem(content)
        self.add_child(item)
        return self

    @property
    def items(self) -> list[ListItem]:
        return [child for child in self.children if isinstance(child, ListItem)]


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

class TableCell(ElementNode):
    """``<td>`` or ``<th>`` with optional row/column spans."""

    type: ClassVar[NodeType] = NodeType.TABLE_CELL

    def __init__(
        self,
        *content: InlineContent,
        header: bool = False,
        row_span: int = 1,
        col_span: int = 1,
    ) -> None:
        if row_span < 1 or col_span < 1:
            raise UsageError(
                f"Cell spans must be at least 1 (got row_span={row_span}, col_span={col_span})."
            )
        super().__init__("th" if header else "td", *content)
        self.header = header
        self.row_span = row_span
        self.col_span = col_span
        if row_span > 1:
            self.add_attribute("rowspan", str(row_span))
        if col_span > 1:
            self.add_attribute("colspan", str(col_span))

    @property
    def has_span(self) -> bool:
        return self.row_span > 1 or self.col_span > 1


class TableRow(ElementNode):
    type: ClassVar[NodeType] = NodeType.TABLE_ROW

    def __init__(self, *cells: Union[TableCell, str]) -> None:
        super().__init__("tr")
        for cell in cells:
            self.add_cell(cell)

    def add_cell(self, cell: Union[TableCell, str], *, header: bool = False) -> TableRow:
        if not isinstance(cell, TableCell):
            cell = TableCell(cell, header=header)
        self.add_child(cell)
        return self

    @property
    def cells(self) -> list[TableCell]:
        return [child for child in self.children if isinstance(child, TableCell)]

    @property
    def child_count(self) -> int:
        """Number of cells, as compared against the table's column count."""
        return len(self.children)

    @property
    def has_spans(self) -> bool:
        return any(cell.has_span for cell in self.cells)


class Table(ElementNode):
    """``<table>`` that tracks its expected column count.

    The first header or row determines :attr:`expected_column_count`, read
    from its cells at ``build()`` time.  Every direct row is checked against
    it unless any cell in the table uses a row or column span.
    """

    type: ClassVar[NodeType] = NodeType.TABLE

    def __init__(self) -> None:
        super().__init__("table")
        self.has_header = False

    # -- rows ---------------------------------------------------------------

    def add_header(self, *cells: Union[TableCell, str]) -> Table:
        row = TableRow()
        for cell in cells:
            row.add_cell(cell, header=True)
        return self.append_row(row, header=True)

    def add_row(self, *cells: Union[TableCell, str]) -> Table:
        return self.append_row(TableRow(*cells))

    def append_row(self, row: TableRow, *, header: bool = False) -> Table:
        """Attach *row*; a header row must precede every body row."""
        if header:
            if self.has_header:
                raise UsageError("A table can only have one header row.")
            if self.rows:
                raise UsageError("The header row must be added before any body rows.")
            self.has_header = True
        super().add_child(row)
        return self

    def add_child(self, child: Content) -> Table:
        if isinstance(child, TableRow):
            return self.append_row(child)
        return super().add_child(child)

    @property
    def rows(self) -> list[TableRow]:
        return [child for child in self.children if isinstance(child, TableRow)]

    @property
    def expected_column_count(self) -> Optional[int]:
        """Cell count of the first row as it stands now; ``None`` if that row is empty."""
        rows = self.rows
        if not rows or not rows[0].child_count:
            return None
        return rows[0].child_count

    @property
    def has_spans(self) -> bool:
        return any(row.has_spans for row in self.rows)

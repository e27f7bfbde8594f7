"""htmlforge -- build themed HTML with every style inlined.

Compose a tree of nodes with the fluent builders (or by instantiating
nodes directly), attach a :class:`Theme`, and render one HTML string that
email clients can display without a stylesheet.

Example::

    from htmlforge import ElementStyle, HtmlDocument, Theme

    theme = Theme().add_style("p", ElementStyle(styles={"font-size": "14px"}))
    html = HtmlDocument(theme, lambda d: d.paragraph("Hi")).build()
    # '<p style="font-size:14px">Hi</p>'
"""

from htmlforge.builders import (
    DocumentBuilder,
    ListBuilder,
    RowBuilder,
    TableBuilder,
    TextContentBuilder,
    with_,
)
from htmlforge.document import HtmlDocument
from htmlforge.errors import HtmlForgeError, UsageError, ValidationError
from htmlforge.nodes import (
    ElementNode,
    Em,
    GenericElement,
    Image,
    Link,
    ListItem,
    ListNode,
    Node,
    NodeType,
    RawHtml,
    RawText,
    Strong,
    Table,
    TableCell,
    TableRow,
    TextElement,
)
from htmlforge.presets import ThemePresets
from htmlforge.renderer import HtmlRenderer, render_node
from htmlforge.theme import ElementStyle, Theme

__version__ = "0.1.0"

__all__ = [
    "DocumentBuilder",
    "ElementNode",
    "ElementStyle",
    "Em",
    "GenericElement",
    "HtmlDocument",
    "HtmlForgeError",
    "HtmlRenderer",
    "Image",
    "Link",
    "ListBuilder",
    "ListItem",
    "ListNode",
    "Node",
    "NodeType",
    "RawHtml",
    "RawText",
    "RowBuilder",
    "Strong",
    "Table",
    "TableBuilder",
    "TableCell",
    "TableRow",
    "TextContentBuilder",
    "TextElement",
    "Theme",
    "ThemePresets",
    "UsageError",
    "ValidationError",
    "render_node",
    "with_",
]

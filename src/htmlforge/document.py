"""Document root: the entry point for building HTML.

Holds the theme and the ordered list of root-level nodes, and renders them
into a single HTML string.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from htmlforge.builders import DocumentBuilder
from htmlforge.nodes import ElementNode, Node
from htmlforge.renderer import HtmlRenderer
from htmlforge.theme import Theme


class HtmlDocument:
    """An ordered collection of root nodes rendered with one theme.

    Usage::

        doc = HtmlDocument(theme, lambda d: d.heading1("Hi").paragraph("Body"))
        html = doc.build()

        # or imperatively
        doc = HtmlDocument(theme)
        doc.add(TextElement("Hello", tag="h1"))
        html = doc.build()
    """

    def __init__(
        self,
        theme: Optional[Theme] = None,
        configure: Optional[Callable[[DocumentBuilder], object]] = None,
    ) -> None:
        self.theme: Theme = theme if theme is not None else Theme()
        self._roots: list[Node] = []
        if configure is not None:
            configure(DocumentBuilder(self))

    @property
    def nodes(self) -> list[Node]:
        return list(self._roots)

    def add(self, node: Node) -> HtmlDocument:
        """Append a pre-built root node."""
        if isinstance(node, ElementNode):
            node.claim()
        self._roots.append(node)
        return self

    def builder(self) -> DocumentBuilder:
        """Return a :class:`DocumentBuilder` that appends to this document."""
        return DocumentBuilder(self)

    def build(self) -> str:
        """Render every root node and concatenate the results.

        Raises:
            ValidationError: If any node fails validation; no partial
                output is produced.
        """
        return HtmlRenderer(self.theme).render_all(self._roots)

    def save(
        self,
        output_path: str | Path,
        *,
        encoding: str = "utf-8",
    ) -> None:
        """Write :meth:`build` output to *output_path*.

        Args:
            output_path: Destination ``.html`` file.
            encoding: Text encoding of the written file.
        """
        output_path = Path(output_path)
        html = self.build()

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding=encoding)

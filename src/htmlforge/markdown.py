"""Markdown importer that produces htmlforge node trees.

Uses mistune v3 in AST mode and maps its token stream onto the node
variants of :mod:`htmlforge.nodes`.  HTML embedded in the Markdown source
is treated as text and escaped on output; only the importer's own line
breaks and rules are emitted as raw markup.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import mistune

from htmlforge.nodes import (
    ElementNode,
    Em,
    GenericElement,
    Image,
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

logger = logging.getLogger(__name__)


class MarkdownImporter:
    """Convert Markdown text into a list of root-level nodes.

    Usage::

        nodes = MarkdownImporter().to_nodes("# Hello\\n\\nSome *text*.")
        doc = HtmlDocument(theme)
        for node in nodes:
            doc.add(node)
    """

    def __init__(self) -> None:
        self._md = mistune.create_markdown(
            renderer=None,  # AST mode
            plugins=["table", "strikethrough"],
        )

    # -- public API ---------------------------------------------------------

    def to_nodes(self, markdown_text: str) -> list[Node]:
        tokens: list[dict[str, Any]] = self._md(markdown_text)  # type: ignore[assignment]
        return self._convert_tokens(tokens)

    # -- token conversion ---------------------------------------------------

    def _convert_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        nodes: list[Node] = []
        for tok in tokens:
            node = self._convert_token(tok)
            if node is not None:
                nodes.append(node)
        return nodes

    def _convert_token(self, tok: dict[str, Any]) -> Optional[Node]:
        ttype = tok.get("type", "")
        handler = getattr(self, f"_handle_{ttype}", None)
        if handler:
            return handler(tok)
        # Fallback -- treat unknown tokens as plain text if they carry text.
        raw = tok.get("raw", tok.get("text", ""))
        if raw:
            return RawText(str(raw))
        logger.debug("Skipping unsupported Markdown token %r", ttype)
        return None

    def _convert_inline(self, children: Any) -> list[Node]:
        if children is None:
            return []
        if isinstance(children, str):
            return [RawText(children)]
        if isinstance(children, list):
            return self._convert_tokens(children)
        return []

    def _fill(self, node: ElementNode, tok: dict[str, Any]) -> ElementNode:
        for child in self._convert_inline(tok.get("children") or tok.get("text", "")):
            node.add_child(child)
        return node

    # -- block handlers -----------------------------------------------------

    def _handle_heading(self, tok: dict) -> Node:
        level = tok.get("attrs", {}).get("level", 1)
        level = max(1, min(6, int(level)))
        return self._fill(TextElement(tag=f"h{level}"), tok)

    def _handle_paragraph(self, tok: dict) -> Node:
        return self._fill(TextElement(tag="p"), tok)

    def _handle_block_text(self, tok: dict) -> Node:
        return self._fill(TextElement(tag="p"), tok)

    def _handle_thematic_break(self, _tok: dict) -> Node:
        return RawHtml("<hr />")

    def _handle_block_code(self, tok: dict) -> Node:
        raw = tok.get("raw", tok.get("text", ""))
        code = GenericElement("code", RawText(str(raw).rstrip("\n")))
        info = (tok.get("attrs", {}).get("info") or "").strip()
        if info:
            code.add_class(f"language-{info.split()[0]}")
        return GenericElement("pre", code)

    def _handle_block_quote(self, tok: dict) -> Node:
        quote = GenericElement("blockquote")
        for child in self._convert_tokens(tok.get("children", [])):
            quote.add_child(child)
        return quote

    def _handle_block_html(self, tok: dict) -> Node:
        return TextElement(RawText(tok.get("raw", "")), tag="p")

    def _handle_blank_line(self, _tok: dict) -> Optional[Node]:
        return None

    # -- inline handlers ----------------------------------------------------

    def _handle_text(self, tok: dict) -> Node:
        return RawText(tok.get("raw", tok.get("text", "")))

    def _handle_strong(self, tok: dict) -> Node:
        return self._fill(Strong(), tok)

    def _handle_emphasis(self, tok: dict) -> Node:
        return self._fill(Em(), tok)

    def _handle_strikethrough(self, tok: dict) -> Node:
        return self._fill(GenericElement("del"), tok)

    def _handle_codespan(self, tok: dict) -> Node:
        raw = tok.get("raw", tok.get("text", ""))
        return GenericElement("code", RawText(str(raw)))

    def _handle_inline_html(self, tok: dict) -> Node:
        return RawText(tok.get("raw", ""))

    def _handle_linebreak(self, _tok: dict) -> Node:
        return RawHtml("<br />")

    def _handle_softbreak(self, _tok: dict) -> Node:
        return RawText("\n")

    # -- link / image -------------------------------------------------------

    def _handle_link(self, tok: dict) -> Node:
        attrs = tok.get("attrs", {})
        link = self._fill(Link(attrs.get("url", "")), tok)
        if attrs.get("title"):
            link.add_attribute("title", attrs["title"])
        return link

    def _handle_image(self, tok: dict) -> Node:
        attrs = tok.get("attrs", {})
        alt = attrs.get("alt") or self._extract_text(tok.get("children"))
        image = Image(attrs.get("url", ""), alt)
        if attrs.get("title"):
            image.add_attribute("title", attrs["title"])
        return image

    # -- lists --------------------------------------------------------------

    def _handle_list(self, tok: dict) -> Node:
        attrs = tok.get("attrs", {})
        ordered = bool(attrs.get("ordered", False))
        list_node = ListNode(ordered=ordered)
        start = attrs.get("start")
        if ordered and start not in (None, 1):
            list_node.add_attribute("start", str(start))
        for item in self._collect_items(tok):
            list_node.add_child(item)
        return list_node

    def _collect_items(self, tok: dict) -> list[ListItem]:
        """Return the list's items with nested list items flattened in order."""
        items: list[ListItem] = []
        for child in tok.get("children", []):
            if child.get("type") != "list_item":
                continue
            item = ListItem()
            nested: list[ListItem] = []
            paragraphs = 0
            for block in child.get("children", []):
                btype = block.get("type", "")
                if btype == "list":
                    nested.extend(self._collect_items(block))
                elif btype in ("block_text", "paragraph"):
                    if paragraphs:
                        item.add_child(RawHtml("<br />"))
                    for inline in self._convert_inline(block.get("children")):
                        item.add_child(inline)
                    paragraphs += 1
                else:
                    node = self._convert_token(block)
                    if node is not None:
                        item.add_child(node)
            items.append(item)
            items.extend(nested)
        return items

    # -- table --------------------------------------------------------------

    def _handle_table(self, tok: dict) -> Node:
        table = Table()
        for section in tok.get("children", []):
            stype = section.get("type", "")
            if stype == "table_head":
                table.append_row(self._make_row(section.get("children", []), header=True), header=True)
            elif stype == "table_body":
                for row in section.get("children", []):
                    table.append_row(self._make_row(row.get("children", []), header=False))
        return table

    def _make_row(self, cell_tokens: list[dict], *, header: bool) -> TableRow:
        row = TableRow()
        for cell_tok in cell_tokens:
            cell_attrs = cell_tok.get("attrs", {})
            cell = TableCell(header=bool(cell_attrs.get("head", header)))
            for child in self._convert_inline(cell_tok.get("children", [])):
                cell.add_child(child)
            align = cell_attrs.get("align")
            if align:
                cell.add_style("text-align", align)
            row.add_cell(cell)
        return row

    # -- helpers ------------------------------------------------------------

    def _extract_text(self, children: Any) -> str:
        if isinstance(children, str):
            return children
        if isinstance(children, list):
            parts: list[str] = []
            for c in children:
                if isinstance(c, dict):
                    parts.append(c.get("raw", c.get("text", "")))
                elif isinstance(c, str):
                    parts.append(c)
            return "".join(parts)
        return ""

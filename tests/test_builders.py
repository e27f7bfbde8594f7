"""Tests for the fluent builder layer."""

from __future__ import annotations

import pytest

from htmlforge.builders import with_
from htmlforge.document import HtmlDocument
from htmlforge.errors import UsageError, ValidationError
from htmlforge.nodes import (
    Em,
    GenericElement,
    Image,
    Link,
    ListNode,
    Strong,
    Table,
    TableCell,
    TextElement,
)
from htmlforge.theme import ElementStyle, Theme


@pytest.fixture
def theme() -> Theme:
    theme = Theme()
    theme.add_style("p", ElementStyle(styles={"font-size": "14px"}))
    theme.add_style("th", ElementStyle(styles={"font-weight": "bold"}))
    theme.add_style(".button", ElementStyle(styles={"color": "white"}, attributes={"class": "btn"}))
    return theme


def build(configure, theme: Theme | None = None) -> str:
    return HtmlDocument(theme, configure).build()


# ---------------------------------------------------------------------------
# Declarative vs imperative
# ---------------------------------------------------------------------------

class TestEquivalence:

    def test_paragraph_with_inline_content(self, theme):
        declarative = build(
            lambda d: d.paragraph(
                lambda p: p.raw("Hello ").bold("world").raw(", ").italic("again")
            ),
            theme,
        )

        doc = HtmlDocument(theme)
        doc.add(TextElement("Hello ", Strong("world"), ", ", Em("again")))
        assert declarative == doc.build()

    def test_table(self, theme):
        declarative = build(
            lambda d: d.table(
                lambda t: t.header(lambda r: r.cell("A").cell("B"))
                           .row(lambda r: r.cell("1").cell("2"))
            ),
            theme,
        )

        doc = HtmlDocument(theme)
        doc.add(Table().add_header("A", "B").add_row("1", "2"))
        assert declarative == doc.build()

    def test_list(self, theme):
        declarative = build(lambda d: d.list(lambda l: l.item("a").item("b")), theme)

        doc = HtmlDocument(theme)
        doc.add(ListNode().add_item("a").add_item("b"))
        assert declarative == doc.build()


# ---------------------------------------------------------------------------
# Document builder
# ---------------------------------------------------------------------------

class TestDocumentBuilder:

    def test_scenario(self, theme):
        assert build(lambda d: d.paragraph("Hi"), theme) == '<p style="font-size:14px">Hi</p>'

    @pytest.mark.parametrize("level, tag", [(1, "h1"), (3, "h3"), (0, "h1"), (9, "h6")])
    def test_heading_clamped(self, level, tag):
        assert build(lambda d: d.heading(level, "T")) == f"<{tag}>T</{tag}>"

    def test_heading_shortcuts(self):
        out = build(lambda d: d.heading1("a").heading2("b").heading3("c"))
        assert out == "<h1>a</h1><h2>b</h2><h3>c</h3>"

    def test_text_custom_tag(self):
        assert build(lambda d: d.text("quoted", tag="blockquote")) == "<blockquote>quoted</blockquote>"

    def test_image(self):
        assert build(lambda d: d.image("logo.png", "Logo")) == '<img src="logo.png" alt="Logo" />'

    def test_link_paragraph(self):
        out = build(lambda d: d.link("https://example.com", "Visit"))
        assert out == '<p><a href="https://example.com">Visit</a></p>'

    def test_ordered_list(self):
        assert build(lambda d: d.ordered_list(lambda l: l.item("x"))) == "<ol><li>x</li></ol>"

    def test_list_item_callback(self):
        out = build(lambda d: d.list(lambda l: l.item(lambda i: i.raw("a ").bold("b"))))
        assert out == "<ul><li>a <strong>b</strong></li></ul>"

    def test_list_builder_chaining_styles(self):
        out = build(lambda d: d.list(lambda l: l.class_("items").style("margin", "0").item("a")))
        assert out == '<ul class="items" style="margin:0"><li>a</li></ul>'

    def test_generic_element(self):
        out = build(lambda d: d.element("div", lambda e: e.class_("card").raw("x")))
        assert out == '<div class="card">x</div>'

    def test_generic_element_without_config(self):
        assert build(lambda d: d.element("section")) == "<section></section>"

    def test_spacer(self):
        out = build(lambda d: d.spacer("20px"))
        assert out == '<div class="spacer" style="height:20px;line-height:20px">&nbsp;</div>'

    def test_divider(self):
        out = build(lambda d: d.divider())
        assert out == '<div class="divider" style="border-top:1px solid #dddddd;margin:16px 0"></div>'

    def test_raw_html_passthrough(self):
        assert build(lambda d: d.raw_html("<!-- preheader -->")) == "<!-- preheader -->"

    def test_markdown(self):
        assert build(lambda d: d.markdown("Hello *there*")) == "<p>Hello <em>there</em></p>"

    def test_add_node(self):
        assert build(lambda d: d.add_node(Strong("x"))) == "<strong>x</strong>"


# ---------------------------------------------------------------------------
# Inline content
# ---------------------------------------------------------------------------

class TestTextContentBuilder:

    def test_nested_formatting(self):
        out = build(lambda d: d.paragraph(lambda p: p.bold(lambda b: b.raw("very ").italic("nested"))))
        assert out == "<p><strong>very <em>nested</em></strong></p>"

    def test_link_with_class_from_theme(self, theme):
        out = build(
            lambda d: d.paragraph(
                lambda p: p.link("https://example.com", lambda a: a.class_("button").raw("Buy"))
            ),
            theme,
        )
        assert out == (
            '<p style="font-size:14px">'
            '<a href="https://example.com" class="button btn" style="color:white">Buy</a></p>'
        )

    def test_inline_element_and_image(self):
        out = build(lambda d: d.paragraph(lambda p: p.element("code", "x = 1").image("i.png")))
        assert out == '<p><code>x = 1</code><img src="i.png" /></p>'

    def test_line_break(self):
        out = build(lambda d: d.paragraph(lambda p: p.raw("a").line_break().raw("b")))
        assert out == "<p>a<br />b</p>"

    def test_parent_styling(self):
        out = build(lambda d: d.paragraph(lambda p: p.style("color", "red").attr("id", "lead").raw("x")))
        assert out == '<p id="lead" style="color:red">x</p>'

    def test_add_prebuilt_node(self):
        out = build(lambda d: d.paragraph(lambda p: p.add(Link("https://example.com", "x"))))
        assert out == '<p><a href="https://example.com">x</a></p>'

    def test_link_without_href_fails_on_build(self):
        doc = HtmlDocument(configure=lambda d: d.paragraph(lambda p: p.link("", "broken")))
        with pytest.raises(ValidationError):
            doc.build()


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

class TestTableBuilder:

    def test_header_cells_render_th(self, theme):
        out = build(lambda d: d.table(lambda t: t.header(lambda r: r.cell("A"))), theme)
        assert out == '<table><tr><th style="font-weight:bold">A</th></tr></table>'

    def test_header_cell_in_body_row(self):
        out = build(lambda d: d.table(lambda t: t.row(lambda r: r.header_cell("K").cell("V"))))
        assert out == "<table><tr><th>K</th><td>V</td></tr></table>"

    def test_first_row_fixes_column_count(self):
        doc = HtmlDocument()
        builder = doc.builder()
        builder.table(lambda t: t.header(lambda r: r.cell("A").cell("B").cell("C")))
        table = doc.nodes[0]
        assert isinstance(table, Table)
        assert table.expected_column_count == 3

    def test_mismatch_raises(self):
        doc = HtmlDocument(configure=lambda d: d.table(
            lambda t: t.header(lambda r: r.cell("A").cell("B").cell("C"))
                       .row(lambda r: r.cell("1").cell("2"))
        ))
        with pytest.raises(ValidationError, match="expected 3"):
            doc.build()

    def test_span_disables_check(self):
        doc = HtmlDocument(configure=lambda d: d.table(
            lambda t: t.header(lambda r: r.cell("A").cell("B").cell("C"))
                       .row(lambda r: r.cell("1", col_span=2))
                       .row(lambda r: r.cell("x").cell("y"))
        ))
        out = doc.build()
        assert '<td colspan="2">1</td>' in out

    def test_row_span(self):
        out = build(lambda d: d.table(lambda t: t.row(lambda r: r.cell("x", row_span=3))))
        assert out == '<table><tr><td rowspan="3">x</td></tr></table>'

    def test_second_header_raises(self):
        with pytest.raises(UsageError):
            HtmlDocument(configure=lambda d: d.table(
                lambda t: t.header(lambda r: r.cell("A")).header(lambda r: r.cell("B"))
            ))

    def test_cell_callback_content(self):
        out = build(lambda d: d.table(lambda t: t.row(lambda r: r.cell(lambda c: c.bold("x")))))
        assert out == "<table><tr><td><strong>x</strong></td></tr></table>"

    def test_table_attributes(self):
        out = build(lambda d: d.table(lambda t: t.attr("role", "presentation").row(lambda r: r.cell("x"))))
        assert out == '<table role="presentation"><tr><td>x</td></tr></table>'


# ---------------------------------------------------------------------------
# with_ helper
# ---------------------------------------------------------------------------

class TestWith:

    def test_returns_configured_node(self):
        node = with_(GenericElement("div"), lambda n: n.add_class("box"))
        assert node.classes == ["box"]

    def test_with_image(self):
        image = with_(Image("x.png"), lambda n: n.add_attribute("width", "600"))
        assert image.build(Theme()) == '<img src="x.png" width="600" />'

    def test_table_cell_with(self):
        cell = with_(TableCell("x"), lambda n: n.add_style("padding", "4px"))
        assert cell.build(Theme()) == '<td style="padding:4px">x</td>'


class TestThemeBinding:

    def test_theme_read_at_build_time(self):
        doc = HtmlDocument(configure=lambda d: d.paragraph(lambda p: p.bold("x")))
        assert doc.build() == "<p><strong>x</strong></p>"
        doc.theme = Theme().add_style("strong", ElementStyle(styles={"color": "red"}))
        assert doc.build() == '<p><strong style="color:red">x</strong></p>'

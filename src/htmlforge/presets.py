"""Ready-made email themes.

Each preset maps tag and class selectors to inline-friendly styles
(default, newsletter, minimal).  Presets are rebuilt on every lookup so
callers may extend the returned :class:`~htmlforge.theme.Theme` freely.
"""

from __future__ import annotations

from htmlforge.theme import ElementStyle, Theme


# ---------------------------------------------------------------------------
# Preset definitions
# ---------------------------------------------------------------------------

_SANS_STACK = "Helvetica, Arial, sans-serif"
_SERIF_STACK = "Georgia, 'Times New Roman', serif"
_MONO_STACK = "Consolas, Menlo, monospace"


def _build_default_theme() -> Theme:
    """Build the **default** preset."""

    body = ElementStyle(styles={
        "font-family": _SANS_STACK,
        "font-size": "14px",
        "line-height": "1.5",
        "color": "#222222",
    })

    # Heading sizes: H1=26, H2=21, H3=17, H4=15, H5=14, H6=13
    heading_sizes = {1: "26px", 2: "21px", 3: "17px", 4: "15px", 5: "14px", 6: "13px"}

    theme = Theme()
    theme.add_style("p", body.merged(ElementStyle(styles={"margin": "0 0 12px 0"})))

    for level in range(1, 7):
        theme.add_style(f"h{level}", ElementStyle(styles={
            "font-family": _SANS_STACK,
            "font-size": heading_sizes[level],
            "font-weight": "bold",
            "color": "#111111",
            "margin": "0 0 10px 0",
        }))

    theme.add_style("a", ElementStyle(styles={"color": "#0563c1", "text-decoration": "underline"}))
    theme.add_style("img", ElementStyle(
        styles={"border": "0", "display": "block", "max-width": "100%"},
    ))
    theme.add_style("ul", body.merged(ElementStyle(styles={"margin": "0 0 12px 0", "padding-left": "24px"})))
    theme.add_style("ol", body.merged(ElementStyle(styles={"margin": "0 0 12px 0", "padding-left": "24px"})))
    theme.add_style("li", ElementStyle(styles={"margin": "0 0 4px 0"}))
    theme.add_style("table", ElementStyle(
        styles={"border-collapse": "collapse", "width": "100%"},
        attributes={"cellpadding": "0", "cellspacing": "0", "role": "presentation"},
    ))
    theme.add_style("th", body.merged(ElementStyle(styles={
        "font-weight": "bold",
        "background-color": "#e0e0e0",
        "border": "1px solid #cccccc",
        "padding": "6px 8px",
        "text-align": "center",
    })))
    theme.add_style("td", body.merged(ElementStyle(styles={
        "border": "1px solid #cccccc",
        "padding": "6px 8px",
        "text-align": "left",
    })))
    theme.add_style("pre", ElementStyle(styles={
        "font-family": _MONO_STACK,
        "font-size": "12px",
        "background-color": "#f5f5f5",
        "padding": "8px",
        "margin": "0 0 12px 0",
    }))
    theme.add_style("code", ElementStyle(styles={
        "font-family": _MONO_STACK,
        "font-size": "12px",
        "background-color": "#f0f0f0",
        "color": "#333333",
    }))
    theme.add_style("blockquote", ElementStyle(styles={
        "font-style": "italic",
        "margin": "0 0 12px 0",
        "padding-left": "12px",
        "border-left": "3px solid #cccccc",
    }))
    theme.add_style(".button", ElementStyle(styles={
        "display": "inline-block",
        "background-color": "#0563c1",
        "color": "#ffffff",
        "padding": "10px 18px",
        "text-decoration": "none",
        "border-radius": "4px",
    }))
    theme.add_style(".muted", ElementStyle(styles={"color": "#777777", "font-size": "12px"}))
    theme.add_style(".spacer", ElementStyle(styles={"font-size": "0", "line-height": "0"}))
    return theme


def _build_newsletter_theme() -> Theme:
    """Build the **newsletter** preset -- serif body, roomier spacing."""

    theme = _build_default_theme()

    body = ElementStyle(styles={
        "font-family": _SERIF_STACK,
        "font-size": "16px",
        "line-height": "1.7",
        "color": "#333333",
    })
    theme.add_style("p", body.merged(ElementStyle(styles={"margin": "0 0 16px 0"})))

    heading_sizes = {1: "30px", 2: "24px", 3: "19px", 4: "17px", 5: "16px", 6: "15px"}
    for level in range(1, 7):
        theme.add_style(f"h{level}", ElementStyle(styles={
            "font-family": _SERIF_STACK,
            "font-size": heading_sizes[level],
            "font-weight": "normal",
            "color": "#1a1a1a",
            "margin": "24px 0 12px 0",
        }))

    theme.add_style("a", ElementStyle(styles={"color": "#b5482f", "text-decoration": "none"}))
    theme.add_style("blockquote", ElementStyle(styles={
        "font-style": "italic",
        "color": "#555555",
        "margin": "0 0 16px 0",
        "padding-left": "16px",
        "border-left": "4px solid #b5482f",
    }))
    theme.add_style(".button", ElementStyle(styles={
        "display": "inline-block",
        "background-color": "#b5482f",
        "color": "#ffffff",
        "padding": "12px 24px",
        "text-decoration": "none",
        "border-radius": "2px",
    }))
    return theme


def _build_minimal_theme() -> Theme:
    """Build the **minimal** preset -- only typography, no decoration."""

    theme = Theme()
    body = ElementStyle(styles={"font-family": _SANS_STACK, "font-size": "14px"})

    theme.add_style("p", body)
    for level in range(1, 4):
        theme.add_style(f"h{level}", body.merged(ElementStyle(styles={"font-weight": "bold"})))
    theme.add_style("table", ElementStyle(attributes={"role": "presentation"}))
    theme.add_style("th", body.merged(ElementStyle(styles={"text-align": "left"})))
    theme.add_style("td", body)
    theme.add_style("code", ElementStyle(styles={"font-family": _MONO_STACK}))
    theme.add_style(".muted", ElementStyle(styles={"color": "#888888"}))
    return theme


# ---------------------------------------------------------------------------
# Preset registry
# ---------------------------------------------------------------------------

_PRESET_BUILDERS = {
    "default": _build_default_theme,
    "newsletter": _build_newsletter_theme,
    "minimal": _build_minimal_theme,
}


class ThemePresets:
    """Look up named themes.

    Usage::

        theme = ThemePresets.get("newsletter")
        theme.add_style(".cta", ElementStyle(styles={"color": "red"}))
    """

    PRESETS = list(_PRESET_BUILDERS.keys())

    @staticmethod
    def get(name: str = "default") -> Theme:
        """Return a freshly built :class:`Theme` for preset *name*."""
        if name not in _PRESET_BUILDERS:
            raise ValueError(
                f"Unknown theme {name!r}. Choose from: {', '.join(_PRESET_BUILDERS)}"
            )
        return _PRESET_BUILDERS[name]()

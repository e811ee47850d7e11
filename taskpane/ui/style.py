"""Button appearance rules for task rows.

Appearances are computed by a pure function from a handful of flags and an
injected palette. ButtonStyle is a small descriptor for the flags that are
fixed per widget (selected, accent); the interaction flags (focused,
hovered) are supplied when an appearance is requested.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from taskpane.ui.theme import DEFAULT_PALETTE, TRANSPARENT, Palette


class Appearance(BaseModel):
    """Resolved visual attributes for one button state."""

    model_config = ConfigDict(frozen=True)

    background: Optional[str] = None
    text_color: Optional[str] = None
    icon_color: Optional[str] = None
    outline_width: float = 0.0
    outline_color: str = TRANSPARENT
    border_width: float = 0.0
    border_color: str = TRANSPARENT
    border_radius: int = 0


def button_appearance(
    palette: Palette,
    selected: bool,
    focused: bool,
    accent: bool,
    hovered: bool,
) -> Appearance:
    """Compute a button appearance.

    Selection paints the accent (or component) background, hovering
    overrides it with the button background, and a focused accent button
    gets a thin accent outline.

    Args:
        palette: Colors to draw from
        selected: Whether the button represents the selected item
        focused: Whether the button has keyboard focus
        accent: Whether the button uses accent coloring
        hovered: Whether the pointer is over the button

    Returns:
        Appearance for these flags
    """
    attributes = {"border_radius": palette.radius_s}

    if selected:
        if accent:
            attributes.update(
                background=palette.accent,
                icon_color=palette.on_accent,
                text_color=palette.on_accent,
            )
        else:
            attributes["background"] = palette.bg_component

    if hovered:
        attributes.update(
            background=palette.button_bg,
            icon_color=palette.on_bg,
            text_color=palette.on_bg,
        )

    if focused and accent:
        attributes.update(
            outline_width=1.0,
            outline_color=palette.accent,
            border_width=2.0,
            border_color=TRANSPARENT,
        )

    return Appearance(**attributes)


class ButtonStyle(BaseModel):
    """Per-widget style descriptor resolving appearances by interaction state."""

    model_config = ConfigDict(frozen=True)

    selected: bool = False
    accent: bool = False
    palette: Palette = DEFAULT_PALETTE

    def active(self, focused: bool) -> Appearance:
        return button_appearance(self.palette, self.selected, focused, self.accent, False)

    def disabled(self) -> Appearance:
        return button_appearance(self.palette, self.selected, False, self.accent, False)

    def hovered(self, focused: bool) -> Appearance:
        return button_appearance(self.palette, self.selected, focused, self.accent, True)

    def pressed(self, focused: bool) -> Appearance:
        return button_appearance(self.palette, self.selected, focused, self.accent, False)

    def resolve(self, focused: bool = False, hovered: bool = False, disabled: bool = False) -> Appearance:
        """Pick the appearance for the current interaction state."""
        if disabled:
            return self.disabled()
        if hovered:
            return self.hovered(focused)
        return self.active(focused)

    def css(self, selector: str) -> str:
        """Render Textual CSS rules for the widget matched by ``selector``.

        Covers the resting, hovered, focused and disabled states through
        the matching pseudo-classes.
        """
        return "".join([
            appearance_css(selector, self.active(False)),
            appearance_css(f"{selector}:hover", self.hovered(False)),
            appearance_css(f"{selector}:focus", self.active(True)),
            appearance_css(f"{selector}:disabled", self.disabled()),
        ])


def appearance_css(selector: str, appearance: Appearance) -> str:
    """Render one appearance as a Textual CSS rule.

    Unset colors are left out so the rule inherits them. Textual has no
    outline width, so widths above one cell-line map to the ``tall`` style.

    Only background, text color and outline are rendered. Textual draws
    in whole cells: a border always takes a cell of layout, so the
    transparent spacing border is left out to keep rows from shifting on
    focus, and there is no corner radius. Icons are glyphs in the text,
    so ``icon_color`` follows ``color``.
    """
    declarations = []
    if appearance.background is not None:
        declarations.append(f"background: {appearance.background};")
    if appearance.text_color is not None:
        declarations.append(f"color: {appearance.text_color};")
    if appearance.outline_width > 0:
        outline_type = "tall" if appearance.outline_width > 1 else "solid"
        declarations.append(f"outline: {outline_type} {appearance.outline_color};")

    body = "".join(f"\n    {declaration}" for declaration in declarations)
    return f"{selector} {{{body}\n}}\n"

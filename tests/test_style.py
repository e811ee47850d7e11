"""
Tests for the button appearance rules.
"""

import pytest

from taskpane.ui.style import Appearance, ButtonStyle, appearance_css, button_appearance
from taskpane.ui.theme import Palette, TRANSPARENT


@pytest.fixture
def palette():
    return Palette(
        accent="#00AAFF",
        on_accent="#000000",
        bg_component="#222222",
        button_bg="#333333",
        on_bg="#EEEEEE",
        radius_s=4,
    )


class TestButtonAppearance:
    """Tests for button_appearance()."""

    def test_plain_button_has_no_fill(self, palette):
        appearance = button_appearance(palette, selected=False, focused=False, accent=False, hovered=False)

        assert appearance.background is None
        assert appearance.text_color is None
        assert appearance.outline_width == 0
        assert appearance.border_radius == 4

    def test_selected_accent_uses_accent_colors(self, palette):
        appearance = button_appearance(palette, selected=True, focused=False, accent=True, hovered=False)

        assert appearance.background == "#00AAFF"
        assert appearance.text_color == "#000000"
        assert appearance.icon_color == "#000000"

    def test_selected_without_accent_uses_component_background(self, palette):
        appearance = button_appearance(palette, selected=True, focused=False, accent=False, hovered=False)

        assert appearance.background == "#222222"
        assert appearance.text_color is None

    def test_hover_overrides_selection(self, palette):
        appearance = button_appearance(palette, selected=True, focused=False, accent=True, hovered=True)

        assert appearance.background == "#333333"
        assert appearance.text_color == "#EEEEEE"
        assert appearance.icon_color == "#EEEEEE"

    def test_focused_accent_gets_outline(self, palette):
        appearance = button_appearance(palette, selected=False, focused=True, accent=True, hovered=False)

        assert appearance.outline_width == 1.0
        assert appearance.outline_color == "#00AAFF"
        assert appearance.border_width == 2.0
        assert appearance.border_color == TRANSPARENT

    def test_focus_without_accent_has_no_outline(self, palette):
        appearance = button_appearance(palette, selected=False, focused=True, accent=False, hovered=False)

        assert appearance.outline_width == 0

    def test_focus_and_hover_combine(self, palette):
        appearance = button_appearance(palette, selected=False, focused=True, accent=True, hovered=True)

        assert appearance.background == "#333333"
        assert appearance.outline_color == "#00AAFF"


class TestButtonStyle:
    """Tests for the ButtonStyle descriptor."""

    def test_state_methods(self, palette):
        style = ButtonStyle(selected=True, accent=True, palette=palette)

        assert style.active(False).background == "#00AAFF"
        assert style.hovered(False).background == "#333333"
        assert style.pressed(True).outline_width == 1.0
        assert style.disabled().outline_width == 0

    def test_resolve_prefers_disabled_then_hovered(self, palette):
        style = ButtonStyle(accent=True, palette=palette)

        assert style.resolve(focused=True, hovered=True, disabled=True) == style.disabled()
        assert style.resolve(hovered=True) == style.hovered(False)
        assert style.resolve(focused=True) == style.active(True)

    def test_css_covers_interaction_states(self, palette):
        css = ButtonStyle(accent=True, palette=palette).css("TaskRow")

        assert "TaskRow {" in css
        assert "TaskRow:hover {" in css
        assert "TaskRow:focus {" in css
        assert "TaskRow:disabled {" in css
        assert "background: #333333;" in css
        assert "outline: solid #00AAFF;" in css


class TestAppearanceCss:
    def test_unset_colors_are_omitted(self):
        css = appearance_css("Button", Appearance())

        assert css == "Button {\n}\n"

    def test_wide_outline_maps_to_tall(self):
        css = appearance_css("Button", Appearance(outline_width=2.0, outline_color="#FFFFFF"))

        assert "outline: tall #FFFFFF;" in css

    def test_spacing_border_is_not_rendered(self, palette):
        """Test that a focused accent button gets an outline but no border rule."""
        appearance = button_appearance(palette, selected=False, focused=True, accent=True, hovered=False)

        css = appearance_css("TaskRow:focus", appearance)

        assert appearance.border_width == 2.0
        assert "outline: solid #00AAFF;" in css
        assert "border" not in css

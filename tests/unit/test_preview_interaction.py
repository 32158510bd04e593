"""Unit tests for the custom layout interaction state machine."""

import pytest

from menu_render_service.models.menu_models import LayoutMode
from menu_render_service.rendering.preview_interaction import (
    DEFAULT_TRANSFORM,
    MAX_SCALE,
    MAX_ZOOM,
    MIN_SCALE,
    MIN_ZOOM,
    CustomLayoutInteraction,
    InteractionState,
    ItemTransform,
)

CUSTOM = LayoutMode.CUSTOM


@pytest.mark.unit
class TestSelection:
    """Test suite for selecting items."""

    def test_starts_idle(self) -> None:
        interaction = CustomLayoutInteraction()

        assert interaction.state == InteractionState.IDLE
        assert interaction.zoom == 1.0
        assert interaction.transform_for("item_1") == DEFAULT_TRANSFORM

    def test_click_toggles_selection(self) -> None:
        interaction = CustomLayoutInteraction()

        assert interaction.click("item_1", CUSTOM) is True
        assert interaction.state == InteractionState.SELECTED
        assert interaction.click("item_1", CUSTOM) is True
        assert interaction.selected_item_id is None

    def test_click_other_item_moves_selection(self) -> None:
        interaction = CustomLayoutInteraction()
        interaction.click("item_1", CUSTOM)

        interaction.click("item_2", CUSTOM)

        assert interaction.selected_item_id == "item_2"

    @pytest.mark.parametrize("layout", [LayoutMode.GRID, LayoutMode.CARD, LayoutMode.LIST])
    def test_ignored_outside_custom_layout(self, layout: LayoutMode) -> None:
        interaction = CustomLayoutInteraction()

        assert interaction.click("item_1", layout) is False
        assert interaction.scale_up(layout) is False
        assert interaction.pointer_down("item_1", 0, 0, layout) is False
        assert interaction.state == InteractionState.IDLE
        assert interaction.transforms == {}


@pytest.mark.unit
class TestDragging:
    """Test suite for dragging the selected item."""

    def test_pointer_down_requires_selection(self) -> None:
        interaction = CustomLayoutInteraction()

        assert interaction.pointer_down("item_1", 10, 10, CUSTOM) is False
        assert interaction.state == InteractionState.IDLE

    def test_drag_offsets_by_pointer_delta(self) -> None:
        interaction = CustomLayoutInteraction()
        interaction.click("item_1", CUSTOM)

        interaction.pointer_down("item_1", 10, 10, CUSTOM)
        assert interaction.state == InteractionState.DRAGGING
        interaction.pointer_move(20, 15, CUSTOM)
        interaction.pointer_move(23, 13, CUSTOM)
        interaction.pointer_up()

        assert interaction.transform_for("item_1") == ItemTransform(x=13, y=3, scale=1.0)
        assert interaction.state == InteractionState.SELECTED

    def test_second_drag_continues_from_previous_offset(self) -> None:
        interaction = CustomLayoutInteraction()
        interaction.click("item_1", CUSTOM)
        interaction.pointer_down("item_1", 0, 0, CUSTOM)
        interaction.pointer_move(5, 5, CUSTOM)
        interaction.pointer_up()

        interaction.pointer_down("item_1", 100, 100, CUSTOM)
        interaction.pointer_move(90, 120, CUSTOM)
        interaction.pointer_up()

        assert interaction.transform_for("item_1") == ItemTransform(x=-5, y=25, scale=1.0)

    def test_move_without_drag_is_ignored(self) -> None:
        interaction = CustomLayoutInteraction()

        assert interaction.pointer_move(5, 5, CUSTOM) is False
        assert interaction.pointer_up() is False

    def test_click_ignored_while_dragging(self) -> None:
        interaction = CustomLayoutInteraction()
        interaction.click("item_1", CUSTOM)
        interaction.pointer_down("item_1", 0, 0, CUSTOM)

        assert interaction.click("item_2", CUSTOM) is False
        assert interaction.selected_item_id == "item_1"


@pytest.mark.unit
class TestScaleAndReset:
    """Test suite for scaling, reset and zoom."""

    def test_scale_steps_and_clamps(self) -> None:
        interaction = CustomLayoutInteraction()
        interaction.click("item_1", CUSTOM)

        interaction.scale_up(CUSTOM)
        assert interaction.transform_for("item_1").scale == 1.1

        for _ in range(20):
            interaction.scale_up(CUSTOM)
        assert interaction.transform_for("item_1").scale == MAX_SCALE

        for _ in range(20):
            interaction.scale_down(CUSTOM)
        assert interaction.transform_for("item_1").scale == MIN_SCALE

    def test_scale_requires_selection(self) -> None:
        interaction = CustomLayoutInteraction()

        assert interaction.scale_up(CUSTOM) is False

    def test_reset_restores_default_transform(self) -> None:
        interaction = CustomLayoutInteraction()
        interaction.click("item_1", CUSTOM)
        interaction.scale_up(CUSTOM)
        interaction.pointer_down("item_1", 0, 0, CUSTOM)
        interaction.pointer_move(30, 40, CUSTOM)
        interaction.pointer_up()

        assert interaction.reset(CUSTOM) is True

        assert interaction.transform_for("item_1") == DEFAULT_TRANSFORM
        assert "item_1" not in interaction.transforms

    def test_zoom_clamped_in_any_layout(self) -> None:
        interaction = CustomLayoutInteraction()

        for _ in range(10):
            interaction.zoom_in()
        assert interaction.zoom == MAX_ZOOM

        for _ in range(20):
            interaction.zoom_out()
        assert interaction.zoom == MIN_ZOOM


@pytest.mark.unit
class TestDragOutsideCustomLayout:
    """Test suite for drags interrupted by a layout change."""

    @pytest.mark.parametrize("layout", [LayoutMode.GRID, LayoutMode.CARD, LayoutMode.LIST])
    def test_move_after_layout_change_cancels_drag(self, layout: LayoutMode) -> None:
        interaction = CustomLayoutInteraction()
        interaction.click("item_1", CUSTOM)
        interaction.pointer_down("item_1", 0, 0, CUSTOM)
        interaction.pointer_move(10, 10, CUSTOM)

        assert interaction.pointer_move(40, 40, layout) is False

        assert interaction.transform_for("item_1") == ItemTransform(x=10, y=10, scale=1.0)
        assert interaction.state == InteractionState.SELECTED

    def test_cancel_drag_without_drag(self) -> None:
        interaction = CustomLayoutInteraction()

        assert interaction.cancel_drag() is False

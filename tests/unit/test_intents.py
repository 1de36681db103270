"""
Unit tests for the intent layer.

Tests command parsing, the cursor, intent dispatch and pointer clicks.
"""
import pytest
from minefield import (
    CellGeometry,
    Cursor,
    FlagAtCursorIntent,
    FlagResult,
    GamePhase,
    GameSession,
    IntentDispatcher,
    MoveCursorIntent,
    NotYetStarted,
    PointerButton,
    PointerTracker,
    RevealAtCursorIntent,
    RevealIntent,
    RevealResult,
    ToggleFlagIntent,
    parse_command,
)


# ============================================================================
# Command Parsing Tests
# ============================================================================

class TestParseCommand:
    """Test console command parsing."""

    @pytest.mark.parametrize(
        "text, intent",
        [
            ("r 3 4", RevealIntent(3, 4)),
            ("  R 0 8 ", RevealIntent(0, 8)),
            ("f 1 2", ToggleFlagIntent(1, 2)),
            ("w", MoveCursorIntent(-1, 0)),
            ("s", MoveCursorIntent(1, 0)),
            ("a", MoveCursorIntent(0, -1)),
            ("d", MoveCursorIntent(0, 1)),
            ("x", RevealAtCursorIntent()),
            ("m", FlagAtCursorIntent()),
        ],
    )
    def test_valid_commands(self, text: str, intent) -> None:
        assert parse_command(text) == intent

    @pytest.mark.parametrize("text", ["", "   ", "r 1", "f 1 2 3", "r a b", "zz", "x 1"])
    def test_malformed_commands_raise(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_command(text)


# ============================================================================
# Cursor Tests
# ============================================================================

class TestCursor:
    """Test cursor movement."""

    def test_cursor_starts_top_left(self) -> None:
        assert Cursor(4, 3).position == (0, 0)

    def test_cursor_clamps_at_edges(self) -> None:
        cursor = Cursor(4, 3)
        assert cursor.move(-1, -1) == (0, 0)
        assert cursor.move(10, 10) == (2, 3)
        assert cursor.move(-1, 0) == (1, 3)

    def test_initial_position_is_clamped(self) -> None:
        assert Cursor(3, 3, row=7, col=-2).position == (2, 0)


# ============================================================================
# Dispatcher Tests
# ============================================================================

class TestIntentDispatcher:
    """Test routing intents into a session."""

    def test_reveal_and_flag_intents(self, started_session: GameSession) -> None:
        dispatcher = IntentDispatcher(started_session)
        flag = dispatcher.dispatch(ToggleFlagIntent(3, 3))
        assert isinstance(flag, FlagResult)
        assert flag.flags_remaining == 2

        reveal = dispatcher.dispatch(RevealIntent(4, 4))
        assert isinstance(reveal, RevealResult)
        assert reveal.phase == GamePhase.WON

    def test_cursor_intents(self, started_session: GameSession) -> None:
        dispatcher = IntentDispatcher(started_session)
        assert dispatcher.dispatch(MoveCursorIntent(4, 4)) == (4, 4)

        flag = dispatcher.dispatch(FlagAtCursorIntent())
        assert (flag.row, flag.col, flag.is_flagged) == (4, 4, True)

        dispatcher.dispatch(FlagAtCursorIntent())
        reveal = dispatcher.dispatch(RevealAtCursorIntent())
        assert reveal.phase == GamePhase.WON

    def test_session_errors_propagate(self, default_session: GameSession) -> None:
        dispatcher = IntentDispatcher(default_session)
        with pytest.raises(NotYetStarted):
            dispatcher.dispatch(ToggleFlagIntent(0, 0))

    def test_unknown_intent_raises(self, default_session: GameSession) -> None:
        with pytest.raises(TypeError):
            IntentDispatcher(default_session).dispatch("reveal")


# ============================================================================
# Pointer Tests
# ============================================================================

def center_of(row: int, col: int, geometry: CellGeometry = CellGeometry()):
    x = geometry.inset_left + col * geometry.cell_pixels + geometry.cell_pixels / 2
    y = geometry.inset_top + row * geometry.cell_pixels + geometry.cell_pixels / 2
    return x, y


class TestCellGeometry:
    """Test pixel to cell mapping."""

    def test_cell_at_inside_board(self) -> None:
        geometry = CellGeometry(cell_pixels=30, inset_top=20)
        assert geometry.cell_at(45, 85, 5, 5) == (2, 1)
        assert geometry.cell_at(0, 20, 5, 5) == (0, 0)

    @pytest.mark.parametrize("x, y", [(10, 5), (-1, 50), (150, 50), (10, 170)])
    def test_cell_at_off_board(self, x: float, y: float) -> None:
        assert CellGeometry().cell_at(x, y, 5, 5) is None


class TestPointerTracker:
    """Test press/release clicks."""

    def test_primary_click_reveals(self, started_session: GameSession) -> None:
        tracker = PointerTracker(IntentDispatcher(started_session))
        tracker.move(*center_of(4, 4))
        tracker.press(PointerButton.PRIMARY)
        result = tracker.release(PointerButton.PRIMARY)
        assert result.phase == GamePhase.WON

    def test_secondary_click_flags(self, started_session: GameSession) -> None:
        tracker = PointerTracker(IntentDispatcher(started_session))
        tracker.move(*center_of(3, 4))
        tracker.press(PointerButton.SECONDARY)
        result = tracker.release(PointerButton.SECONDARY)
        assert result.is_flagged is True

    def test_release_on_other_cell_cancels(self, started_session: GameSession) -> None:
        tracker = PointerTracker(IntentDispatcher(started_session))
        tracker.move(*center_of(4, 4))
        tracker.press(PointerButton.PRIMARY)
        tracker.move(*center_of(3, 3))
        assert tracker.release(PointerButton.PRIMARY) is None
        assert started_session.phase == GamePhase.IN_PROGRESS

    def test_release_without_press_is_ignored(self, started_session: GameSession) -> None:
        tracker = PointerTracker(IntentDispatcher(started_session))
        tracker.move(*center_of(4, 4))
        assert tracker.release(PointerButton.PRIMARY) is None

    def test_press_off_board_is_ignored(self, started_session: GameSession) -> None:
        tracker = PointerTracker(IntentDispatcher(started_session))
        tracker.move(5, 5)
        tracker.press(PointerButton.PRIMARY)
        assert tracker.release(PointerButton.PRIMARY) is None

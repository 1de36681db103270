"""
Plain-text rendering of a game session.
"""
from typing import Optional

from .board import Position
from .cell import CellView
from .session import GameSession, GamePhase


def cell_glyph(cell: CellView) -> str:
    """Single character for one cell view."""
    if cell.is_flagged:
        return "F"
    if cell.is_mine:
        return "*"
    if not cell.is_revealed:
        return "."
    if cell.adjacent_mines == 0:
        return " "
    return str(cell.adjacent_mines)


def render_ansi(session: GameSession, cursor: Optional[Position] = None) -> str:
    """
    Render the board as ASCII text.

    The first line shows flags remaining and the phase. Mines show as
    ``*`` once revealed, and all of them once the game is over. The
    cursor cell, if given, is wrapped in brackets.
    """
    lines = [f"Flags: {session.flags_remaining:>3}  [{session.phase.name}]"]

    for row in session.snapshot():
        row_str = ""
        for cell in row:
            glyph = cell_glyph(cell)
            if cursor == cell.position:
                row_str += f"[{glyph}]"
            else:
                row_str += f" {glyph} "
        lines.append(row_str)

    if session.phase == GamePhase.WON:
        lines.append("Game over: you win!")
    elif session.phase == GamePhase.LOST:
        lines.append("Game over: you hit a mine.")

    return "\n".join(lines)

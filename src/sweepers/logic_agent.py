"""
Logic-based agent for the minefield game.

Derives certain mines and certain safe cells from the revealed
numbers, and only guesses when no deduction is possible.
"""
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from minefield.board import Position
from minefield.cell import CellView
from minefield.intents import Intent, RevealIntent, ToggleFlagIntent
from minefield.session import GamePhase, GameSession

from .base_agent import BaseAgent

Grid = Tuple[Tuple[CellView, ...], ...]


# ============================================================================
# Constraint Types
# ============================================================================

@dataclass(frozen=True)
class Constraint:
    """
    Exactly ``mine_count`` of ``cells`` are mines.

    For example, a revealed "2" with 3 hidden neighbors and no flags
    gives cells={A, B, C}, mine_count=2.
    """

    cells: FrozenSet[Position]
    mine_count: int


# ============================================================================
# Logic Agent
# ============================================================================

class LogicAgent(BaseAgent):
    """
    Agent that plays by constraint propagation.

    Strategy:
        1. Open in the top-left corner; its row and column stay mine-free.
        2. Build one constraint per revealed number.
        3. Apply single-constraint and subset rules until nothing changes.
        4. Reveal a certain safe cell, else flag a certain mine.
        5. Otherwise reveal the cell with the lowest estimated risk.
        6. With every hidden cell flagged, lift a flag not proven to be a mine.
    """

    max_iterations = 100

    def select_intent(self, session: GameSession) -> Intent:
        """
        Select the best move for the current position.

        Raises:
            ValueError: No hidden or flagged cell is left.
        """
        if session.phase == GamePhase.NOT_STARTED:
            return RevealIntent(0, 0)

        grid = session.snapshot()
        candidates = self.candidate_positions(session)
        if not candidates:
            return self._select_unflag(session, grid)

        safe_cells, mine_cells = self.solve(session, grid)

        if safe_cells:
            return RevealIntent(*min(safe_cells))

        for row, col in sorted(mine_cells):
            if not grid[row][col].is_flagged:
                return ToggleFlagIntent(row, col)

        return RevealIntent(*self._select_by_risk(session, grid, candidates, mine_cells))

    # ========================================================================
    # Constraint Propagation
    # ========================================================================

    def build_constraints(
        self, session: GameSession, grid: Grid, trust_flags: bool = True
    ) -> List[Constraint]:
        """
        One constraint per revealed number with hidden neighbors.

        With trust_flags=False, flagged cells count as hidden.
        """
        constraints = []
        for line in grid:
            for cell in line:
                if not cell.is_revealed or not cell.adjacent_mines:
                    continue

                hidden, flagged = self._split_neighbors(session, grid, cell)
                if not trust_flags:
                    hidden, flagged = hidden | flagged, set()
                remaining = cell.adjacent_mines - len(flagged)
                if not hidden or remaining < 0 or remaining > len(hidden):
                    continue
                constraints.append(Constraint(frozenset(hidden), remaining))
        return constraints

    def solve(
        self, session: GameSession, grid: Grid, trust_flags: bool = True
    ) -> Tuple[Set[Position], Set[Position]]:
        """
        Propagate constraints to a fixpoint.

        Returns:
            Tuple of (safe_cells, mine_cells). Mines already flagged are
            not included unless trust_flags is False.
        """
        safe_cells: Set[Position] = set()
        mine_cells: Set[Position] = set()
        constraints = self.build_constraints(session, grid, trust_flags)

        changed = True
        iterations = 0
        while changed and iterations < self.max_iterations:
            changed = False
            iterations += 1

            reduced = []
            for constraint in constraints:
                cells = constraint.cells - safe_cells - mine_cells
                mines = constraint.mine_count - len(constraint.cells & mine_cells)
                if not cells:
                    continue
                if mines == 0:
                    safe_cells.update(cells)
                    changed = True
                elif mines == len(cells):
                    mine_cells.update(cells)
                    changed = True
                else:
                    reduced.append(Constraint(frozenset(cells), mines))

            subset_safe, subset_mines, constraints = self._subset_reduction(reduced)
            if subset_safe - safe_cells or subset_mines - mine_cells:
                safe_cells.update(subset_safe)
                mine_cells.update(subset_mines)
                changed = True

        return safe_cells, mine_cells

    def _subset_reduction(
        self, constraints: List[Constraint]
    ) -> Tuple[Set[Position], Set[Position], List[Constraint]]:
        """
        Compare constraint pairs where one cell set contains the other.

        If A's cells are a subset of B's, then B - A holds
        B.mine_count - A.mine_count mines. Example:
            A: {X, Y} has 1 mine
            B: {X, Y, Z} has 1 mine
            -> Z is safe
        """
        safe_cells: Set[Position] = set()
        mine_cells: Set[Position] = set()
        derived: List[Constraint] = []

        for i, small in enumerate(constraints):
            for large in constraints[i + 1:]:
                if small.cells < large.cells:
                    pair = (small, large)
                elif large.cells < small.cells:
                    pair = (large, small)
                else:
                    continue
                diff_cells = pair[1].cells - pair[0].cells
                diff_mines = pair[1].mine_count - pair[0].mine_count
                if diff_mines == 0:
                    safe_cells.update(diff_cells)
                elif diff_mines == len(diff_cells):
                    mine_cells.update(diff_cells)
                elif 0 < diff_mines < len(diff_cells):
                    derived.append(Constraint(frozenset(diff_cells), diff_mines))

        # dict.fromkeys keeps order while dropping duplicates
        merged = list(dict.fromkeys(constraints + derived))
        return safe_cells, mine_cells, merged

    def _split_neighbors(
        self, session: GameSession, grid: Grid, cell: CellView
    ) -> Tuple[Set[Position], Set[Position]]:
        """Hidden and flagged neighbors of a revealed cell."""
        hidden: Set[Position] = set()
        flagged: Set[Position] = set()
        for row, col in session.neighbors(cell.row, cell.col):
            neighbor = grid[row][col]
            if neighbor.is_flagged:
                flagged.add((row, col))
            elif not neighbor.is_revealed:
                hidden.add((row, col))
        return hidden, flagged

    # ========================================================================
    # Guessing
    # ========================================================================

    def _select_unflag(self, session: GameSession, grid: Grid) -> Intent:
        """Lift the first flag that the numbers alone do not prove is a mine."""
        flagged = sorted(
            cell.position for line in grid for cell in line if cell.is_flagged
        )
        if not flagged:
            raise ValueError("No hidden or flagged cells left")

        _, mine_cells = self.solve(session, grid, trust_flags=False)
        for position in flagged:
            if position not in mine_cells:
                return ToggleFlagIntent(*position)
        return ToggleFlagIntent(*flagged[0])

    def estimate_risk(
        self,
        session: GameSession,
        grid: Grid,
        known_mines: Set[Position],
    ) -> Dict[Position, float]:
        """
        Estimate mine probability for hidden cells next to numbers.

        Each number spreads its remaining mines evenly over its unknown
        neighbors; a cell keeps the highest estimate it receives.
        """
        estimates: Dict[Position, List[float]] = defaultdict(list)
        for constraint in self.build_constraints(session, grid):
            unknown = constraint.cells - known_mines
            remaining = constraint.mine_count - len(constraint.cells & known_mines)
            if not unknown or remaining < 0:
                continue
            probability = remaining / len(unknown)
            for position in unknown:
                estimates[position].append(probability)
        return {position: max(values) for position, values in estimates.items()}

    def _select_by_risk(
        self,
        session: GameSession,
        grid: Grid,
        candidates: List[Position],
        known_mines: Set[Position],
    ) -> Position:
        risks = self.estimate_risk(session, grid, known_mines)
        unknown = [p for p in candidates if p not in known_mines] or candidates
        density = self._background_density(session, unknown, known_mines)

        best_risk: Optional[float] = None
        best: List[Position] = []
        for position in unknown:
            risk = risks.get(position, density)
            if best_risk is None or risk < best_risk:
                best_risk, best = risk, [position]
            elif risk == best_risk:
                best.append(position)
        return self.choose(best)

    def _background_density(
        self,
        session: GameSession,
        unknown: List[Position],
        known_mines: Set[Position],
    ) -> float:
        """Unfound mines spread over all unknown cells."""
        unfound = session.flags_remaining - len(known_mines)
        return max(unfound, 0) / max(len(unknown), 1)

"""
Thinking data: the instrumented output of one search call.

Holds the record types the engine returns and pure functions that turn
them into a text report, a replay step sequence, and tensor views
(score grid, policy over best moves). None of these functions search.
"""

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import torch

# Outcome labels
WIN = "win"
LOSS = "loss"
DRAW = "draw"
UNKNOWN = "unknown"

# Search strategies
EXACT = "exact"
DEPTH_LIMITED = "depth_limited"

# Scores beyond +/- this are proven results
DECISIVE_THRESHOLD = 50

# Replay step kinds
CONSIDER = "consider"
PRUNED = "pruned"
CHOSEN = "chosen"


def classify_score(score: float) -> str:
    """Map a root score to an outcome label."""
    if score > DECISIVE_THRESHOLD:
        return WIN
    if score < -DECISIVE_THRESHOLD:
        return LOSS
    if score == 0:
        return DRAW
    return UNKNOWN


@dataclass(frozen=True)
class MoveEvaluation:
    """Search record for one root-level candidate move."""
    position: int
    score: float
    outcome: str
    nodes_visited: int
    max_depth_reached: int
    branches_pruned: int = 0
    pruned: bool = False
    pruning_depth: Optional[int] = None  # shallowest depth of a cut in this subtree

    @property
    def fully_explored(self) -> bool:
        return not self.pruned


@dataclass(frozen=True)
class TerminalCounts:
    wins: int = 0
    losses: int = 0
    draws: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses + self.draws


@dataclass(frozen=True)
class ThinkingData:
    """Everything one search call found out, in exploration order."""
    chosen_move: int
    chosen_score: float
    evaluations: Tuple[MoveEvaluation, ...]
    nodes_evaluated: int
    branches_pruned: int
    max_depth: int
    terminal_states: TerminalCounts
    search_time_ms: float
    principal_variation: Optional[Tuple[int, ...]] = None
    grid_size: int = 3
    strategy: str = EXACT
    used_alpha_beta: bool = True

    @property
    def chosen_outcome(self) -> str:
        return classify_score(self.chosen_score)

    def to_dict(self) -> Dict[str, object]:
        """JSON-serialisable view."""
        data = asdict(self)
        data["evaluations"] = [asdict(e) for e in self.evaluations]
        if self.principal_variation is not None:
            data["principal_variation"] = list(self.principal_variation)
        return data


@dataclass(frozen=True)
class ReplayStep:
    """One frame of a step-by-step replay of the root search."""
    move_index: int
    kind: str
    step_number: Optional[int]
    score: float
    nodes_visited: int
    max_depth: int
    outcome: str
    pruning_depth: Optional[int] = None


@dataclass(frozen=True)
class SearchTotals:
    """Cumulative statistics over several searches in one game or session."""
    searches: int = 0
    nodes_evaluated: int = 0
    branches_pruned: int = 0
    search_time_ms: float = 0.0


def outcome_description(score: float) -> str:
    if score > DECISIVE_THRESHOLD:
        return "Guaranteed Win"
    if score > 0:
        return "Advantageous Position"
    if score == 0:
        return "Draw"
    if score > -DECISIVE_THRESHOLD:
        return "Disadvantageous Position"
    return "Guaranteed Loss"


_DESCRIPTION_EMOJI = {
    "Guaranteed Win": "👑",
    "Advantageous Position": "👍",
    "Draw": "⚖️",
    "Disadvantageous Position": "👎",
    "Guaranteed Loss": "💀",
}

_OUTCOME_EMOJI = {WIN: "👑", LOSS: "💀", DRAW: "⚖️"}


def _signed(score: float) -> str:
    return f"+{score}" if score > 0 else f"{score}"


def _cell_label(position: int, grid_size: int) -> Tuple[int, int, int]:
    """1-based (cell, row, col) for display."""
    return position + 1, position // grid_size + 1, position % grid_size + 1


def _with_total(text: str, total: Optional[object]) -> str:
    return f"{text} (Total: {total})" if total is not None else text


def pruning_efficiency(thinking: ThinkingData) -> float:
    """Share of cut branches among nodes + cuts, in percent."""
    denom = thinking.nodes_evaluated + thinking.branches_pruned
    if denom == 0:
        return 0.0
    return 100.0 * thinking.branches_pruned / denom


def format_thinking_data(
    thinking: ThinkingData,
    total_nodes: Optional[int] = None,
    total_pruned: Optional[int] = None,
    total_time_ms: Optional[float] = None,
    top_n: int = 5,
) -> str:
    """
    Render thinking data as a multi-line report.

    Args:
        thinking: Result of one search
        total_nodes / total_pruned / total_time_ms: Optional cumulative
            numbers for the whole game, shown next to this search's numbers
        top_n: Number of best candidates to list

    Returns:
        Report text, one line per fact
    """
    n = thinking.grid_size
    lines: List[str] = []

    cell, row, col = _cell_label(thinking.chosen_move, n)
    desc = outcome_description(thinking.chosen_score)
    lines.append(f"📍 My Move: Cell {cell} (Row {row}, Col {col})")
    lines.append(f"{_DESCRIPTION_EMOJI[desc]} Outcome: {desc}")
    lines.append(f"📊 Score: {_signed(thinking.chosen_score)}")
    lines.append(_with_total(
        f"⏱️ Time: {thinking.search_time_ms:.2f}ms",
        f"{total_time_ms:.2f}ms" if total_time_ms is not None else None,
    ))
    lines.append("")

    efficiency = pruning_efficiency(thinking)
    lines.append("📈 Search Statistics")
    lines.append(_with_total(
        f"  • Nodes Evaluated: {thinking.nodes_evaluated:,}",
        f"{total_nodes:,}" if total_nodes is not None else None,
    ))
    pruned_line = _with_total(
        f"  • Branches Pruned: {thinking.branches_pruned:,}",
        f"{total_pruned:,}" if total_pruned is not None else None,
    )
    lines.append(pruned_line + (" 🚀" if efficiency > 50 else ""))
    lines.append(f"  • Max Depth: {thinking.max_depth} levels")
    lines.append(f"  • Pruning Efficiency: {efficiency:.1f}%")
    strategy = "exact" if thinking.strategy == EXACT else "depth-limited"
    pruning = "on" if thinking.used_alpha_beta else "off"
    lines.append(f"  • Search: {strategy}, alpha-beta {pruning}")
    lines.append("")

    counts = thinking.terminal_states
    lines.append("🎯 Terminal States Found")
    lines.append(f"  • Wins: {counts.wins} 👑")
    lines.append(f"  • Losses: {counts.losses} 💀")
    lines.append(f"  • Draws: {counts.draws} ⚖️")

    if thinking.principal_variation:
        best_line = " → ".join(str(m + 1) for m in thinking.principal_variation)
        lines.append("")
        lines.append(f"🧭 Best Line: {best_line}")

    top = sorted(thinking.evaluations, key=lambda e: e.score, reverse=True)[:top_n]
    if top:
        lines.append("")
        lines.append("🔍 Top Move Evaluations")
        for evaluation in top:
            c, r, k = _cell_label(evaluation.position, n)
            emoji = _OUTCOME_EMOJI.get(evaluation.outcome, "➖")
            pruned = " ✂️ (pruned)" if evaluation.pruned else ""
            lines.append(f"  • Cell {c} ({r},{k}): {emoji} Score {_signed(evaluation.score)}{pruned}")

    return "\n".join(lines)


def generate_replay_steps(thinking: ThinkingData) -> Tuple[ReplayStep, ...]:
    """
    One replay step per root candidate, in exploration order.

    The chosen move is tagged "chosen" even if its subtree saw a cut.
    Only considered and chosen steps are numbered.
    """
    steps = []
    step_number = 1
    for evaluation in thinking.evaluations:
        if evaluation.position == thinking.chosen_move:
            kind = CHOSEN
        elif evaluation.pruned:
            kind = PRUNED
        else:
            kind = CONSIDER

        number = None
        if kind != PRUNED:
            number = step_number
            step_number += 1

        steps.append(ReplayStep(
            move_index=evaluation.position,
            kind=kind,
            step_number=number,
            score=evaluation.score,
            nodes_visited=evaluation.nodes_visited,
            max_depth=evaluation.max_depth_reached,
            outcome=evaluation.outcome,
            pruning_depth=evaluation.pruning_depth,
        ))
    return tuple(steps)


def accumulate_totals(thinkings: Iterable[Optional[ThinkingData]]) -> SearchTotals:
    """Sum statistics over searches; None entries (opening moves) are skipped."""
    searches = nodes = pruned = 0
    elapsed = 0.0
    for thinking in thinkings:
        if thinking is None:
            continue
        searches += 1
        nodes += thinking.nodes_evaluated
        pruned += thinking.branches_pruned
        elapsed += thinking.search_time_ms
    return SearchTotals(searches, nodes, pruned, elapsed)


def score_grid(thinking: ThinkingData) -> torch.Tensor:
    """[n, n] float tensor of candidate scores; NaN where no candidate was searched."""
    n = thinking.grid_size
    grid = torch.full((n, n), float("nan"), dtype=torch.float32)
    for evaluation in thinking.evaluations:
        grid[evaluation.position // n, evaluation.position % n] = float(evaluation.score)
    return grid


def policy_target(thinking: ThinkingData) -> torch.Tensor:
    """
    [n * n] distribution, uniform over candidates tied for the best score.

    Returns:
        pi: float32 tensor summing to 1
    """
    n = thinking.grid_size
    pi = torch.zeros(n * n, dtype=torch.float32)
    best = [e.position for e in thinking.evaluations if e.score == thinking.chosen_score]
    if best:
        pi[best] = 1.0 / len(best)
    else:
        pi[thinking.chosen_move] = 1.0
    return pi

from __future__ import annotations

from protocol import MoveSet, Outcome, determine_outcome

CORNER = "PC\\User"

LEGEND = (
    "Each cell is the outcome of the row move (computer) played against the column move (you).\n"
    "Win: the row move beats the column move.\n"
    "Lose: the row move loses to the column move.\n"
    "Draw: both moves are the same."
)


def outcome_matrix(move_set: MoveSet) -> list[list[Outcome]]:
    return [[determine_outcome(move_set, row, col) for col in move_set] for row in move_set]


def format_table(move_set: MoveSet) -> str:
    width = max(len(CORNER), *(len(name) for name in move_set.names), len("Lose"))
    matrix = outcome_matrix(move_set)

    lines: list[str] = []
    header = "| " + " | ".join(f"{cell:{width}}" for cell in (CORNER, *move_set.names)) + " |"
    rule = "-" * len(header)
    lines.append(rule)
    lines.append(header)
    lines.append(rule)
    for name, row in zip(move_set.names, matrix):
        lines.append("| " + " | ".join(f"{cell:{width}}" for cell in (name, *row)) + " |")
    lines.append(rule)
    return LEGEND + "\n" + "\n".join(lines)

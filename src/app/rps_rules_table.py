from __future__ import annotations

from collections.abc import Sequence

from rps_protocol import RelationMatrix

CORNER = "v PC\\User >"
READING_NOTE = "(The intersection of the user's and the computer's moves is the result from the user's point of view)"

RED = "31"
GREEN = "32"


def style(text: str, *, color: str | None = None, bold: bool = False, enabled: bool = True) -> str:
    if not enabled:
        return text
    prefix = ""
    if color:
        prefix += f"\x1b[{color}m"
    if bold:
        prefix += "\x1b[1m"
    return f"{prefix}{text}\x1b[0m"


def format_rules_table(moves: Sequence[str], matrix: RelationMatrix) -> str:
    """Boxed table with computer moves as rows and user moves as columns.

    Each cell is the result for the user, i.e. matrix[user][pc].
    """
    header = [CORNER, *moves]
    body = [[pc, *(matrix[user][row] for user in range(len(moves)))] for row, pc in enumerate(moves)]

    widths = [max(len(r[col]) for r in [header, *body]) for col in range(len(header))]
    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(cells: Sequence[str]) -> str:
        return "|" + "|".join(f" {cell:<{w}} " for cell, w in zip(cells, widths)) + "|"

    lines = [border, line(header), border]
    lines.extend(line(r) for r in body)
    lines.append(border)
    return "\n".join(lines)


def format_menu(moves: Sequence[str]) -> str:
    lines = ["Available moves:"]
    lines.extend(f"{i} - {move}" for i, move in enumerate(moves, start=1))
    lines.append("0 - exit")
    lines.append("? - help")
    return "\n".join(lines)


def format_help(moves: Sequence[str], matrix: RelationMatrix, *, color: bool = False) -> str:
    return "\n".join(
        [
            style("Rules table:", color=RED, bold=True, enabled=color),
            format_rules_table(moves, matrix),
            style(READING_NOTE, color=GREEN, enabled=color),
        ]
    )

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from rps_commit_reveal import CommitmentRound, Reveal, start_round
from rps_protocol import Outcome, build_relation_table, determine_outcome, validate_moves
from rps_rules_table import format_help, format_menu

EXIT_INPUT = "0"
HELP_INPUT = "?"

RESULT_LINES: dict[str, str] = {
    "Win": "You win!",
    "Lose": "Computer wins!",
    "Draw": "It's a draw!",
}


@dataclass(frozen=True)
class RoundResult:
    user_move: str
    computer_move: str
    # From the user's point of view.
    outcome: Outcome
    reveal: Reveal


class GameSession:
    def __init__(
        self,
        moves: Sequence[str],
        *,
        input_fn: Callable[[str], str] | None = None,
        output_fn: Callable[[str], None] | None = None,
        color: bool = False,
        show_key_early: bool = True,
    ) -> None:
        self.moves = validate_moves(moves)
        self.matrix = build_relation_table(self.moves)
        self._input = input_fn if input_fn is not None else input
        self._output = output_fn if output_fn is not None else print
        self._color = color
        self._show_key_early = show_key_early

    def run(self, max_rounds: int | None = None) -> list[RoundResult]:
        results: list[RoundResult] = []
        while max_rounds is None or len(results) < max_rounds:
            result = self.play_round()
            if result is None:
                self._output("Goodbye!")
                break
            results.append(result)
        return results

    def play_round(self) -> RoundResult | None:
        """Commit to a computer move, collect the user's move, then reveal.

        Returns None when the user exits; the pending commitment is dropped
        without being revealed.
        """
        round_ = start_round(self.moves)
        commitment = round_.commitment
        self._output(f"HMAC: {commitment.hmac}")
        if self._show_key_early:
            self._output(f"HMAC key: {commitment.key}")
        self._output(format_menu(self.moves))

        user_index = self._prompt_move()
        if user_index is None:
            return None
        return self._resolve(round_, user_index)

    def _prompt_move(self) -> int | None:
        while True:
            choice = self._input("Enter your move: ").strip()
            if choice == EXIT_INPUT:
                return None
            if choice == HELP_INPUT:
                self._output(format_help(self.moves, self.matrix, color=self._color))
                continue
            index = _parse_choice(choice, len(self.moves))
            if index is None:
                self._output("Invalid input. Please enter a valid move number.")
                self._output(format_menu(self.moves))
                continue
            return index

    def _resolve(self, round_: CommitmentRound, user_index: int) -> RoundResult:
        outcome = determine_outcome(self.matrix, user_index, round_.move_index)
        reveal = round_.reveal()
        user_move = self.moves[user_index]

        self._output(f"Your move: {user_move}")
        self._output(f"Computer move: {reveal.move}")
        self._output(RESULT_LINES[outcome])
        self._output(f"HMAC: {reveal.hmac}")
        self._output(f"HMAC key: {reveal.key}")

        return RoundResult(user_move=user_move, computer_move=reveal.move, outcome=outcome, reveal=reveal)


def _parse_choice(choice: str, n: int) -> int | None:
    if not (choice.isascii() and choice.isdigit()):
        return None
    number = int(choice)
    if not 1 <= number <= n:
        return None
    return number - 1

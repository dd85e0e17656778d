from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from enum import Enum
from typing import Final

from rps_protocol import MoveSet, validate_moves

KEY_BYTES: Final[int] = 32
DIGEST: Final[str] = "sha256"


class EntropyUnavailable(RuntimeError):
    pass


class RoundStateError(RuntimeError):
    pass


class RoundState(Enum):
    COMMITTED = "committed"
    REVEALED = "revealed"


@dataclass(frozen=True)
class Commitment:
    key: str
    hmac: str


@dataclass(frozen=True)
class Reveal:
    move: str
    key: str
    hmac: str


def generate_key(num_bytes: int = KEY_BYTES) -> str:
    try:
        raw = secrets.token_bytes(num_bytes)
    except (OSError, NotImplementedError) as exc:
        raise EntropyUnavailable(f"secure random source unavailable: {exc}") from exc
    return raw.hex()


def compute_hmac(*, key: str, move: str) -> str:
    # The key is used as the hex text shown to the user, so any HMAC tool
    # fed the displayed key and the move name reproduces the digest.
    return hmac.new(key.encode("utf-8"), move.encode("utf-8"), DIGEST).hexdigest()


def verify_commitment(*, expected_hmac: str, key: str, move: str) -> bool:
    if not expected_hmac.isascii():
        return False
    computed = compute_hmac(key=key, move=move)
    return secrets.compare_digest(expected_hmac.lower(), computed)


class CommitmentRound:
    """One computer move bound by an HMAC before the user answers.

    The round starts COMMITTED and moves to REVEALED exactly once. Revealing
    twice raises RoundStateError.
    """

    def __init__(self, moves: MoveSet, move_index: int, key: str) -> None:
        if not 0 <= move_index < len(moves):
            raise ValueError(f"move index {move_index} out of range for {len(moves)} moves")
        self._moves = moves
        self._move_index = move_index
        self._key = key
        self._hmac = compute_hmac(key=key, move=moves[move_index])
        self._state = RoundState.COMMITTED

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def commitment(self) -> Commitment:
        return Commitment(key=self._key, hmac=self._hmac)

    def reveal(self) -> Reveal:
        if self._state is not RoundState.COMMITTED:
            raise RoundStateError(f"cannot reveal a round in state {self._state.value}")
        self._state = RoundState.REVEALED
        return Reveal(move=self._moves[self._move_index], key=self._key, hmac=self._hmac)

    @property
    def move_index(self) -> int:
        """Index of the committed move, for resolving the outcome."""
        return self._move_index

    @staticmethod
    def verify(key: str, move: str, code: str) -> bool:
        return verify_commitment(expected_hmac=code, key=key, move=move)


def start_round(moves: MoveSet) -> CommitmentRound:
    move_set = validate_moves(moves)
    try:
        index = secrets.randbelow(len(move_set))
    except (OSError, NotImplementedError) as exc:
        raise EntropyUnavailable(f"secure random source unavailable: {exc}") from exc
    return CommitmentRound(move_set, index, generate_key())

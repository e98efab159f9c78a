from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Union

from commit_reveal import compute_commitment, format_key, generate_key, require_commitment
from protocol import Move, MoveLike, MoveSet, Outcome, determine_outcome

logger = logging.getLogger(__name__)

HumanChoice = Union[MoveLike, int]


@dataclass(frozen=True)
class RoundResult:
    move_set: MoveSet
    human_move: Move
    computer_move: Move
    outcome: Outcome
    commitment: str
    key_hex: str

    def audit(self) -> None:
        """Check the revealed key against the commitment published before the human chose."""
        require_commitment(bytes.fromhex(self.key_hex), self.computer_move, self.commitment)


class GameRound:
    """One round: commit the computer's move, take the human's, then reveal the key.

    The key lives only as long as the round; a new round always generates a new one.
    """

    def __init__(self, move_set: MoveSet, computer_move: Move, key: bytes) -> None:
        self.move_set = move_set
        self._computer_move = move_set.resolve(computer_move)
        self._key: bytes | None = key
        self.commitment = compute_commitment(key, self._computer_move)
        self.status = "committed"

    @classmethod
    def start(cls, move_set: MoveSet) -> "GameRound":
        key = generate_key()
        computer_move = move_set.move_at(secrets.randbelow(len(move_set)))
        logger.debug("round started with %d moves", len(move_set))
        return cls(move_set, computer_move, key)

    def choose(self, choice: HumanChoice) -> Move:
        # Integers are 1-based menu numbers.
        if isinstance(choice, int):
            return self.move_set.move_at(choice - 1)
        return self.move_set.resolve(choice)

    def play(self, choice: HumanChoice) -> RoundResult:
        if self.status != "committed" or self._key is None:
            raise RuntimeError(f"round cannot be played in state {self.status!r}")

        human_move = self.choose(choice)
        outcome = determine_outcome(self.move_set, human_move, self._computer_move)
        key_hex = format_key(self._key)
        self._key = None
        self.status = "revealed"
        logger.debug("round resolved: %s vs %s -> %s", human_move, self._computer_move, outcome)

        return RoundResult(
            move_set=self.move_set,
            human_move=human_move,
            computer_move=self._computer_move,
            outcome=outcome,
            commitment=self.commitment,
            key_hex=key_hex,
        )

    def discard(self) -> None:
        self._key = None
        self.status = "discarded"
        logger.debug("round discarded without reveal")

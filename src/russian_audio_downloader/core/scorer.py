"""
Scoring and selection of the best pronunciation for a word.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Tuple

from .pronunciation import Pronunciation


# Contributors whose recordings are known to be clear and correctly stressed
DEFAULT_SPECIAL_USERS = frozenset([
    "1640max", "Spinster", "szurzuncik", "ae5s", "Shady_arc", "zhivanova", "Selene71",
])
DEFAULT_SPECIAL_USER_BONUS = 2


@dataclass(frozen=True)
class ScoringConfig:
    """Contributor allow-list and the bonus its members receive."""

    special_users: FrozenSet[str] = DEFAULT_SPECIAL_USERS
    bonus: int = DEFAULT_SPECIAL_USER_BONUS

    def bonus_for(self, username: str) -> int:
        return self.bonus if str(username) in self.special_users else 0


@dataclass(frozen=True)
class ScoredPronunciation:
    pronunciation: Pronunciation
    score: int
    position: int


@dataclass(frozen=True)
class SelectionResult:
    """
    Outcome of a selection pass.

    ``winner`` is None when the provider returned no usable pronunciation.
    That is a normal result, not an error: callers check ``found``.
    """

    winner: Optional[ScoredPronunciation] = None
    ranked: Tuple[ScoredPronunciation, ...] = field(default_factory=tuple)

    @property
    def found(self) -> bool:
        return self.winner is not None

    @classmethod
    def none(cls) -> "SelectionResult":
        return cls()


class PronunciationScorer:
    """Picks the pronunciation with the highest score."""

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def score(self, pronunciation: Pronunciation) -> int:
        """Votes plus the special user bonus. May be negative."""
        return pronunciation.votes + self.config.bonus_for(pronunciation.username)

    def score_all(self, pronunciations: Iterable[Pronunciation]) -> List[ScoredPronunciation]:
        return [
            ScoredPronunciation(pronunciation=p, score=self.score(p), position=i)
            for i, p in enumerate(pronunciations)
        ]

    def rank(self, pronunciations: Iterable[Pronunciation]) -> List[ScoredPronunciation]:
        """
        Order pronunciations best first.

        Equal scores keep the order Forvo returned them in.

        Args:
            pronunciations: Pronunciations in provider order

        Returns:
            Scored pronunciations, highest score first
        """
        return sorted(self.score_all(pronunciations), key=lambda s: (-s.score, s.position))

    def select(self, pronunciations: Iterable[Pronunciation]) -> SelectionResult:
        """
        Select the best pronunciation.

        Args:
            pronunciations: Pronunciations in provider order

        Returns:
            SelectionResult holding the winner, or an empty result if there was nothing to choose from
        """
        ranked = self.rank(pronunciations)
        if not ranked:
            return SelectionResult.none()
        return SelectionResult(winner=ranked[0], ranked=tuple(ranked))

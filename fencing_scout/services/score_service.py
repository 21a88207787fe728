"""Score tracking for the two athletes."""

from typing import Union

from ..models import Athlete, MatchState


class ScoreService:
    """Service adjusting the two non-negative score counters."""

    def __init__(self, match_state: MatchState):
        self.match_state = match_state

    def adjust(self, athlete: Union[Athlete, str], delta: int) -> int:
        """
        Add ``delta`` to an athlete's score, never going below zero.

        Returns:
            The athlete's new score
        """
        athlete = Athlete.parse(athlete)
        new_score = max(0, self.match_state.score_of(athlete) + int(delta))
        if athlete is Athlete.A:
            self.match_state.score_a = new_score
        else:
            self.match_state.score_b = new_score
        return new_score

    def reset(self) -> None:
        self.match_state.score_a = 0
        self.match_state.score_b = 0

    def get_scores(self) -> dict:
        return {"A": self.match_state.score_a, "B": self.match_state.score_b}

"""
Tests for the tournament runner.
"""

import numpy as np
import pytest

from elosim.exceptions import ConfigurationError
from elosim.outcomes.base import OutcomeSource
from elosim.outcomes.strategies import AbsoluteQualityOutcome, QualityProportionalOutcome
from elosim.tournament.elo import EloCalculator, update_ratings
from elosim.tournament.runner import TournamentRunner, run_round_robin
from elosim.tournament.scheduler import generate_round_robin_schedule


class RecordingOutcome(OutcomeSource):
    """Records every skill pair it is asked about; A always wins."""

    def __init__(self):
        self.calls = []

    def decide(self, skill_a, skill_b):
        self.calls.append((skill_a, skill_b))
        return True


class TestRunRoundRobin:
    """Tests for a single round-robin pass."""

    def test_outcome_called_in_schedule_order(self):
        """Outcome source sees skills in exactly the scheduled order."""
        skills = [10, 20, 30, 40]
        outcome = RecordingOutcome()
        ratings = np.full(4, 1000.0)

        run_round_robin(ratings, skills, outcome, EloCalculator(14))

        expected = [
            (skills[p.player_a], skills[p.player_b])
            for round_pairings in generate_round_robin_schedule(4)
            for p in round_pairings
        ]
        assert outcome.calls == expected

    def test_returns_match_count(self):
        ratings = np.full(5, 1000.0)
        played = run_round_robin(ratings, [1, 2, 3, 4, 5], RecordingOutcome(), EloCalculator(14))
        assert played == 10

    def test_ratings_updated_in_place(self):
        """Ratings follow the sequential Elo updates of the schedule."""
        skills = [100, 200, 300]
        ratings = np.full(3, 1500.0)
        expected = ratings.copy()

        for round_pairings in generate_round_robin_schedule(3):
            for p in round_pairings:
                a, b = p.player_a, p.player_b
                expected[a], expected[b] = update_ratings(
                    expected[a], expected[b], skills[a] > skills[b], 20.0
                )

        run_round_robin(ratings, skills, AbsoluteQualityOutcome(), EloCalculator(20.0))

        np.testing.assert_allclose(ratings, expected)

    def test_total_rating_conserved(self):
        ratings = np.array([1000.0, 1100.0, 1200.0, 1300.0, 1400.0, 1500.0])
        total = ratings.sum()
        outcome = QualityProportionalOutcome(np.random.default_rng(3))

        run_round_robin(ratings, [1, 2, 3, 4, 5, 6], outcome, EloCalculator(40))

        assert ratings.sum() == pytest.approx(total)


class TestTournamentRunner:
    """Tests for TournamentRunner."""

    def test_four_player_scenario(self):
        """Three rounds of two matches, six distinct pairs, every rating moves."""
        skills = [10, 20, 30, 40]
        runner = TournamentRunner(skills, QualityProportionalOutcome(np.random.default_rng(42)), k_factor=14)
        ratings = runner.new_ratings(25)

        for _ in range(3):
            assert runner.play(ratings) == 6

        assert len(runner.schedule) == 3
        assert all(len(r) == 2 for r in runner.schedule)
        assert len({p.pair for r in runner.schedule for p in r}) == 6
        assert all(rating != 25.0 for rating in ratings)

    def test_new_ratings(self):
        runner = TournamentRunner([1, 2, 3], AbsoluteQualityOutcome())
        ratings = runner.new_ratings(1234)

        assert ratings.dtype == np.float64
        assert list(ratings) == [1234.0, 1234.0, 1234.0]

    def test_schedule_computed_once(self):
        runner = TournamentRunner([1, 2, 3, 4], AbsoluteQualityOutcome())
        schedule = runner.schedule
        runner.play(runner.new_ratings(1000))
        assert runner.schedule is schedule

    def test_absolute_outcome_orders_ratings(self):
        """With a deterministic winner, ratings end up ordered by skill."""
        runner = TournamentRunner([400, 100, 300, 200], AbsoluteQualityOutcome(), k_factor=32)
        ratings = runner.new_ratings(1000)
        for _ in range(20):
            runner.play(ratings)

        assert list(np.argsort(ratings)) == [1, 3, 2, 0]

    def test_empty_skills_raises(self):
        with pytest.raises(ConfigurationError):
            TournamentRunner([], AbsoluteQualityOutcome())

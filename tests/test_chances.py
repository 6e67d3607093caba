"""
Tests for head-to-head win-chance estimation.
"""

import numpy as np
import pytest

from elosim.exceptions import ConfigurationError
from elosim.experiment.chances import calculate_chances, play_head_to_head
from elosim.experiment.display import format_chance_table
from elosim.experiment.output import chance_trace_filename, format_chance_line, write_chance_trace
from elosim.outcomes.strategies import AbsoluteQualityOutcome, CoinFlipOutcome
from elosim.tournament.elo import EloCalculator


class TestCalculateChances:
    """Tests for calculate_chances."""

    def test_adjacent_pairs_only(self):
        results = calculate_chances([10, 20, 30], AbsoluteQualityOutcome(), k_factor=14, num_games=10)
        assert [(r.index_a, r.index_b) for r in results] == [(0, 1), (1, 2)]

    def test_all_pairs(self):
        results = calculate_chances([10, 20, 30], AbsoluteQualityOutcome(), k_factor=14,
                                    num_games=10, adjacent_only=False)
        assert [(r.index_a, r.index_b) for r in results] == [(0, 1), (0, 2), (1, 2)]

    def test_deterministic_loser(self):
        result = calculate_chances([10, 20], AbsoluteQualityOutcome(), k_factor=14, num_games=50)[0]

        assert result.wins_a == 0
        assert result.win_chance == 0.0
        assert result.score_stddev == 0.0
        assert result.final_rating_a < 1000.0 < result.final_rating_b
        assert result.final_rating_a + result.final_rating_b == pytest.approx(2000.0)
        assert result.trace is None

    def test_coin_flip_chance(self):
        outcome = CoinFlipOutcome(np.random.default_rng(4))
        result = calculate_chances([10, 20], outcome, k_factor=14, num_games=4000)[0]

        assert 0.46 < result.win_chance < 0.54
        assert result.score_stddev == pytest.approx(0.5, abs=0.01)

    def test_trace_window(self):
        result = calculate_chances([30, 20], AbsoluteQualityOutcome(), k_factor=14,
                                   num_games=10, trace_from=5)[0]

        assert result.trace.shape == (4, 2)
        assert result.trace[-1, 0] == pytest.approx(result.final_rating_a)
        assert result.trace[-1, 1] == pytest.approx(result.final_rating_b)

    def test_empty_trace_keeps_shape(self):
        _, _, _, trace = play_head_to_head(30, 20, AbsoluteQualityOutcome(), EloCalculator(14),
                                           num_games=3, trace_from=10)
        assert trace.shape == (0, 2)

    @pytest.mark.parametrize("kwargs", [
        {'num_games': 0},
        {'skills': [10]},
        {'k_factor': 0},
        {'k_factor': -14},
        {'k_factor': float('nan')},
        {'k_factor': float('inf')},
    ])
    def test_invalid_input_raises(self, kwargs):
        params = {'skills': [10, 20], 'outcome': AbsoluteQualityOutcome(), 'k_factor': 14}
        params.update(kwargs)
        with pytest.raises(ConfigurationError):
            calculate_chances(**params)


class TestChanceOutput:
    """Tests for chance summaries and trace files."""

    def test_summary_line(self):
        result = calculate_chances([30, 20], AbsoluteQualityOutcome(), k_factor=14, num_games=4)[0]
        fields = format_chance_line(result).split("\t")

        assert fields[0] == "0-1"
        assert float(fields[1]) == 1.0
        assert float(fields[2]) == pytest.approx(result.final_rating_a)
        assert float(fields[4]) == 0.0

    def test_trace_file(self, tmp_path):
        result = calculate_chances([30, 20], AbsoluteQualityOutcome(), k_factor=14,
                                   num_games=10, trace_from=7)[0]

        path = write_chance_trace(result, tmp_path)

        assert path.name == chance_trace_filename(result) == "elos-p1-vs-p2.dat"
        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert [float(v) for v in lines[-1].split("\t")] == pytest.approx(
            [result.final_rating_a, result.final_rating_b]
        )

    def test_trace_file_requires_trace(self, tmp_path):
        result = calculate_chances([30, 20], AbsoluteQualityOutcome(), k_factor=14, num_games=4)[0]
        with pytest.raises(ValueError):
            write_chance_trace(result, tmp_path)

    def test_table(self):
        results = calculate_chances([10, 20, 30], AbsoluteQualityOutcome(), k_factor=14, num_games=4)
        table = format_chance_table(results)
        assert "0-1" in table and "1-2" in table

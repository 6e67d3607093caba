"""
Tests for outcome sources and the sample cache.
"""

import threading
import time

import numpy as np
import pytest

from elosim.exceptions import SampleFileError
from elosim.outcomes import samples as samples_module
from elosim.outcomes.strategies import (
    AbsoluteQualityOutcome,
    CoinFlipOutcome,
    QualityProportionalOutcome,
    win_probability,
)
from elosim.outcomes.samples import (
    CachedSampleOutcome,
    SampleCache,
    build_sample_file,
    default_tier,
    read_samples,
    write_samples,
)


def win_rate(outcome, skill_a, skill_b, trials=2000):
    return sum(outcome.decide(skill_a, skill_b) for _ in range(trials)) / trials


class TestClosedFormOutcomes:
    """Tests for closed-form outcome sources."""

    def test_win_probability(self):
        assert win_probability(1000, 1000) == pytest.approx(0.5)
        assert win_probability(1400, 1000) == pytest.approx(10.0 / 11.0)

    def test_quality_proportional_equal_skills(self):
        outcome = QualityProportionalOutcome(np.random.default_rng(1))
        assert 0.45 < win_rate(outcome, 50, 50) < 0.55

    def test_quality_proportional_skill_gap(self):
        """A 400-point edge wins about 91% of the time."""
        outcome = QualityProportionalOutcome(np.random.default_rng(2))
        assert 0.88 < win_rate(outcome, 1400, 1000) < 0.94

    def test_quality_proportional_returns_bool(self):
        outcome = QualityProportionalOutcome(np.random.default_rng(0))
        assert isinstance(outcome.decide(10, 20), bool)

    def test_absolute_quality(self):
        outcome = AbsoluteQualityOutcome()
        assert outcome.decide(30, 20) is True
        assert outcome.decide(20, 30) is False

    def test_absolute_quality_tie_is_loss_for_a(self):
        assert AbsoluteQualityOutcome().decide(20, 20) is False

    def test_coin_flip_ignores_skill(self):
        outcome = CoinFlipOutcome(np.random.default_rng(5))
        assert 0.45 < win_rate(outcome, 2000, 100) < 0.55

    def test_callable(self):
        assert AbsoluteQualityOutcome()(3, 1) is True


class TestSampleFiles:
    """Tests for reading and writing sample files."""

    def test_read_samples(self, tmp_path):
        path = tmp_path / "samples-d1.dat"
        path.write_text("100\n200\n\n300\n", encoding="utf-8")

        scores = read_samples(path)
        assert list(scores) == [100, 200, 300]

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(SampleFileError):
            read_samples(tmp_path / "missing.dat")

    def test_read_malformed_line(self, tmp_path):
        path = tmp_path / "bad.dat"
        path.write_text("100\nabc\n300\n", encoding="utf-8")

        with pytest.raises(SampleFileError, match=":2:"):
            read_samples(path)

    def test_read_empty_file(self, tmp_path):
        path = tmp_path / "empty.dat"
        path.write_text("\n", encoding="utf-8")

        with pytest.raises(SampleFileError):
            read_samples(path)

    def test_write_samples_append(self, tmp_path):
        path = tmp_path / "out" / "samples-d2.dat"
        assert write_samples(path, [1, 2]) == 2
        write_samples(path, [3])

        assert path.read_text(encoding="utf-8") == "1\n2\n3\n"

    def test_write_samples_replace(self, tmp_path):
        path = tmp_path / "samples-d2.dat"
        write_samples(path, [1, 2])
        write_samples(path, [9], append=False)

        assert list(read_samples(path)) == [9]

    def test_build_sample_file(self, tmp_path):
        class FakeClient:
            def __init__(self):
                self.requests = []

            def play_single_game(self, skill):
                self.requests.append(skill)
                return skill * 10 + len(self.requests)

        client = FakeClient()
        progress = []
        path = build_sample_file(client, 3, num_samples=4, sample_dir=tmp_path,
                                 progress=progress.append)

        assert path.name == "samples-d3.dat"
        assert client.requests == [3, 3, 3, 3]
        assert list(read_samples(path)) == [31, 32, 33, 34]
        assert progress == [1, 2, 3, 4]


class TestSampleCache:
    """Tests for the populate-once sample cache."""

    @pytest.fixture
    def sample_dir(self, tmp_path):
        write_samples(tmp_path / "samples-d1.dat", [100, 200, 300])
        write_samples(tmp_path / "samples-d2.dat", [50])
        return tmp_path

    def test_default_tier(self):
        assert default_tier(20) == 1
        assert default_tier(39) == 1
        assert default_tier(1000) == 50

    def test_pool_uses_tier_file(self, sample_dir):
        cache = SampleCache(sample_dir)
        assert list(cache.pool(25)) == [100, 200, 300]

    def test_loads_each_tier_once(self, sample_dir, monkeypatch):
        calls = []
        original = samples_module.read_samples

        def counting_read(path):
            calls.append(path)
            return original(path)

        monkeypatch.setattr(samples_module, "read_samples", counting_read)
        cache = SampleCache(sample_dir)

        cache.pool(20)
        cache.pool(30)
        cache.pool(39)
        cache.pool(40)

        assert len(calls) == 2
        assert cache.loaded_tiers() == [1, 2]

    def test_concurrent_first_use_loads_once(self, sample_dir, monkeypatch):
        """Threads racing on a cold tier share a single file read."""
        calls = []
        original = samples_module.read_samples

        def slow_read(path):
            calls.append(path)
            time.sleep(0.05)
            return original(path)

        monkeypatch.setattr(samples_module, "read_samples", slow_read)
        cache = SampleCache(sample_dir)
        barrier = threading.Barrier(8)
        pools = []

        def worker():
            barrier.wait()
            pools.append(cache.pool(20))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert len(pools) == 8
        assert all(pool is pools[0] for pool in pools)

    def test_pool_is_read_only(self, sample_dir):
        pool = SampleCache(sample_dir).pool(20)
        with pytest.raises(ValueError):
            pool[0] = 1

    def test_missing_tier_raises(self, sample_dir):
        with pytest.raises(SampleFileError):
            SampleCache(sample_dir).pool(200)

    def test_custom_tier_mapping(self, sample_dir):
        cache = SampleCache(sample_dir, tier_of=lambda skill: skill)
        assert list(cache.pool(2)) == [50]

    def test_preload(self, sample_dir):
        cache = SampleCache(sample_dir)
        cache.preload([20, 40])
        assert cache.loaded_tiers() == [1, 2]

    def test_draws_are_uniform_over_pool(self, sample_dir):
        """1000 draws from a 3-entry pool hit every value about a third of the time."""
        cache = SampleCache(sample_dir)
        rng = np.random.default_rng(7)

        draws = [cache.draw(20, rng) for _ in range(1000)]
        counts = {v: draws.count(v) for v in (100, 200, 300)}

        assert set(draws) == {100, 200, 300}
        for count in counts.values():
            assert 250 < count < 420


class TestCachedSampleOutcome:
    """Tests for CachedSampleOutcome."""

    def test_higher_score_wins(self, tmp_path):
        write_samples(tmp_path / "samples-d1.dat", [10])
        write_samples(tmp_path / "samples-d2.dat", [20])
        outcome = CachedSampleOutcome(SampleCache(tmp_path), np.random.default_rng(0))

        assert outcome.decide(40, 20) is True
        assert outcome.decide(20, 40) is False

    def test_tie_is_loss_for_a(self, tmp_path):
        write_samples(tmp_path / "samples-d1.dat", [10])
        outcome = CachedSampleOutcome(SampleCache(tmp_path), np.random.default_rng(0))

        assert outcome.decide(20, 21) is False

    def test_missing_file_is_fatal(self, tmp_path):
        outcome = CachedSampleOutcome(SampleCache(tmp_path))
        with pytest.raises(SampleFileError):
            outcome.decide(20, 40)

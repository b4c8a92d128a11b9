"""
Tests for Timer.
"""

import pytest

from pyeconometrics.core.compute.timing import Timer


class TestTimer:

    def test_sections_accumulate(self):
        timer = Timer()
        timer.start()
        for _ in range(3):
            with timer.section('newton_raphson'):
                pass
        timer.stop()
        result = timer.result()
        assert set(result) == {'total_seconds', 'newton_raphson'}
        assert result['newton_raphson'] >= 0.0
        assert result['total_seconds'] >= result['newton_raphson']

    def test_section_recorded_on_exception(self):
        timer = Timer()
        timer.start()
        with pytest.raises(ValueError):
            with timer.section('inverse'):
                raise ValueError("boom")
        timer.stop()
        assert 'inverse' in timer.result()

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError):
            timer.result()

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError):
            Timer().stop()

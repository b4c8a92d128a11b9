"""
Tests for the Result[P] envelope.

Validates:
    - Generic type parameter works with arbitrary payload types
    - Frozen immutability
    - Default warnings and has_warning()
"""

from dataclasses import FrozenInstanceError, dataclass, replace

import pytest

from pyeconometrics.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


class TestResultConstruction:

    def test_basic_creation(self):
        result = Result(
            params=FakeParams(value=42.0),
            info={"method": "test"},
            timing={"total_seconds": 0.01},
            backend_name="ols",
        )
        assert result.params.value == 42.0
        assert result.info["method"] == "test"
        assert result.timing["total_seconds"] == 0.01
        assert result.backend_name == "ols"

    def test_timing_may_be_none(self):
        result = Result(params=FakeParams(1.0), info={}, timing=None, backend_name="x")
        assert result.timing is None

    def test_warnings_default_empty(self):
        result = Result(params=FakeParams(1.0), info={}, timing=None, backend_name="x")
        assert result.warnings == ()


class TestResultImmutability:

    def test_cannot_reassign_params(self):
        result = Result(params=FakeParams(1.0), info={}, timing=None, backend_name="x")
        with pytest.raises(FrozenInstanceError):
            result.params = FakeParams(2.0)

    def test_replace_returns_new_instance(self):
        result = Result(params=FakeParams(1.0), info={}, timing=None, backend_name="ols")
        renamed = replace(result, backend_name="gls_passthrough")
        assert result.backend_name == "ols"
        assert renamed.backend_name == "gls_passthrough"


class TestHasWarning:

    def test_substring_match(self):
        result = Result(
            params=FakeParams(1.0), info={}, timing=None, backend_name="logit_newton",
            warnings=("Newton-Raphson did not converge in 25 iterations",),
        )
        assert result.has_warning("did not converge")
        assert not result.has_warning("singular")

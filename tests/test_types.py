"""Tests for the Completion and StreamUpdate models."""

import pytest
from pydantic import ValidationError

from pi_partial_json.types import Completion, StreamUpdate


class TestCompletion:
    """Tests for Completion."""

    def test_defaults(self):
        """Test a bare completion consumes nothing and appends nothing."""
        completion = Completion()
        assert completion.consumed == 0
        assert completion.suffix == ""
        assert completion.truncated is False

    def test_apply(self):
        """Test apply splices the trusted slice and the suffix."""
        assert Completion(consumed=4, suffix="]").apply("[1,2,") == "[1,2]"

    def test_apply_with_offset(self):
        """Test apply honours the start offset."""
        assert Completion(consumed=2, suffix='"').apply('[1, "a', 4) == '"a"'

    def test_negative_consumed_rejected(self):
        """Test consumed may not be negative."""
        with pytest.raises(ValidationError):
            Completion(consumed=-1)

    def test_frozen(self):
        """Test completions are immutable."""
        completion = Completion(consumed=1)
        with pytest.raises(ValidationError):
            completion.consumed = 2

    def test_equality(self):
        """Test completions compare by value."""
        assert Completion(consumed=1, suffix="]") == Completion(consumed=1, suffix="]")


class TestStreamUpdate:
    """Tests for StreamUpdate."""

    def test_ok(self):
        """Test ok reflects whether a completion is present."""
        assert StreamUpdate(chunk="[", text="[", completed="[]").ok
        assert not StreamUpdate(chunk="-", text="-", error="boom").ok

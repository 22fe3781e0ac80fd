"""
Unit tests for streaming adapters.

Tests PartialJSONStream and the chunk iterators.
"""

import json
import math

import pytest

from pi_partial_json.options import TypeOptions
from pi_partial_json.stream import PartialJSONStream, iter_completions, split_chunks, stream_completions

POKEMON = """
{
    "foo":"bar",
    "length":10,
    "person":{
        "age":100,
        "hp":35.6,
        "def":[
            "item1",
            "item2",
            3,
            4.5e+6
        ]
    },
    "pokemon":[
        {
            "name":"cinderace",
            "height":1.4,
            "gamesAvailable":{
                "sw/sh":true,
                "bd/sp":false
            },
            "coolness":Infinity
        }
    ]

}
"""


class TestPartialJSONStream:
    """Tests for PartialJSONStream."""

    def test_push_sequence(self):
        """Test each chunk completes the accumulated text."""
        stream = PartialJSONStream()
        completed = [stream.push(chunk).completed for chunk in ['{"a": ', "[1, ", "2]", "}"]]
        assert completed == ["{}", '{"a": [1]}', '{"a": [1, 2]}', '{"a": [1, 2]}']
        assert stream.text == '{"a": [1, 2]}'
        assert stream.value() == {"a": [1, 2]}

    def test_error_is_reported_not_raised(self):
        """Test a failing chunk yields an error update."""
        stream = PartialJSONStream()
        update = stream.push("-")
        assert not update.ok
        assert update.error.startswith("not enough data to fix json string")
        assert stream.last_completed is None
        assert stream.value() is None

        update = stream.push("1")
        assert update.ok
        assert update.completed == "-1"

    def test_last_completed_survives_failure(self):
        """Test the last good completion is kept after a failure."""
        stream = PartialJSONStream(allowed=TypeOptions.STR)
        assert stream.push("12").ok
        assert not stream.push(".").ok
        assert stream.last_completed == "12"

    def test_deep_nesting_is_reported_not_raised(self):
        """Test input nested too deeply yields an error update."""
        update = PartialJSONStream().push("[" * 5000)
        assert not update.ok
        assert "nesting too deep" in update.error

    def test_value_of_non_strict_completion(self):
        """Test value() returns None when the completion is not strict JSON."""
        stream = PartialJSONStream()
        update = stream.push('["\\x41')
        assert update.ok
        assert update.completed == '["\\x41"]'
        assert stream.value() is None

    def test_format(self):
        """Test completions can be pretty-printed."""
        stream = PartialJSONStream(format=True, indent=2)
        assert stream.push('{"a": 1').completed == '{\n  "a": 1\n}'

    def test_reset(self):
        """Test reset clears the buffer."""
        stream = PartialJSONStream()
        stream.push("[1")
        stream.reset()
        assert stream.text == ""
        assert stream.last_completed is None


class TestSplitChunks:
    """Tests for split_chunks."""

    def test_lines(self):
        """Test default chunks are lines with newlines kept."""
        assert split_chunks("a\nb\nc") == ["a\n", "b\n", "c"]

    def test_fixed_size(self):
        """Test fixed-size chunks."""
        assert split_chunks("abcde", 2) == ["ab", "cd", "e"]

    def test_invalid_size(self):
        """Test chunk_size must be positive."""
        with pytest.raises(ValueError):
            split_chunks("abc", 0)


class TestIterCompletions:
    """Tests for the chunk iterators."""

    def test_replay_document(self):
        """Test replaying a document line by line ends with the full value."""
        updates = list(iter_completions(split_chunks(POKEMON)))
        assert len(updates) == len(POKEMON.splitlines())
        final = json.loads(updates[-1].completed)
        assert final["person"]["def"] == ["item1", "item2", 3, 4.5e6]
        assert math.isinf(final["pokemon"][0]["coolness"])
        for update in updates:
            if update.ok:
                json.loads(update.completed)

    def test_character_replay(self):
        """Test every character-sized chunk after the first brace completes."""
        updates = list(iter_completions(split_chunks('{"a": [true, "x"]}', 1)))
        assert all(update.ok for update in updates)
        assert updates[4].completed == "{}"
        assert updates[-1].completed == '{"a": [true, "x"]}'

    @pytest.mark.asyncio
    async def test_stream_completions(self):
        """Test the async iterator yields an update per chunk."""

        async def chunks():
            for chunk in ['{"name": "pi', 'ka', 'chu"}']:
                yield chunk

        updates = [update async for update in stream_completions(chunks())]
        assert [update.completed for update in updates] == [
            '{"name": "pi"}',
            '{"name": "pika"}',
            '{"name": "pikachu"}',
        ]

"""Tests for MockStream — deterministic chunked playback with configurable delays."""

from __future__ import annotations

import time
from pathlib import Path

import pytest

from itinera.kernel.mock_stream import DEFAULT_CHUNK_SIZE, MockStream, split_chunks

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_stream() -> MockStream:
    """MockStream pointed at the bundled examples."""
    return MockStream()


@pytest.fixture
def mock_stream_tmp(tmp_path: Path) -> MockStream:
    """MockStream pointed at a temporary directory for custom documents."""
    return MockStream(examples_dir=tmp_path)


# ---------------------------------------------------------------------------
# split_chunks
# ---------------------------------------------------------------------------


def test_split_chunks_fixed_size() -> None:
    assert split_chunks("abcdefghijk", 5) == ["abcde", "fghij", "k"]


def test_split_chunks_default_size() -> None:
    assert split_chunks("x" * 12) == ["x" * DEFAULT_CHUNK_SIZE, "x" * DEFAULT_CHUNK_SIZE, "xx"]


def test_split_chunks_empty() -> None:
    assert split_chunks("", 5) == []


def test_split_chunks_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        split_chunks("abc", 0)


# ---------------------------------------------------------------------------
# stream
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_chunks_concatenate_to_document(mock_stream: MockStream, examples_dir: Path) -> None:
    """Joining every chunk gives back the example file."""
    chunks = [chunk async for chunk in mock_stream.stream("trip-plan", profile="instant")]

    expected = (examples_dir / "trip-plan.json").read_text(encoding="utf-8")
    assert "".join(chunks) == expected
    assert all(len(chunk) <= DEFAULT_CHUNK_SIZE for chunk in chunks)


@pytest.mark.asyncio
async def test_custom_chunk_size(mock_stream_tmp: MockStream, tmp_path: Path) -> None:
    (tmp_path / "tiny.json").write_text('{"type":"x"}', encoding="utf-8")

    chunks = [chunk async for chunk in mock_stream_tmp.stream("tiny", chunk_size=4)]

    assert chunks == ['{"ty', 'pe":', '"x"}']


@pytest.mark.asyncio
async def test_instant_profile_no_delay(mock_stream: MockStream) -> None:
    """Instant profile completes quickly even with one-character chunks."""
    start = time.perf_counter()
    async for _ in mock_stream.stream("park-plan", profile="instant", chunk_size=1):
        pass
    elapsed_ms = (time.perf_counter() - start) * 1000
    # Allow 500ms for slow CI runners; the key is no asyncio.sleep()
    assert elapsed_ms < 500, f"Instant profile took {elapsed_ms:.1f}ms — should be near zero"


@pytest.mark.asyncio
async def test_realistic_profile_delays(mock_stream_tmp: MockStream, tmp_path: Path) -> None:
    """
    realistic profile: 300ms think time + 50ms between chunks.
    With 3 chunks: ≈ 400ms. Expect at least 320ms (80% margin for CI variance).
    """
    (tmp_path / "three.json").write_text("abcdefghi", encoding="utf-8")

    start = time.perf_counter()
    async for _ in mock_stream_tmp.stream("three", profile="realistic", chunk_size=3):
        pass
    elapsed_ms = (time.perf_counter() - start) * 1000

    assert elapsed_ms >= 320, f"realistic profile took only {elapsed_ms:.1f}ms"


@pytest.mark.asyncio
async def test_unknown_profile(mock_stream: MockStream) -> None:
    with pytest.raises(ValueError, match="Unknown delay profile"):
        async for _ in mock_stream.stream("trip-plan", profile="warp"):
            pass


@pytest.mark.asyncio
async def test_missing_example(mock_stream: MockStream) -> None:
    with pytest.raises(FileNotFoundError, match="Example not found"):
        async for _ in mock_stream.stream("nope"):
            pass


# ---------------------------------------------------------------------------
# list_examples
# ---------------------------------------------------------------------------


def test_list_examples(mock_stream: MockStream) -> None:
    assert mock_stream.list_examples() == ["park-plan", "trip-plan"]


def test_list_examples_empty_dir(mock_stream_tmp: MockStream) -> None:
    assert mock_stream_tmp.list_examples() == []

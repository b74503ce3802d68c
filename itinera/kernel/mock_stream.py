"""
Mock stream for deterministic testing and UX timing simulation.

Plays an example JSON document back in fixed-size chunks with configurable
delays, the way an LLM or a slow network would deliver it.
Used in tests (instant profile) and demos (realistic profiles).
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from pathlib import Path

EXAMPLES_DIR = Path(__file__).parent.parent / "templates" / "examples"

DEFAULT_CHUNK_SIZE = 5

DELAY_PROFILES: dict[str, dict[str, int]] = {
    "instant": {"think_ms": 0, "per_chunk_ms": 0},
    "realistic": {"think_ms": 300, "per_chunk_ms": 50},
    "slow": {"think_ms": 1000, "per_chunk_ms": 200},
}


def split_chunks(text: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> list[str]:
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return [text[i : i + chunk_size] for i in range(0, len(text), chunk_size)]


class MockStream:
    """Streams example documents chunk by chunk with configurable delays."""

    def __init__(self, examples_dir: Path = EXAMPLES_DIR):
        self.examples_dir = examples_dir

    def read_example(self, example: str) -> str:
        """
        Raises:
            FileNotFoundError: If the example does not exist
        """
        path = self.examples_dir / f"{example}.json"
        if not path.exists():
            raise FileNotFoundError(f"Example not found: {path}")
        return path.read_text(encoding="utf-8")

    async def stream(
        self,
        example: str,
        profile: str = "instant",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> AsyncIterator[str]:
        """
        Stream an example document in chunks.

        Args:
            example: Example file name without extension (e.g., "trip-plan")
            profile: Delay profile ("instant", "realistic", "slow")
            chunk_size: Characters per chunk

        Yields:
            Consecutive slices of the document; their concatenation is the document

        Raises:
            FileNotFoundError: If the example does not exist
            ValueError: If the profile is not recognized or chunk_size < 1
        """
        delays = DELAY_PROFILES.get(profile)
        if delays is None:
            raise ValueError(f"Unknown delay profile: {profile!r}. Valid profiles: {list(DELAY_PROFILES)}")

        chunks = split_chunks(self.read_example(example), chunk_size)

        if delays["think_ms"] > 0:
            await asyncio.sleep(delays["think_ms"] / 1000)

        for i, chunk in enumerate(chunks):
            yield chunk

            if i < len(chunks) - 1 and delays["per_chunk_ms"] > 0:
                await asyncio.sleep(delays["per_chunk_ms"] / 1000)

    def list_examples(self) -> list[str]:
        """Return names of all available example documents."""
        return sorted(p.stem for p in self.examples_dir.glob("*.json"))

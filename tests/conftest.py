from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the package importable when running tests from the repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from glossary_bot.dispatcher import RenderMode  # noqa: E402
from glossary_bot.knowledge import KnowledgeStore  # noqa: E402

SAMPLE_GLOSSARY = ROOT / "data" / "glossary.json"


class RecordingSender:
    """Async send callable that records every call and can fail on chosen calls."""

    def __init__(self, fail_on: set[int] | None = None):
        self.calls: list[tuple[str, str, RenderMode]] = []
        self.fail_on = fail_on or set()
        self._attempts = 0

    async def __call__(self, chat_id: str, text: str, render_mode: RenderMode) -> None:
        attempt = self._attempts
        self._attempts += 1
        if attempt in self.fail_on:
            raise ConnectionError(f"send {attempt} failed")
        self.calls.append((chat_id, text, render_mode))

    @property
    def texts(self) -> list[str]:
        return [text for _, text, _ in self.calls]


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def store() -> KnowledgeStore:
    return KnowledgeStore.from_mapping(
        {
            "Incidence": "Incidence is the rate of new cases in a population.",
            "Prevalence": "Prevalence measures existing cases at a point in time.",
            "Attack rate": "Attack rate is the share of an exposed group that becomes ill.",
        }
    )

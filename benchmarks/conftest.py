"""Benchmark fixtures."""

from __future__ import annotations

import pytest


@pytest.fixture
def long_reply() -> str:
    """A reply of roughly 20KB mixing every block kind."""
    sections = []
    for i in range(60):
        sections.append(
            f"## Step {i}\n"
            f"This is step {i} with **bold**, *italic*, `code` and [a link](https://example.com/{i}).\n"
            "\n"
            "1. First\n"
            "2. Second\n"
            "- note\n"
            "* another note\n"
            "\n"
            "```python\n"
            f"def step_{i}():\n"
            f"    return {i}\n"
            "```\n"
        )
    return "\n".join(sections)

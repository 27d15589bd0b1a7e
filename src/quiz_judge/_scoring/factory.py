# Area: Scoring
"""Backend selection by name."""

from typing import Any, Dict, Optional

from .backends import (
    AnthropicBackend,
    BaseScoringBackend,
    DEFAULT_ANTHROPIC_MODEL,
    DEFAULT_GEMINI_MODEL,
    GeminiBackend,
    MockBackend,
)
from .demo import DemoBackend

SCORER_BACKENDS = ("mock", "demo", "anthropic", "gemini")


def create_backend(name: str, config: Optional[Dict[str, Any]] = None) -> BaseScoringBackend:
    """Build a backend by name (``anthropic``, ``gemini``, ``demo`` or ``mock``)."""
    config = config or {}
    if name == "anthropic":
        return AnthropicBackend(
            model=config.get("anthropic_model") or DEFAULT_ANTHROPIC_MODEL,
            api_key=config.get("anthropic_api_key"),
        )
    if name == "gemini":
        return GeminiBackend(
            model=config.get("gemini_model") or DEFAULT_GEMINI_MODEL,
            api_key=config.get("gemini_api_key"),
        )
    if name == "demo":
        return DemoBackend()
    if name == "mock":
        return MockBackend()
    raise ValueError(f"Unknown scorer backend: {name}")

# Area: Scoring
"""
quiz_judge._scoring.backends — Scoring model clients
=====================================================

Each backend implements ``generate(system_instruction, user_message)``
and returns the model's raw text, which must be a JSON object.
Transport failures are raised as ``BackendError``; ``retryable`` is
False when trying again cannot help (no credentials, rejected request).

Backends:
  - AnthropicBackend: Anthropic Claude API
  - GeminiBackend: Google generative-language REST API (JSON mode)
  - MockBackend: scripted responses for tests
  - DemoBackend (demo.py): offline word-overlap heuristic
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import anthropic
import requests

from ..errors import BackendError

DEFAULT_ANTHROPIC_MODEL = "claude-3-haiku-20240307"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_MAX_TOKENS = 200
DEFAULT_TIMEOUT_SECONDS = 30

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

# HTTP statuses worth another attempt
TRANSIENT_STATUSES = {408, 409, 429, 500, 502, 503, 504}


def is_transient_status(status_code: int) -> bool:
    return status_code in TRANSIENT_STATUSES or status_code >= 500


class BaseScoringBackend(ABC):
    """Abstract base for scoring model clients."""

    name = "base"

    @abstractmethod
    def generate(self, system_instruction: str, user_message: str) -> str:
        """Return the model's raw JSON text. Raises BackendError on failure."""
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the backend is properly configured."""
        ...


class AnthropicBackend(BaseScoringBackend):
    """Anthropic Claude API client.

    Claude has no JSON response mode, so the reply is constrained by the
    system instruction and an assistant turn prefilled with ``{``.
    """

    name = "anthropic"

    def __init__(
        self,
        model: str = DEFAULT_ANTHROPIC_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        api_key: Optional[str] = None,
        client: Optional[Any] = None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self._client = client
        if self._client is None:
            api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
            if api_key:
                self._client = anthropic.Anthropic(api_key=api_key)

    def is_available(self) -> bool:
        return self._client is not None

    def generate(self, system_instruction: str, user_message: str) -> str:
        if not self._client:
            raise BackendError(self.name, "ANTHROPIC_API_KEY is not set", retryable=False)
        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=system_instruction,
                messages=[
                    {"role": "user", "content": user_message},
                    {"role": "assistant", "content": "{"},
                ],
            )
        except anthropic.APIConnectionError as e:
            raise BackendError(self.name, f"connection failed: {e}") from e
        except anthropic.APIStatusError as e:
            raise BackendError(
                self.name,
                f"HTTP {e.status_code}: {e.message}",
                retryable=is_transient_status(e.status_code),
            ) from e

        if response.content and len(response.content) > 0:
            return "{" + response.content[0].text
        return ""


class GeminiBackend(BaseScoringBackend):
    """Google generative-language API client using the JSON response mode."""

    name = "gemini"

    def __init__(
        self,
        model: str = DEFAULT_GEMINI_MODEL,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.model = model
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY", "")
        self.timeout = timeout
        self._session = session or requests.Session()

    def is_available(self) -> bool:
        return bool(self.api_key)

    def build_request(self, system_instruction: str, user_message: str) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": user_message}]}],
            "systemInstruction": {"parts": [{"text": system_instruction}]},
            "generationConfig": {"responseMimeType": "application/json"},
        }

    def generate(self, system_instruction: str, user_message: str) -> str:
        if not self.api_key:
            raise BackendError(self.name, "GEMINI_API_KEY is not set", retryable=False)

        try:
            resp = self._session.post(
                GEMINI_URL.format(model=self.model),
                params={"key": self.api_key},
                json=self.build_request(system_instruction, user_message),
                timeout=self.timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            raise BackendError(self.name, f"connection failed: {e}") from e

        if resp.status_code != 200:
            raise BackendError(
                self.name,
                f"HTTP {resp.status_code}: {resp.text[:200]}",
                retryable=is_transient_status(resp.status_code),
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise BackendError(self.name, "response body is not JSON") from e

        return extract_gemini_text(data)


def extract_gemini_text(data: Dict[str, Any]) -> str:
    """Pull ``candidates[0].content.parts[0].text``; empty string if absent."""
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    if not parts:
        return ""
    return parts[0].get("text") or ""


Scripted = Union[str, BaseException]


class MockBackend(BaseScoringBackend):
    """Scripted backend for tests.

    Each call consumes the next scripted item; an exception item is
    raised instead of returned. Once the script runs out the last item
    repeats.
    """

    name = "mock"

    def __init__(self, responses: Optional[Sequence[Scripted]] = None):
        self._responses: List[Scripted] = list(responses or ['{"score": 80, "feedback": "Nice one!"}'])
        self.calls: List[Tuple[str, str]] = []

    def is_available(self) -> bool:
        return True

    def generate(self, system_instruction: str, user_message: str) -> str:
        self.calls.append((system_instruction, user_message))
        index = min(len(self.calls) - 1, len(self._responses) - 1)
        item = self._responses[index]
        if isinstance(item, BaseException):
            raise item
        return item

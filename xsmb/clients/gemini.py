"""Thin client for the Gemini `generateContent` REST endpoint."""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from xsmb.errors import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

SAFETY_SETTINGS = [
    {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_NONE"},
    {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_NONE"},
    {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_NONE"},
    {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_NONE"},
]


def build_http_session(retries: int, backoff_factor: float = 0.5) -> requests.Session:
    """Create a requests session with retry/backoff for transient network errors."""

    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=backoff_factor,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("POST",),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_connections=4, pool_maxsize=4)

    session = requests.Session()
    session.headers.update({"Content-Type": "application/json"})
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def extract_text(payload: Any) -> str:
    """Join the text parts of the first candidate; "" for any other shape."""

    if not isinstance(payload, dict):
        return ""
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list):
        return ""
    return "".join(str(p.get("text") or "") for p in parts if isinstance(p, dict))


class GeminiClient:
    """Send one prompt, get the model's text back."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 60.0,
        http: requests.Session | None = None,
        retries: int = 2,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._http = http or build_http_session(retries)

    @property
    def model(self) -> str:
        return self._model

    def generate(
        self,
        prompt: str,
        *,
        use_search: bool = False,
        response_schema: dict[str, Any] | None = None,
    ) -> str:
        """Return the generated text.

        Raises:
            UpstreamError: missing API key, HTTP failure or an empty answer.
        """

        if not self._api_key:
            raise UpstreamError(message="GEMINI_API_KEY is not configured", code="not_configured")

        body: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "safetySettings": SAFETY_SETTINGS,
        }
        if use_search:
            body["tools"] = [{"google_search": {}}]
        if response_schema is not None:
            body["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            }

        url = f"{self._base_url}/models/{self._model}:generateContent"
        try:
            resp = self._http.post(
                url,
                json=body,
                headers={"x-goog-api-key": self._api_key},
                timeout=self._timeout,
            )
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as exc:
            raise UpstreamError(message="Gemini request failed", details=str(exc)) from exc
        except ValueError as exc:
            raise UpstreamError(message="Gemini returned invalid JSON", details=str(exc)) from exc

        text = extract_text(payload if isinstance(payload, dict) else {})
        if not text.strip():
            reason = (payload.get("promptFeedback") or {}).get("blockReason") if isinstance(payload, dict) else None
            raise UpstreamError(message="Gemini returned no text", details={"block_reason": reason})

        logger.debug("Gemini %s answered %d chars", self._model, len(text))
        return text

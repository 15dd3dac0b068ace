"""Chat completion client for the upstream diagnostic model (OpenAI-compatible API)."""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
from pathlib import Path
import time
from threading import Lock
from typing import Protocol
from uuid import uuid4

from openai import APIError, AsyncOpenAI

from symptom_intake.config import Settings
from symptom_intake.errors import ConfigError, UpstreamError

logger = logging.getLogger(__name__)
_log_write_lock = Lock()


class CompletionClient(Protocol):
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
    ) -> str: ...


def _resolve_log_path(path_value: str) -> Path:
    log_path = Path(path_value)
    if log_path.is_absolute():
        return log_path
    project_root = Path(__file__).resolve().parents[2]
    return project_root / log_path


class ChatCompletionClient:
    """Single-shot chat completions: no retries, bounded timeout, one error class."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str | None,
        model: str,
        timeout_seconds: float = 30.0,
        max_tokens: int = 1024,
        log_path: str | None = None,
    ) -> None:
        self.base_url = base_url
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.max_tokens = max_tokens
        self.log_path = _resolve_log_path(log_path) if log_path else None
        self._api_key = api_key
        self._client: AsyncOpenAI | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChatCompletionClient":
        return cls(
            base_url=settings.llm_base_url,
            api_key=settings.llm_api_key,
            model=settings.llm_model,
            timeout_seconds=settings.llm_request_timeout_seconds,
            max_tokens=settings.llm_max_tokens,
            log_path=settings.llm_log_path if settings.llm_log_enabled else None,
        )

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def get_client(self) -> AsyncOpenAI:
        if not self._api_key:
            raise ConfigError("Upstream model API key is not configured.")
        if self._client is None:
            self._client = AsyncOpenAI(
                base_url=self.base_url,
                api_key=self._api_key,
                timeout=self.timeout_seconds,
                max_retries=0,
            )
        return self._client

    def _append_call_log(self, record: dict) -> None:
        if self.log_path is None:
            return
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            line = json.dumps(record, ensure_ascii=False)
            with _log_write_lock:
                with self.log_path.open("a", encoding="utf-8") as f:
                    f.write(line + "\n")
        except OSError:
            logger.exception("Failed to write upstream call log.")

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
    ) -> str:
        """Send one chat completion request and return the message text."""
        client = self.get_client()
        call_id = str(uuid4())
        record = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "call_id": call_id,
            "base_url": self.base_url,
            "model": self.model,
            "temperature": temperature,
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
        }
        started = time.perf_counter()
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=self.max_tokens,
                temperature=temperature,
            )
        except APIError as exc:
            self._append_call_log(
                {
                    **record,
                    "output": None,
                    "latency_ms": int((time.perf_counter() - started) * 1000),
                    "success": False,
                    "error_type": exc.__class__.__name__,
                },
            )
            logger.warning("Upstream model request failed (%s).", exc.__class__.__name__)
            raise UpstreamError(f"Upstream request failed: {exc.__class__.__name__}") from exc

        choices = getattr(response, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        output = getattr(message, "content", None)
        latency_ms = int((time.perf_counter() - started) * 1000)
        if not isinstance(output, str):
            self._append_call_log(
                {
                    **record,
                    "output": None,
                    "latency_ms": latency_ms,
                    "success": False,
                    "error_type": "MalformedCompletion",
                },
            )
            logger.warning("Upstream model returned a completion without message content.")
            raise UpstreamError("Upstream completion had no message content.")

        self._append_call_log(
            {
                **record,
                "output": output,
                "latency_ms": latency_ms,
                "success": True,
                "error_type": None,
            },
        )
        logger.info("Upstream completion %s finished in %sms.", call_id, latency_ms)
        return output

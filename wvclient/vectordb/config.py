from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, MutableMapping

logger = logging.getLogger("wvclient")

DEFAULT_URL = "http://localhost:8080"
DEFAULT_BATCH_SIZE = 2900
DEFAULT_RATE_LIMIT_DELAY = 60.0


@dataclass(slots=True)
class VectorizerConfig:
    """Module settings applied to newly created classes."""

    module: str = "text2vec-openai"
    model: str = "text-embedding-3-large"
    model_version: str = "003"
    type: str = "text"
    vectorize_class_name: bool = True
    base_url: str | None = None

    def module_config(self) -> dict[str, dict[str, Any]]:
        settings: dict[str, Any] = {
            "model": self.model,
            "modelVersion": self.model_version,
            "type": self.type,
            "vectorizeClassName": self.vectorize_class_name,
        }
        if self.base_url:
            settings["baseURL"] = self.base_url
        return {self.module: settings}


@dataclass(slots=True)
class ClientConfig:
    """Connection information for the Weaviate REST API."""

    url: str = DEFAULT_URL
    api_key: str | None = None
    timeout: float = 30.0
    batch_size: int = DEFAULT_BATCH_SIZE
    rate_limit_delay: float = DEFAULT_RATE_LIMIT_DELAY
    headers: MutableMapping[str, str] | None = None
    vectorizer: VectorizerConfig = field(default_factory=VectorizerConfig)

    def client_kwargs(self) -> dict[str, Any]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        if self.headers:
            headers.update(self.headers)
        return {
            "base_url": self.url.rstrip("/"),
            "headers": headers,
            "timeout": self.timeout,
        }

    @classmethod
    def from_env(cls) -> "ClientConfig":
        def _int_env(name: str, default: int) -> int:
            raw = os.getenv(name)
            if not raw:
                return default
            try:
                return int(raw)
            except ValueError:
                logger.warning("Invalid integer for %s: %s", name, raw)
                return default

        def _float_env(name: str, default: float) -> float:
            raw = os.getenv(name)
            if not raw:
                return default
            try:
                return float(raw)
            except ValueError:
                logger.warning("Invalid number for %s: %s", name, raw)
                return default

        headers: dict[str, str] = {}
        openai_key = os.getenv("OPENAI_API_KEY")
        if openai_key:
            headers["X-OpenAI-Api-Key"] = openai_key

        return cls(
            url=os.getenv("WEAVIATE_URL", DEFAULT_URL),
            api_key=os.getenv("WEAVIATE_API_KEY"),
            timeout=_float_env("WEAVIATE_TIMEOUT", 30.0),
            batch_size=_int_env("WEAVIATE_BATCH_SIZE", DEFAULT_BATCH_SIZE),
            rate_limit_delay=_float_env("WEAVIATE_RATE_LIMIT_DELAY", DEFAULT_RATE_LIMIT_DELAY),
            headers=headers or None,
        )


__all__ = ["ClientConfig", "VectorizerConfig"]

"""
Language-model client
=====================
Thin async wrapper over the OpenAI SDK. Groq, OpenAI and OpenRouter all
expose the same chat-completions interface, so one client serves each.
"""

from dataclasses import dataclass
from typing import Optional

from openai import AsyncOpenAI

from ..config.settings import LLM_CONFIG, PROVIDER_BASE_URLS
from ..errors import LLMNotConfiguredError


@dataclass(frozen=True)
class SamplingConfig:
    """Sampling parameters for a single completion"""
    temperature: float = LLM_CONFIG["temperature"]
    max_tokens: int = LLM_CONFIG["max_tokens"]


class LLMClient:
    """
    Chat-completion client. The SDK client is created lazily so a missing
    API key only fails the calls that need it.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        self.api_key = api_key or LLM_CONFIG.get("api_key")
        self.provider = provider or LLM_CONFIG.get("provider", "groq")
        self.model = model or LLM_CONFIG.get("model")
        self.base_url = base_url or LLM_CONFIG.get("base_url") or PROVIDER_BASE_URLS.get(self.provider)
        self.timeout_seconds = timeout_seconds or LLM_CONFIG.get("timeout_seconds", 30)
        self.client = None

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _initialize_client(self) -> AsyncOpenAI:
        if not self.api_key:
            raise LLMNotConfiguredError(f"{self.provider} API key is not configured.")
        self.client = AsyncOpenAI(
            api_key=self.api_key,
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            max_retries=LLM_CONFIG.get("transport_retries", 0),
        )
        return self.client

    async def complete(self, prompt: str, sampling: Optional[SamplingConfig] = None) -> str:
        """Send the prompt as the sole user message and return the text reply"""
        sampling = sampling or SamplingConfig()
        client = self.client or self._initialize_client()

        response = await client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=sampling.temperature,
            max_tokens=sampling.max_tokens,
        )
        return response.choices[0].message.content or ""

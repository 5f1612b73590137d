"""OpenAI-compatible provider hosts shared by the OCR and classification factories."""

from typing import Mapping

OPENAI_COMPATIBLE_BASE_URLS: Mapping[str, str] = {
    "openrouter": "https://openrouter.ai/api/v1",
    "groq": "https://api.groq.com/openai/v1",
    "together": "https://api.together.xyz/v1",
    "deepseek": "https://api.deepseek.com/v1",
    "ollama": "http://localhost:11434/v1",
}


def supported_providers() -> list[str]:
    return ["example", "openai", "openai_compatible", *sorted(OPENAI_COMPATIBLE_BASE_URLS)]


def resolve_base_url(provider: str, base_url: str | None, setting_name: str) -> str | None:
    """Base URL for an OpenAI-compatible provider.

    An explicit base_url always wins; 'openai' uses the SDK default.

    Raises:
        ValueError: for unknown providers, or openai_compatible without a URL.
    """
    explicit = (base_url or "").strip()
    if explicit:
        return explicit
    if provider == "openai":
        return None
    if provider == "openai_compatible":
        raise ValueError(f"{setting_name} is required for provider=openai_compatible")
    default_base_url = OPENAI_COMPATIBLE_BASE_URLS.get(provider)
    if default_base_url is not None:
        return default_base_url
    raise ValueError(f"Unknown provider '{provider}'. Choose from: {supported_providers()}")

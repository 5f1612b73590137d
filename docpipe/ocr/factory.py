from docpipe.config.providers import resolve_base_url
from docpipe.config.settings import Settings
from docpipe.ocr.base import BaseOcrEngine
from docpipe.ocr.example_adapter import ExampleOcrAdapter
from docpipe.ocr.openai_vision_adapter import OpenAIVisionOcrAdapter


class OcrEngineFactory:
    """Creates the configured OCR engine adapter."""

    @classmethod
    def create(cls, settings: Settings) -> BaseOcrEngine:
        provider = settings.ocr_provider.lower()
        if provider == "example":
            return ExampleOcrAdapter()
        return OpenAIVisionOcrAdapter(
            api_key=settings.ocr_api_key,
            model=settings.ocr_model_name,
            timeout_seconds=settings.ocr_timeout_seconds,
            base_url=resolve_base_url(provider, settings.ocr_base_url, "ocr_base_url"),
        )

from docpipe.classification.base import BaseClassificationOracle
from docpipe.classification.example_client_adapter import ExampleClientAdapter
from docpipe.classification.oracle import ClassificationOracle
from docpipe.classification.openai_client_adapter import OpenAIClientAdapter
from docpipe.config.providers import resolve_base_url
from docpipe.config.settings import Settings


class ClassificationOracleFactory:
    """Creates the configured classification oracle."""

    @classmethod
    def create(cls, settings: Settings) -> BaseClassificationOracle:
        provider = settings.classification_provider.lower()
        if provider == "example":
            return ClassificationOracle(
                client=ExampleClientAdapter(),
                model="example",
                temperature=0.0,
            )
        client = OpenAIClientAdapter(
            api_key=settings.classification_api_key,
            timeout_seconds=settings.classification_timeout_seconds,
            base_url=resolve_base_url(
                provider, settings.classification_base_url, "classification_base_url"
            ),
        )
        return ClassificationOracle(
            client=client,
            model=settings.classification_model_name,
            document_model=settings.classification_document_model_name,
            temperature=settings.classification_temperature,
        )

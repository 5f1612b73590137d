from abc import ABC, abstractmethod
from collections.abc import Sequence


class BaseClassificationClient(ABC):
    """Contract for provider-specific classification AI clients."""

    @abstractmethod
    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        schema_name: str,
        json_schema: dict[str, object],
        attachments: Sequence[dict[str, object]] = (),
    ) -> str:
        """Return provider response as plain text.

        attachments are extra user-message content parts (e.g. a PDF file part)
        placed before the user prompt.
        """

import base64

import httpx
import openai

from docpipe.ocr.base import BaseOcrEngine
from docpipe.ocr.exceptions import OcrError, OcrNetworkError

OCR_SYSTEM_PROMPT = (
    "You are an OCR engine. Transcribe every piece of text visible in the image "
    "exactly as written, preserving line breaks and reading order. Do not "
    "summarize, translate, or comment. If the image contains no text, reply "
    "with an empty message."
)


class OpenAIVisionOcrAdapter(BaseOcrEngine):
    """OCR via an OpenAI-compatible vision chat model."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._model = model
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    async def extract_text(self, image_bytes: bytes, mime_type: str) -> str:
        encoded = base64.b64encode(image_bytes).decode("ascii")
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                temperature=0.0,
                messages=[
                    {"role": "system", "content": OCR_SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": "Extract all text from this image."},
                            {
                                "type": "image_url",
                                "image_url": {"url": f"data:{mime_type};base64,{encoded}"},
                            },
                        ],
                    },
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise OcrNetworkError(f"OCR provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise OcrNetworkError(f"OCR provider API error: {exc}") from exc

        if not response.choices:
            raise OcrError("OCR returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise OcrError("OCR returned empty response")
        return content.strip()

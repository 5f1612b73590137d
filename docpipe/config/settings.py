from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pymupdf"
    render_scale: float = 2.0
    thumbnail_scale: float = 0.5

    ocr_provider: str = "openai"
    ocr_api_key: str = ""
    ocr_model_name: str = "gpt-4o-mini"
    ocr_base_url: str | None = None
    ocr_timeout_seconds: int = 30

    classification_provider: str = "openai"
    classification_api_key: str = ""
    classification_model_name: str = "gpt-4o-mini"
    classification_document_model_name: str = "gpt-4o"
    classification_base_url: str | None = None
    classification_timeout_seconds: int = 60
    classification_temperature: float = 0.0

    item_timeout_seconds: float = Field(default=30.0, gt=0)
    batch_policy: str = "concurrent"
    batch_concurrency: int = Field(default=4, ge=1)
    batch_chunk_delay_seconds: float = Field(default=0.3, ge=0)
    sequential_delay_seconds: float = Field(default=1.5, ge=0)
    page_ocr_delay_seconds: float = Field(default=0.3, ge=0)

    max_whole_document_bytes: int = 20 * 1024 * 1024
    blank_page_threshold: int = 20
    spreadsheet_strategy: str = "heuristic"

"""Configuration management -- reads from environment with sensible defaults."""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()

DEFAULT_BLACKLIST = "youtube.com,twitter.com,facebook.com,instagram.com"
DEFAULT_INSERTION_TEMPLATE = "***\nRelevant information from the web ({{query}}):\n{{text}}\n***"
DEFAULT_FILE_HEADER = 'Web search results for "{{query}}"\n\n'
DEFAULT_BLOCK_HEADER = "---\nInformation from {{link}}\n\n{{text}}\n\n"


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_template(name: str, default: str) -> str:
    # .env files cannot carry real newlines, so accept the escaped form.
    return os.getenv(name, default).replace("\\n", "\n")


@dataclass
class Settings:
    """Centralised settings seeded from env vars.

    Not frozen: an external settings collaborator may change any field between
    calls, and every component reads the current value each time.
    """

    # --- Serper ------------------------------------------------------------
    serper_api_key: str = field(default_factory=lambda: os.getenv("SERPER_API_KEY", ""))
    serper_search_url: str = field(
        default_factory=lambda: os.getenv("SERPER_SEARCH_URL", "https://google.serper.dev/search")
    )
    serper_images_url: str = field(
        default_factory=lambda: os.getenv("SERPER_IMAGES_URL", "https://google.serper.dev/images")
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT_SECONDS", "15"))
    )

    # --- Redis -------------------------------------------------------------
    redis_host: str = field(default_factory=lambda: os.getenv("REDIS_HOST", "localhost"))
    redis_port: int = field(default_factory=lambda: int(os.getenv("REDIS_PORT", "6379")))
    redis_password: str = field(default_factory=lambda: os.getenv("REDIS_PASSWORD", ""))
    redis_db: int = field(default_factory=lambda: int(os.getenv("REDIS_DB", "0")))

    # --- Cache -------------------------------------------------------------
    cache_backend: str = field(default_factory=lambda: os.getenv("CACHE_BACKEND", "redis"))
    cache_namespace: str = field(
        default_factory=lambda: os.getenv("CACHE_NAMESPACE", "websearch:")
    )
    cache_lifetime_seconds: int = field(
        default_factory=lambda: int(os.getenv("CACHE_LIFETIME_SECONDS", str(60 * 60 * 24 * 7)))
    )

    # --- Search behaviour --------------------------------------------------
    budget_chars: int = field(
        default_factory=lambda: int(os.getenv("SEARCH_BUDGET_CHARS", "2000"))
    )
    visit_count: int = field(default_factory=lambda: int(os.getenv("VISIT_COUNT", "3")))
    visit_blacklist: List[str] = field(
        default_factory=lambda: _env_list("VISIT_BLACKLIST", DEFAULT_BLACKLIST)
    )
    include_images: bool = field(default_factory=lambda: _env_bool("INCLUDE_IMAGES"))

    # --- Templates ---------------------------------------------------------
    insertion_template: str = field(
        default_factory=lambda: _env_template("INSERTION_TEMPLATE", DEFAULT_INSERTION_TEMPLATE)
    )
    visit_file_header: str = field(
        default_factory=lambda: _env_template("VISIT_FILE_HEADER", DEFAULT_FILE_HEADER)
    )
    visit_block_header: str = field(
        default_factory=lambda: _env_template("VISIT_BLOCK_HEADER", DEFAULT_BLOCK_HEADER)
    )

    # --- OpenAI ------------------------------------------------------------
    openai_api_key: str = field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))
    conversation_model: str = field(
        default_factory=lambda: os.getenv("OPENAI_CONVERSATION_MODEL", "gpt-4o-mini")
    )

    # --- Logging -----------------------------------------------------------
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", "logs/websearch.log"))
    search_log_file: str = field(
        default_factory=lambda: os.getenv("SEARCH_LOG_FILE", "logs/searches.jsonl")
    )

    # --- Guardrails --------------------------------------------------------
    max_query_length: int = field(
        default_factory=lambda: int(os.getenv("MAX_QUERY_LENGTH", "500"))
    )

    @property
    def search_available(self) -> bool:
        return bool(self.serper_api_key.strip())


# Module-level singleton -- import this everywhere.
settings = Settings()

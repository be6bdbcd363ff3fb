from typing import List, Optional

from pydantic import ConfigDict, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8001
    debug: bool = False

    # CORS - Allowed origins for cross-origin requests
    # Example: "https://collections.bank.co.ke,https://staff.bank.co.ke"
    cors_allowed_origins: str = ""  # Comma-separated list, empty = allow all in debug mode

    @field_validator("cors_allowed_origins")
    @classmethod
    def parse_cors_origins(cls, v: str) -> str:
        return v.strip()

    def get_cors_origins(self) -> List[str]:
        """
        Get list of allowed CORS origins.

        Returns:
            List of allowed origins. If empty and debug=True, allows all origins.
            If empty and debug=False, returns empty list (no CORS allowed).
        """
        if not self.cors_allowed_origins:
            if self.debug:
                return ["*"]
            return []
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    # LLM Provider Selection
    llm_provider: str = "gemini"  # "gemini" or "openai"

    # Gemini Configuration
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    gemini_temperature: float = 0.7
    gemini_max_tokens: int = 8192

    # OpenAI Configuration
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.7
    openai_max_tokens: int = 2048

    # Message generation
    currency: str = "KSH"

    # Database (unset = no template store, reads return empty and saves fail)
    database_url: Optional[str] = None
    database_echo: bool = False

    # External identity that is promoted to the admin role on sign-in
    owner_open_id: Optional[str] = None

    # Logging
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    # Rate Limiting (per-IP, per-minute)
    rate_limit_enabled: bool = True
    rate_limit_generate: str = "30/minute"
    rate_limit_templates: str = "120/minute"

    model_config = ConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()

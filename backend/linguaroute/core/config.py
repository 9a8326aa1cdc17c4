"""Central configuration management for LinguaRoute"""

import os
from typing import Dict, Optional
from pathlib import Path
import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field
from functools import lru_cache


DEFAULT_TASK_ROUTES: Dict[str, str] = {
    "conversation": "claude",           # natural teaching persona
    "grammar_correction": "qwen",       # CJK accuracy
    "cultural_explanation": "claude",   # deep reasoning
    "vocabulary": "claude",
    "exercise_generation": "openai",    # cost
    "translation": "qwen",
}


class LLMConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # API Keys
    claude_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("CLAUDE_API_KEY", "ANTHROPIC_API_KEY"),
    )
    openai_api_key: Optional[str] = Field(default=None, validation_alias="OPENAI_API_KEY")
    qwen_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("QWEN_API_KEY", "DASHSCOPE_API_KEY"),
    )
    # Reserved: no built-in Gemini provider, custom ones can read it
    gemini_api_key: Optional[str] = Field(default=None, validation_alias="GEMINI_API_KEY")

    # Per-provider model overrides (None = provider default)
    claude_model: Optional[str] = Field(default=None, validation_alias="CLAUDE_MODEL")
    openai_model: Optional[str] = Field(default=None, validation_alias="OPENAI_MODEL")
    qwen_model: Optional[str] = Field(default=None, validation_alias="QWEN_MODEL")

    # Built-in routing table
    default_provider: str = Field(default="claude", validation_alias="LLM_DEFAULT_PROVIDER")
    task_routes: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_TASK_ROUTES))

    # Handed to the httpx transport; the router itself never times out
    request_timeout_seconds: float = Field(default=120.0, validation_alias="LLM_REQUEST_TIMEOUT")
    default_max_tokens: int = Field(default=4096, gt=0)

    def api_key_for(self, provider_name: str) -> Optional[str]:
        """Credential configured for a provider kind, if any"""
        return getattr(self, f"{provider_name}_api_key", None)

    def default_model_for(self, provider_name: str) -> Optional[str]:
        """Model override configured for a provider kind, if any"""
        return getattr(self, f"{provider_name}_model", None)


class TelemetryConfig(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    enabled: bool = Field(default=False, validation_alias="TELEMETRY_ENABLED")
    service_name: str = Field(default="linguaroute", validation_alias="SERVICE_NAME")
    otlp_endpoint: str = Field(default="http://localhost:4317", validation_alias="OTEL_EXPORTER_OTLP_ENDPOINT")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    app_name: str = Field(default="LinguaRoute")
    app_version: str = Field(default="0.1.0")
    environment: str = Field(default="development")
    # Log level is read directly in logger.py; accepted here so the
    # variable does not trip validation when present in .env
    linguaroute_log_level: Optional[str] = Field(default="INFO")

    llm: LLMConfig = Field(default_factory=LLMConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    @classmethod
    def load_from_yaml(cls, yaml_path: Optional[str] = None) -> "Settings":
        """Load settings from YAML file with environment overrides"""
        if yaml_path and Path(yaml_path).exists():
            with open(yaml_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
                return cls(**config_data)
        return cls()

@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    yaml_path = os.getenv("CONFIG_PATH", "./config/settings.yaml")
    return Settings.load_from_yaml(yaml_path)

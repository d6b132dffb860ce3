"""
Configuration management for the Acko-MER AI backend.

This module provides centralized configuration using Pydantic Settings
for environment-based configuration management.
"""

import json
import os
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    model_config = SettingsConfigDict(env_prefix="MONGO_")

    uri: str = Field(
        default="mongodb://localhost:27017", description="MongoDB connection URI"
    )
    db_name: str = Field(default="acko_mer_ai", description="MongoDB database name")
    server_selection_timeout_ms: int = Field(
        default=15000, description="Server selection timeout in milliseconds"
    )

    @field_validator("uri")
    @classmethod
    def validate_mongo_uri(cls, v: str) -> str:
        """Validate MongoDB URI format."""
        if not v:
            raise ValueError("MongoDB URI is required. Please set MONGO_URI environment variable.")
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(
                "MongoDB URI must start with 'mongodb://' or 'mongodb+srv://'"
            )
        return v


class RedisSettings(BaseSettings):
    """Redis cache configuration settings."""

    model_config = SettingsConfigDict(env_prefix="REDIS_")

    url: str = Field(default="redis://localhost:6379", description="Redis connection URL")
    enabled: bool = Field(default=True, description="Connect to Redis on startup")
    session_ttl: int = Field(default=3600, description="Session cache TTL in seconds")
    transcription_status_ttl: int = Field(
        default=1800, description="Transcription status cache TTL in seconds"
    )
    socket_timeout: float = Field(default=5.0, description="Socket timeout in seconds")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate Redis URL scheme."""
        if not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError("Redis URL must start with 'redis://', 'rediss://' or 'unix://'")
        return v


class CORSSettings(BaseSettings):
    """CORS configuration settings."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    allowed_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: [os.getenv("FRONTEND_URL", "http://localhost:3000")],
        description="Allowed CORS origins",
    )
    allowed_methods: List[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        description="Allowed HTTP methods",
    )
    allowed_headers: List[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )
    allow_credentials: bool = Field(
        default=True, description="Allow credentials in CORS"
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, v):
        """Parse allowed origins from string or list."""
        if isinstance(v, str):
            if v.startswith("[") and v.endswith("]"):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    return [v.strip()]
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(default="json", description="Log format (json or text)")
    file_path: Optional[str] = Field(default=None, description="Log file path")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()


class AudioSettings(BaseSettings):
    """Audio upload configuration settings."""

    model_config = SettingsConfigDict(env_prefix="AUDIO_")

    max_size_mb: int = Field(default=50, description="Maximum audio file size in MB")
    stream_chunk_max_mb: int = Field(default=10, description="Maximum live audio chunk size in MB")
    allowed_mime_types: List[str] = Field(
        default=[
            "audio/wav",
            "audio/mpeg",
            "audio/mp3",
            "audio/mp4",
            "audio/m4a",
            "audio/webm",
            "audio/ogg",
        ],
        description="Accepted audio MIME types",
    )
    default_language: str = Field(default="en", description="Default transcription language")

    @field_validator("max_size_mb", "stream_chunk_max_mb")
    @classmethod
    def validate_max_size(cls, v: int) -> int:
        """Validate max file size."""
        if v <= 0 or v > 500:
            raise ValueError("Max file size must be between 1 and 500 MB")
        return v

    @property
    def max_size_bytes(self) -> int:
        return self.max_size_mb * 1024 * 1024

    @property
    def stream_chunk_max_bytes(self) -> int:
        return self.stream_chunk_max_mb * 1024 * 1024


class FileStorageSettings(BaseSettings):
    """File storage configuration settings."""

    model_config = SettingsConfigDict(env_prefix="FILE_")

    audio_storage_path: str = Field(default="./uploads", description="Uploaded audio storage path")


class AzureOpenAISettings(BaseSettings):
    """Azure OpenAI configuration settings."""

    model_config = SettingsConfigDict(env_prefix="AZURE_OPENAI_")

    endpoint: str = Field(default="", description="Azure OpenAI endpoint URL")
    api_key: str = Field(default="", description="Azure OpenAI API key")
    api_version: str = Field(default="2024-12-01-preview", description="Azure OpenAI API version")
    deployment_name: str = Field(default="gpt-4o-mini", description="Azure OpenAI chat deployment name")

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Validate Azure OpenAI endpoint format."""
        if v and not v.startswith("https://"):
            raise ValueError("Invalid Azure OpenAI endpoint format. Must be: https://xxx.openai.azure.com/")
        return v

    @property
    def is_configured(self) -> bool:
        return bool(self.endpoint and self.api_key and self.deployment_name)


class AzureSpeechSettings(BaseSettings):
    """Azure Speech Service configuration settings."""

    model_config = SettingsConfigDict(env_prefix="AZURE_SPEECH_")

    subscription_key: str = Field(default="", description="Azure Speech Service subscription key")
    region: str = Field(default="", description="Azure Speech Service region (e.g., 'eastus', 'westus2')")
    endpoint: str = Field(default="", description="Azure Speech Service endpoint (optional, derived from region)")
    api_version: str = Field(default="2024-11-15", description="Fast transcription API version")
    enable_speaker_diarization: bool = Field(default=True, description="Enable speaker diarization")
    max_speakers: int = Field(default=2, description="Maximum number of speakers to identify (Doctor/Patient)")
    request_timeout: int = Field(default=300, description="Request timeout in seconds")

    @field_validator("region")
    @classmethod
    def validate_region(cls, v: str) -> str:
        """Validate Azure region format."""
        if v and not v.replace("-", "").replace("_", "").isalnum():
            raise ValueError("Invalid Azure region format")
        return v

    @field_validator("max_speakers")
    @classmethod
    def validate_max_speakers(cls, v: int) -> int:
        if not 1 <= v <= 36:
            raise ValueError("Max speakers must be between 1 and 36")
        return v

    @property
    def is_configured(self) -> bool:
        return bool(self.subscription_key and (self.region or self.endpoint))


class SummarySettings(BaseSettings):
    """Clinical summary generation settings."""

    model_config = SettingsConfigDict(env_prefix="SUMMARY_")

    temperature: float = Field(default=0.3, description="Temperature for summary generation")
    max_tokens: int = Field(default=2000, description="Maximum tokens for the structured note")
    structured_char_limit: int = Field(default=4000, description="Transcript chars sent for the structured note")
    extraction_char_limit: int = Field(default=2000, description="Transcript chars sent for key points and medical data")
    prompt_version: str = Field(default="1.0", description="Prompt version recorded with each summary")

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        """Validate temperature."""
        if not 0.0 <= v <= 2.0:
            raise ValueError("Temperature must be between 0.0 and 2.0")
        return v


class QuestionSettings(BaseSettings):
    """Reflexive question generation settings."""

    model_config = SettingsConfigDict(env_prefix="QUESTIONS_")

    temperature: float = Field(default=0.5, description="Temperature for question generation")
    max_tokens: int = Field(default=1500, description="Maximum tokens per question batch")
    transcript_char_limit: int = Field(default=3000, description="Transcript chars sent per prompt")


class RateLimitSettings(BaseSettings):
    """Request rate limit settings."""

    model_config = SettingsConfigDict(env_prefix="RATE_LIMIT_")

    enabled: bool = Field(default=True, description="Enable per-client rate limiting on /api")
    max_requests: int = Field(default=100, description="Requests allowed per window")
    window_seconds: int = Field(default=900, description="Window length in seconds")
    trust_forwarded_for: bool = Field(
        default=False,
        description="Identify clients by X-Forwarded-For; enable only behind a trusted proxy",
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="Acko-MER AI", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    app_env: str = Field(default="development", description="Application environment")
    debug: bool = Field(default=False, description="Debug mode")
    port: int = Field(default=5000, description="Application port")
    host: str = Field(default="0.0.0.0", description="Application host")

    # Sub-settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)
    file_storage: FileStorageSettings = Field(default_factory=FileStorageSettings)
    azure_openai: AzureOpenAISettings = Field(default_factory=AzureOpenAISettings)
    azure_speech: AzureSpeechSettings = Field(default_factory=AzureSpeechSettings)
    summary: SummarySettings = Field(default_factory=SummarySettings)
    questions: QuestionSettings = Field(default_factory=QuestionSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate application environment."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"App environment must be one of: {valid_envs}")
        return v.lower()

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port number."""
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.app_env == "testing"


# Global settings instance (loaded after attempting to read .env)
_settings: Optional[Settings] = None


def _load_env_file_if_available() -> None:
    """Best-effort load of .env.local / .env by searching current and parent directories.

    Helps when the working directory isn't the backend folder and pydantic's
    env_file doesn't resolve. Already-set environment variables always win,
    and .env.local is loaded before .env so its values take precedence.
    """
    from dotenv import load_dotenv

    cwd = Path(os.getcwd()).resolve()
    for parent in [cwd, *cwd.parents]:
        candidates = [parent / ".env.local", parent / ".env"]
        found = [c for c in candidates if c.exists()]
        if found:
            for candidate in found:
                load_dotenv(dotenv_path=str(candidate), override=False)
            break


def get_settings() -> Settings:
    """Get application settings instance (lazy-init with .env discovery)."""
    global _settings
    if _settings is None:
        _load_env_file_if_available()
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None

"""Configuration models using Pydantic for validation."""

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class AnalysisServiceSettings(BaseModel):
    """Settings for the hosted chat-completion analysis service."""

    base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        description="Base URL of the OpenAI-compatible chat-completion API",
    )
    model: str = Field(default="compound-beta", description="Model identifier sent with each request")
    api_key: str | None = Field(
        default_factory=lambda: os.environ.get("GROQ_API_KEY"),
        exclude=True,
        description="API key (defaults to the GROQ_API_KEY environment variable; never saved)",
    )
    temperature: float = Field(default=0.3, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int = Field(default=1000, ge=1, description="Token budget for the reply")
    max_input_chars: int = Field(
        default=4000, ge=1, description="Characters of document text sent for analysis"
    )
    timeout_seconds: float = Field(default=60.0, gt=0, description="Request timeout in seconds")
    max_retries: int = Field(
        default=0, ge=0, description="Retries after a failed request before the service is reported unavailable"
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended."""
        return v.rstrip("/")


class ProcessingSettings(BaseModel):
    """Settings for upload processing behavior."""

    max_file_size_mb: float = Field(
        default=10, gt=0, description="Maximum accepted upload size (in MB)"
    )
    enforce_size_limit: bool = Field(
        default=True, description="Reject uploads above max_file_size_mb before extraction"
    )


class ReportSettings(BaseModel):
    """Settings for generated PDF reports."""

    output_dir: Path = Field(default=Path("reports"), description="Directory for generated reports")
    max_text_chars: int = Field(
        default=2000, ge=0, description="Characters of extracted text included in a report"
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_dir: Path = Field(default=Path("logs"), description="Directory for log files")
    max_bytes: int = Field(
        default=10 * 1024 * 1024, ge=1024, description="Max log file size before rotation (bytes)"
    )
    backup_count: int = Field(default=5, ge=1, description="Number of rotated log files to keep")
    console_enabled: bool = Field(default=True, description="Enable console logging")
    file_enabled: bool = Field(default=True, description="Enable file logging")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper


class StorageSettings(BaseModel):
    """Persistence configuration."""

    path: Path = Field(
        default=Path("data/docanalyzer.db"), description="Path to SQLite database file"
    )
    collection_key: str = Field(
        default="smart-analyzer-docs",
        min_length=1,
        description="Key under which the document collection is stored",
    )


class DocAnalyzerConfig(BaseModel):
    """Main configuration for DocAnalyzer."""

    analysis: AnalysisServiceSettings = Field(
        default_factory=AnalysisServiceSettings, description="Analysis service settings"
    )

    processing: ProcessingSettings = Field(
        default_factory=ProcessingSettings, description="Upload processing settings"
    )

    report: ReportSettings = Field(default_factory=ReportSettings, description="Report settings")

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings, description="Logging settings"
    )

    storage: StorageSettings = Field(
        default_factory=StorageSettings, description="Storage settings"
    )

    class Config:
        """Pydantic config."""

        validate_assignment = True
        extra = "forbid"  # Raise error on unknown fields

"""Configuration management for the Vision Bootstrap Synthesis Engine.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the VBS_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (VBS_* prefix)
2. .env file in the project root
3. Default values defined in VisionBootstrapConfig

The Gemini key is additionally accepted as ``GEMINI_API_KEY`` or ``API_KEY``
so an existing AI Studio setup works unchanged.

Example .env file:
    GEMINI_API_KEY=...
    VBS_GEMINI_MODEL=gemini-3-pro-preview
    VBS_FREEPIK_API_KEY=...
    VBS_DATA_DIR=data

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from visionbootstrap.core.config import config

    print(config.gemini_model)
    print(config.history_path)

Directory Management
--------------------
The configuration automatically creates required directories on initialization:
- data_dir: Holds the persisted project history
- export_dir: Receives exported standalone HTML documents
"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fixed storage key for the persisted project history.
HISTORY_STORAGE_KEY = "vision_bootstrap_history"


class VisionBootstrapConfig(BaseSettings):
    """Main configuration for the Vision Bootstrap Synthesis Engine.

    Attributes
    ----------
    Generative Backend:
        gemini_api_key : str
            API key for the Gemini API
        gemini_model : str
            Model used for every synthesis turn
        thinking_budget : int
            Thinking token budget passed on every request
        http_timeout_ms : int
            Transport timeout for Gemini calls (milliseconds)

    Stock Images:
        freepik_api_key : str
            API key sent in the ``x-freepik-api-key`` header
        freepik_api_url : str
            Resource search endpoint
        stock_proxy_url : str
            Optional proxy prefix; the encoded target URL is appended to it
        stock_result_limit : int
            Number of results requested per query
        stock_request_timeout : float
            Request timeout in seconds

    Paths:
        data_dir : Path
            Directory holding the persisted history file
        export_dir : Path
            Directory receiving exported HTML documents

    UI Settings:
        log_interval : float
            Seconds between scripted progress-log lines
        server_name : str
            Server bind address
        server_port : int
            Server port (1024-65535)
        share : bool
            Create public gradio.live link (keep False for local-only)

    Examples
    --------
        >>> custom_config = VisionBootstrapConfig(
        ...     gemini_model="gemini-2.5-pro",
        ...     data_dir="/tmp/vbs",
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VBS_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Generative backend
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("VBS_GEMINI_API_KEY", "GEMINI_API_KEY", "API_KEY", "gemini_api_key"),
        description="API key for the Gemini API",
    )
    gemini_model: str = Field(
        default="gemini-3-pro-preview",
        description="Gemini model used for synthesis",
    )
    thinking_budget: int = Field(
        default=4000,
        description="Thinking token budget for each request",
        ge=0,
        le=32768,
    )
    http_timeout_ms: int = Field(
        default=300_000,
        description="Transport timeout for Gemini calls in milliseconds",
        ge=1000,
    )

    # Stock image search
    freepik_api_key: str = Field(
        default="",
        description="API key for the Freepik resource search",
    )
    freepik_api_url: str = Field(
        default="https://api.freepik.com/v1/resources",
        description="Freepik resource search endpoint",
    )
    stock_proxy_url: str = Field(
        default="",
        description="Optional proxy prefix (e.g. https://corsproxy.io/?)",
    )
    stock_result_limit: int = Field(default=15, ge=1, le=100)
    stock_request_timeout: float = Field(default=15.0, gt=0)

    # Paths
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the project history",
    )
    export_dir: Path = Field(
        default=Path("exports"),
        description="Directory for exported HTML documents",
    )

    # UI settings
    log_interval: float = Field(
        default=0.6,
        description="Seconds between scripted progress-log lines",
        gt=0,
    )
    server_name: str = Field(
        default="127.0.0.1",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create required directories."""
        super().__init__(**kwargs)

        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.export_dir.mkdir(parents=True, exist_ok=True)

    @property
    def history_path(self) -> Path:
        """Location of the persisted project history."""
        return self.data_dir / f"{HISTORY_STORAGE_KEY}.json"


# Global configuration instance
config = VisionBootstrapConfig()

"""Configuration loader for the passage-to-Markdown converter."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


class AppInfo(BaseModel):
    """Application metadata."""

    model_config = ConfigDict(frozen=True)

    name: str = "bg2md"
    version: str = "0.1.0"


class LookupConfig(BaseModel):
    """Passage lookup configuration."""

    model_config = ConfigDict(frozen=True)

    url_template: str = (
        "https://www.biblegateway.com/passage/"
        "?interface=print&version={version}&search={reference}"
    )
    default_version: str = "NET"
    user_agent: str = "bg2md/0.1 (passage lookup to Markdown)"
    timeout_seconds: float = 30.0


class MarkerConfig(BaseModel):
    """Patterns bounding the passage fragment inside the page."""

    model_config = ConfigDict(frozen=True)

    start: str = '<div class="passage-text">'
    end: str = r"</table>$"


class OutputConfig(BaseModel):
    """Which optional parts of the passage end up in the document."""

    model_config = ConfigDict(frozen=True)

    copyright: bool = True
    headers: bool = True
    footnotes: bool = True
    numbering: bool = True


class AppConfig(BaseModel):
    """Root application configuration."""

    model_config = ConfigDict(frozen=True)

    app: AppInfo = Field(default_factory=AppInfo)
    lookup: LookupConfig = Field(default_factory=LookupConfig)
    markers: MarkerConfig = Field(default_factory=MarkerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    log_level: str = "WARNING"


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file, encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

    # Environment wins over the file
    version = os.getenv("BG2MD_VERSION")
    if version:
        yaml_data["lookup"] = {**yaml_data.get("lookup", {}), "default_version": version}
    log_level = os.getenv("BG2MD_LOG_LEVEL")
    if log_level:
        yaml_data["log_level"] = log_level

    return AppConfig(**yaml_data)

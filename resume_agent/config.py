"""YAML config loading and validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass
class CustomizerConfig:
    use_ai: bool = False
    model: str = "gpt-4o-mini"
    temperature: float = 0.3
    max_tokens: int = 2000


@dataclass
class ApiKeys:
    openai_api_key: str = ""
    openai_base_url: str = ""


@dataclass
class FetchConfig:
    timeout: int = 30
    max_retries: int = 3


@dataclass
class AppConfig:
    customizer: CustomizerConfig = field(default_factory=CustomizerConfig)
    api_keys: ApiKeys = field(default_factory=ApiKeys)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    data_dir: str = "data"
    log_dir: str = "logs"
    output_dir: str = "customized"


def load_config(config_path: str = "config.yaml") -> AppConfig:
    """Load and validate configuration from YAML file."""
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Copy config.example.yaml to config.yaml and fill in your settings."
        )

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    config = AppConfig()

    # Customizer
    customizer_raw = raw.get("customizer", {})
    config.customizer = CustomizerConfig(
        use_ai=customizer_raw.get("use_ai", False),
        model=customizer_raw.get("model", "gpt-4o-mini"),
        temperature=customizer_raw.get("temperature", 0.3),
        max_tokens=customizer_raw.get("max_tokens", 2000),
    )

    # API keys (env vars take precedence)
    keys_raw = raw.get("api_keys", {})
    config.api_keys = ApiKeys(
        openai_api_key=os.environ.get("OPENAI_API_KEY", keys_raw.get("openai_api_key", "")),
        openai_base_url=os.environ.get("OPENAI_BASE_URL", keys_raw.get("openai_base_url", "")),
    )

    # Article fetching
    fetch_raw = raw.get("fetch", {})
    config.fetch = FetchConfig(
        timeout=fetch_raw.get("timeout", 30),
        max_retries=fetch_raw.get("max_retries", 3),
    )

    config.data_dir = raw.get("data_dir", "data")
    config.log_dir = raw.get("log_dir", "logs")
    config.output_dir = raw.get("output_dir", "customized")

    return config


def validate_config(config: AppConfig) -> list[str]:
    """Return list of validation warnings (empty = OK)."""
    warnings = []

    if config.customizer.use_ai and not config.api_keys.openai_api_key:
        warnings.append("AI customization enabled but no OpenAI API key configured - will fall back to template customization")

    if not 0.0 <= config.customizer.temperature <= 2.0:
        warnings.append(f"Customizer temperature {config.customizer.temperature} is outside 0.0-2.0")

    if config.fetch.timeout <= 0:
        warnings.append("Fetch timeout must be positive - article downloads will fail")

    if Path(config.output_dir).resolve() == Path(config.data_dir).resolve():
        warnings.append("output_dir and data_dir are the same directory")

    return warnings

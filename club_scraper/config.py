"""Configuration objects and constants for the crawler."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from .errors import ConfigurationError

BASE_ORIGIN = "https://www.hollandsevelden.nl"
LISTING_URL_TEMPLATE = BASE_ORIGIN + "/clubs/{letter}/"
LOGO_ALT_PREFIX = "Clublogo voetbalvereniging "
ASSET_SUBDIR = Path("logos") / "big"

SWITCHES = ("reduced_mode", "download_images", "save_json")


@dataclass
class RunConfiguration:
    """Switches selected for a run plus the ambient crawl settings."""

    reduced_mode: bool = False
    download_images: bool = True
    save_json: bool = True
    output_root: Path = Path(".")
    navigation_timeout: float = 30.0
    headless: bool = True

    @property
    def asset_dir(self) -> Path:
        return self.output_root / ASSET_SUBDIR


def default_configuration(**overrides: Any) -> RunConfiguration:
    """Programmatic defaults: full crawl, download images, save JSON."""
    known = {f.name for f in fields(RunConfiguration)}
    unknown = set(overrides) - known
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
    return replace(RunConfiguration(), **overrides)


def validate_configuration(config: RunConfiguration) -> RunConfiguration:
    """Raise ConfigurationError unless every switch is a real bool."""
    for name in SWITCHES:
        value = getattr(config, name)
        if not isinstance(value, bool):
            raise ConfigurationError(
                f"Invalid configuration: {name} must be a boolean, got {value!r}"
            )
    if config.navigation_timeout <= 0:
        raise ConfigurationError("Invalid configuration: navigation_timeout must be positive")
    return config

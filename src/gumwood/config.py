"""Configuration for the command line.

Options can come from a YAML file (``--config``) and from flags; flags win.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from gumwood.errors import ConfigurationError
from gumwood.source import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


def _split_pairs(entries: list[str], what: str) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for entry in entries:
        if not entry.strip():
            continue
        key, sep, value = entry.partition(":")
        key = key.strip()
        if not sep or not key:
            raise ConfigurationError(f"invalid {what} {entry!r}, expected key:value")
        pairs[key] = value.strip()
    return pairs


def parse_front_matter(text: str | None) -> dict[str, str]:
    """Parse ``key1:value1;key2:value2`` into an ordered mapping."""
    if not text:
        return {}
    return _split_pairs(text.split(";"), "front matter entry")


def parse_headers(headers: list[str] | tuple[str, ...]) -> dict[str, str]:
    """Parse ``Name: value`` header strings."""
    return _split_pairs(list(headers), "header")


class GumwoodConfig(BaseModel):
    """Settings for one ``gumwood generate`` run."""

    url: str | None = None
    json_path: Path | None = None
    schema_path: Path | None = None
    headers: dict[str, str] = {}
    front_matter: dict[str, str] = {}
    out_dir: Path | None = None
    timeout: float = DEFAULT_TIMEOUT
    include_introspection_types: bool = True
    include_directives: bool = False

    @field_validator("headers", mode="before")
    @classmethod
    def headers_from_list(cls, value):
        if isinstance(value, (list, tuple)):
            return parse_headers(value)
        return value or {}

    @field_validator("front_matter", mode="before")
    @classmethod
    def front_matter_from_string(cls, value):
        if isinstance(value, str):
            return parse_front_matter(value)
        return value or {}

    def merged(self, **overrides) -> "GumwoodConfig":
        """Return a copy with every non-empty override applied."""
        values = self.model_dump()
        for key, value in overrides.items():
            if value is None or value == {} or value == ():
                continue
            values[key] = value
        config = GumwoodConfig.model_validate(values)
        config.check_sources()
        return config

    def check_sources(self) -> None:
        chosen = [name for name in ("url", "json_path", "schema_path") if getattr(self, name)]
        if len(chosen) > 1:
            raise ConfigurationError(f"choose only one schema source, got {', '.join(chosen)}")


def load_config(path: Path | None) -> GumwoodConfig:
    """Load settings from a YAML file; defaults when *path* is ``None``."""
    if path is None:
        return GumwoodConfig()

    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"cannot read config file {path}: {exc}") from exc

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"config file {path} must contain a mapping")

    try:
        config = GumwoodConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid config file {path}: {exc}") from exc
    logger.debug("Loaded config from %s", path)
    return config

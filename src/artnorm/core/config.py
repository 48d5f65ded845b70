"""Routing configuration for the normalization pipeline.

Maps extractor plugin names and classifier type tags to registered
mappers. Loaded from YAML and validated against NormalizerConfig.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from artnorm.core.errors import ConfigError
from artnorm.normalizer.timestamps import SENTINEL_TIMESTAMP

DEFAULT_PLUGIN_ROUTES = {
    "lecmd": "lnk",
    "jlecmd": "jumplist",
    "pecmd": "prefetch",
    "mftecmd": "mft",
}

DEFAULT_TYPE_ROUTES = {
    "application/syslog": "syslog",
}


class NormalizerConfig(BaseModel):
    """Pipeline routing and defaults."""

    plugins: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_PLUGIN_ROUTES),
        description="Extractor plugin name -> mapper name",
    )

    types: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_TYPE_ROUTES),
        description="Classifier type or MIME tag -> mapper name",
    )

    sentinel_timestamp: str = Field(
        default=SENTINEL_TIMESTAMP,
        description="Timestamp assigned to documents that end up without one",
    )

    model_config = {"extra": "forbid"}

    def routes(self) -> dict[str, str]:
        """All routes, type tags included."""
        return {**self.plugins, **self.types}


def load_config(path: Path) -> NormalizerConfig:
    """Load a routing configuration from a YAML file.

    Keys that are not present keep their defaults; `plugins` and `types`
    replace the default tables as a whole when given.

    Args:
        path: Path to the YAML file

    Returns:
        Validated NormalizerConfig

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}", path=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Configuration file '{path}' is not valid YAML",
            path=str(path),
            errors=[str(e)],
        )

    if data is None:
        return NormalizerConfig()

    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration file '{path}' must contain a YAML mapping",
            path=str(path),
        )

    try:
        return NormalizerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            f"Configuration file '{path}' failed validation",
            path=str(path),
            errors=[f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()],
        )

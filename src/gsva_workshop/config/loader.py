"""Load the workshop YAML config, falling back to built-in defaults."""

from pathlib import Path
from typing import Any

import pydantic_yaml

from .schema import WorkshopConfig


def _set_dotted(data: dict[str, Any], key: str, value: Any) -> None:
    *sections, leaf = key.split(".")
    for section in sections:
        data = data.setdefault(section, {})
    data[leaf] = value


def load_config(
    config_path: Path | str | None = None,
    overrides: dict[str, Any] | None = None,
) -> WorkshopConfig:
    """Build a validated WorkshopConfig.

    Without a path the schema defaults are used, so the CLI works without a
    config file. Overrides use dotted keys for nested sections
    ("importer.dedup_policy": "error") and are validated together with the
    file contents.

    Raises:
        FileNotFoundError: If config_path is given but missing
        pydantic.ValidationError: If the merged values are invalid
    """
    if config_path is None:
        config = WorkshopConfig()
    else:
        config_path = Path(config_path)
        if not config_path.is_file():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        config = pydantic_yaml.parse_yaml_raw_as(
            WorkshopConfig, config_path.read_text()
        )

    if not overrides:
        return config

    values = config.model_dump()
    for key, value in overrides.items():
        _set_dotted(values, key, value)
    return WorkshopConfig.model_validate(values)

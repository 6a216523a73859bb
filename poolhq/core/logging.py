"""Logging utilities."""
from __future__ import annotations

import logging
import logging.config
from pathlib import Path

import yaml

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "../.." / "configs" / "logging.yaml"


def configure_logging(config_path: Path | None = None, *, level: str | None = None) -> None:
    """Configure logging from the YAML file, falling back to ``basicConfig``.

    ``level`` overrides the level of the ``poolhq`` logger after the file is applied.
    """
    path = config_path or _DEFAULT_CONFIG_PATH
    if path.exists():
        with path.open("r", encoding="utf-8") as config_file:
            logging.config.dictConfig(yaml.safe_load(config_file))
    else:
        logging.basicConfig(level=logging.INFO)

    if level:
        logging.getLogger("poolhq").setLevel(level.upper())


__all__ = ["configure_logging"]

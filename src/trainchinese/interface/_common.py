"""Helpers shared by CLI commands."""

import logging
from typing import Any

import typer

from trainchinese.application.config import AppConfig, resolve_config
from trainchinese.domain.errors import SnapshotError
from trainchinese.domain.models import Pool
from trainchinese.infrastructure.persistence import JsonKnownItemsRepository

logger = logging.getLogger(__name__)


def _resolve_with_overrides(**overrides: Any) -> AppConfig:
    """Resolve config, letting explicitly passed CLI options win."""
    config = resolve_config(overrides)
    if config.verbose > 1:
        logging.getLogger("trainchinese").setLevel(logging.DEBUG)
    return config


def _load_pool(config: AppConfig) -> Pool:
    """Load the known partition, exiting with code 1 on a corrupt snapshot."""
    try:
        known = JsonKnownItemsRepository(config.save_file).load()
    except SnapshotError as e:
        typer.secho(f"Could not load progress: {e}", fg="red", err=True)
        raise typer.Exit(1) from e
    return Pool(known=known)

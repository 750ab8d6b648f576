"""ensem_core.config

Run-time configuration for the ``ensem`` command line tool.

The config is a small YAML mapping validated by a pydantic model::

    resampling: jackknife      # or bootstrap
    write_precision: 12        # significant digits in written files (12-17)
    log_level: WARNING

``load_config()`` without a path reads the file named by ``$ENSEM_CONFIG``
and falls back to the defaults when the variable is unset.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ensem_core.core.enums import ResamplingKind
from ensem_core.errors import EnsembleIOError, ParseError
from ensem_core.io.ensemble_file import DEFAULT_PRECISION, MAX_PRECISION, MIN_PRECISION

logger = logging.getLogger(__name__)

ENV_VAR = "ENSEM_CONFIG"


class EnsemConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    resampling: ResamplingKind = ResamplingKind.jackknife
    write_precision: int = Field(DEFAULT_PRECISION, ge=MIN_PRECISION, le=MAX_PRECISION)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level


def load_config(path: Optional[Union[str, Path]] = None) -> EnsemConfig:
    """Load and validate a YAML config file.

    Raises
    ------
    EnsembleIOError
        If an explicitly requested file cannot be read.
    ParseError
        If the file is not a YAML mapping or fails validation.
    """
    if path is None:
        path = os.environ.get(ENV_VAR)
        if not path:
            return EnsemConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as exc:
        raise EnsembleIOError(f"cannot read config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ParseError(f"invalid YAML: {exc}", str(path)) from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ParseError("config must be a mapping", str(path))

    try:
        cfg = EnsemConfig(**raw)
    except ValidationError as exc:
        raise ParseError(str(exc), str(path)) from exc
    logger.debug("loaded config from %s: %s", path, cfg.model_dump())
    return cfg

# Area: Shared
"""
ttt_client._client_config — Client configuration
================================================

Configuration model and loading. Sources, lowest to highest precedence:
model defaults, an optional JSON config file, environment variables
(a ``.env`` file is loaded first), explicit overrides from CLI flags.
"""

from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .validators import is_valid_address

logger = logging.getLogger("ttt_client.config")

DEFAULT_RPC_URL = "https://api.devnet.solana.com"
DEFAULT_PROGRAM_ID = "6kTBYbV3itwchJZmT5wzPoWHiwzFwB5zCoHJmuYdYcVX"

# Environment variable → config key
ENV_MAPPINGS = {
    "TTT_RPC_URL": "rpc_url",
    "TTT_PROGRAM_ID": "program_id",
    "TTT_KEYPAIR_PATH": "keypair_path",
    "TTT_CLUSTER": "cluster",
    "TTT_COMMITMENT": "commitment",
    "TTT_POLL_INTERVAL_SECONDS": "poll_interval_seconds",
    "TTT_LOG_FILE": "log_file",
    "TTT_LOG_LEVEL": "log_level",
}


class ClientConfig(BaseModel):
    """Validated client settings."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    rpc_url: str = DEFAULT_RPC_URL
    program_id: str = DEFAULT_PROGRAM_ID
    keypair_path: str
    cluster: str = "devnet"
    commitment: Literal["processed", "confirmed", "finalized"] = "confirmed"
    poll_interval_seconds: float = Field(default=2.0, gt=0)
    request_timeout_seconds: float = Field(default=30.0, gt=0)
    confirm_attempts: int = Field(default=30, ge=1)
    log_file: str = "ttt_client.log"
    log_level: str = "INFO"

    @field_validator("program_id")
    @classmethod
    def _program_id_is_address(cls, value: str) -> str:
        if not is_valid_address(value):
            raise ValueError("program_id is not a valid address")
        return value

    @field_validator("log_level")
    @classmethod
    def _log_level_known(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {value!r}")
        return level


def load_raw_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load config from file, then overlay environment variables."""
    load_dotenv()
    config: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config = json.load(f)
        else:
            logger.warning(f"Config file not found: {path}")

    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in os.environ:
            config[config_key] = os.environ[env_key]

    return config


def validate_config(raw: Dict[str, Any]) -> ClientConfig:
    """
    Validate a raw config dict.

    Raises:
        ConfigError: Listing every invalid or missing field
    """
    try:
        return ClientConfig.model_validate(raw)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigError(errors) from e


def load_config(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> ClientConfig:
    """Load, overlay and validate configuration in one step."""
    raw = load_raw_config(config_path)
    for key, value in (overrides or {}).items():
        if value is not None:
            raw[key] = value
    return validate_config(raw)

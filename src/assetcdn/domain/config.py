from __future__ import annotations

"""
Configuration Domain Management.

Provides the default run configuration and loads optional JSON config
files from disk. Values are merged over the defaults; validation and type
coercion happen later in the pipeline validator.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from assetcdn.domain.constants import (
    DEFAULT_BASE,
    DEFAULT_CONFIG_FILENAME,
    DEFAULT_IMAGE_DOMAINS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_STATIC_DOMAINS,
    DEFAULT_UPLOAD_TIMEOUT,
    TOKEN_ENV_VAR,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.
    This dictionary drives the behavior of the Pipeline.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Build output
        "output_dir": DEFAULT_OUTPUT_DIR,
        "base": DEFAULT_BASE,

        # Upload service
        "upload_endpoint": "",
        "upload_token": "",
        "https": True,
        "image_domains": list(DEFAULT_IMAGE_DOMAINS),
        "static_domains": list(DEFAULT_STATIC_DOMAINS),
        "upload_timeout": DEFAULT_UPLOAD_TIMEOUT,

        # Batching (0 = no bound on distinct uploads per round)
        "round_size": 0,

        # Diagnostics
        "log_file": "",
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the configuration file and merge it over the defaults.

    Looks for an explicit path first, then for 'assetcdn.json' in the current
    working directory. A missing or corrupted file yields the defaults.

    Args:
        path: Optional explicit config file location.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    config = get_default_config()
    config_path = path or os.path.join(os.getcwd(), DEFAULT_CONFIG_FILENAME)

    if not os.path.exists(config_path):
        if path:
            logger.warning(f"Config file not found: {config_path}. Using defaults.")
        else:
            logger.debug("No config file found. Returning defaults.")
        return _apply_environment(config)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return _apply_environment(config)

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return _apply_environment(config)

    config.update(data)
    logger.debug(f"Configuration loaded from {config_path}")
    return _apply_environment(config)


def _apply_environment(config: Dict[str, Any]) -> Dict[str, Any]:
    """Fill the upload token from the environment when not configured."""
    if not config.get("upload_token"):
        token = os.environ.get(TOKEN_ENV_VAR, "")
        if token:
            config["upload_token"] = token
    return config

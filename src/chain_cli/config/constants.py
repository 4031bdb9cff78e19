"""Default paths, environment variable names, and constants."""

from __future__ import annotations

import platformdirs

APP_NAME = "chain-cli"
APP_AUTHOR = "chain-cli"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME, APP_AUTHOR)
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Environment variable names
ENV_BACKEND_URL = "CHAIN_CLI_URL"
ENV_API_TOKEN = "CHAIN_CLI_TOKEN"
ENV_PROFILE = "CHAIN_CLI_PROFILE"

# API defaults
CHAINS_API_BASE = "/v2/chains"
DEFAULT_CHAIN_TYPE = "solana"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 3

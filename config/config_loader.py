import json
import os
from datetime import datetime

DEFAULT_CONFIG = {
    "max_steps": 1_000_000,
    "verbose": False,
    "log_history": False,
    "output_directory": "logs/",
    "log_file_prefix": "trm_",
    "default_format": "toml",
}

# Expected types for validation
CONFIG_SCHEMA = {
    "max_steps": int,
    "verbose": bool,
    "log_history": bool,
    "output_directory": str,
    "log_file_prefix": str,
    "default_format": str,
}

SUPPORTED_FORMATS = ("json", "toml", "yaml", "yml")


def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is an int subclass; max_steps must be a real number
        if expected_type is int and isinstance(config[key], bool):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")
        if not isinstance(config[key], expected_type):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")

    if config["max_steps"] < 0:
        raise ValueError("max_steps must be >= 0 (0 means no limit).")
    if config["default_format"].lower() not in SUPPORTED_FORMATS:
        raise ValueError(f"default_format must be one of {SUPPORTED_FORMATS}.")


def load_config(path="config/runtime_config.json", overrides=None, verbose=True):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)
    if overrides:
        config.update({k: v for k, v in overrides.items() if v is not None})

    validate_config(config)

    if config["log_history"]:
        os.makedirs(config["output_directory"], exist_ok=True)

    if verbose:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config


def default_config(overrides=None):
    """Defaults (plus overrides) without touching the filesystem."""
    config = DEFAULT_CONFIG.copy()
    if overrides:
        config.update({k: v for k, v in overrides.items() if v is not None})
    validate_config(config)
    return config

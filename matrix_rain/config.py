import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .console import console

# Load environment variables from .env file
load_dotenv()

# Configuration Defaults
DEFAULT_CONFIG = {
    "RAIN_SPEED": "50",
    "RAIN_DENSITY": "40",
    "RAIN_SPAWNS": "4",
    "RAIN_LENGTH": "30",
    "RAIN_COLOR": "green",
    "RAIN_SPLASH_SECONDS": "1.5",
}

# File Paths
MATRIX_RAIN_DIR = Path(os.getenv("MATRIX_RAIN_DIR", str(Path.home() / ".matrix_rain")))
CONFIG_FILE = Path(os.getenv("MATRIX_RAIN_CONFIG_FILE", str(MATRIX_RAIN_DIR / "config.json")))


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from file"""
    path = path or CONFIG_FILE
    if path.exists():
        try:
            with open(path) as f:
                config = json.load(f)
            if isinstance(config, dict):
                return config
            console.print(f"[yellow]Warning: Ignoring {path}, expected a JSON object[/yellow]")
        except Exception as e:
            console.print(f"[yellow]Warning: Could not load config file: {e}[/yellow]")
    return {}


def get_setting(key: str, default: str) -> str:
    """Get setting with priority: Env Var > Config File > Default"""
    # 1. Environment Variable (includes values loaded from .env)
    env_val = os.getenv(key)
    if env_val:
        return env_val

    # 2. Config File
    config = load_config()
    if key in config:
        return str(config[key])

    # 3. Default
    return default


def get_int_setting(key: str, default: int) -> int:
    """Get integer setting with priority: Env Var > Config File > Default"""
    value = get_setting(key, str(default))
    try:
        return int(value)
    except ValueError:
        console.print(
            f"[yellow]Warning: Invalid integer value for {key}: {value}, using default {default}[/yellow]"
        )
        return default


def get_float_setting(key: str, default: float) -> float:
    """Get float setting with priority: Env Var > Config File > Default"""
    value = get_setting(key, str(default))
    try:
        return float(value)
    except ValueError:
        console.print(
            f"[yellow]Warning: Invalid float value for {key}: {value}, using default {default}[/yellow]"
        )
        return default

# pwomatic/config.py
"""
Simple settings persistence for Password-O-Matic.
Settings saved as JSON in $PWOMATIC_CONFIG, %APPDATA%/PasswordOMatic/config.json (Windows)
or ~/.pwomatic/config.json (fallback)
"""

import os
import json
from typing import Dict, Any, Optional

from loguru import logger

from .generator import PasswordPolicy
from .storage import atomic_write_bytes, dump_json_bytes

DEFAULTS: Dict[str, Any] = {
    "host": "localhost",
    "port": 8443,
    "dictionary": "dictionary.txt",
    "cert_file": "cert.pem",
    "key_file": "key.pem",
    "batch_size": 12,
    "sample_size": 200,
    "log_level": "INFO",
    "min_length": 20,
    "max_length": 27,
    "readable_symbols": 4,
}

def _appdata_dir() -> str:
    appdata = os.getenv("APPDATA")
    if appdata:
        return os.path.join(appdata, "PasswordOMatic")
    return os.path.join(os.path.expanduser("~"), ".pwomatic")

def config_path() -> str:
    return os.getenv("PWOMATIC_CONFIG") or os.path.join(_appdata_dir(), "config.json")

def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    p = path or config_path()
    if not os.path.exists(p):
        return DEFAULTS.copy()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config {}: {}", p, e)
        return DEFAULTS.copy()
    if not isinstance(data, dict):
        logger.warning("Ignoring config {}: expected a JSON object", p)
        return DEFAULTS.copy()
    # merge defaults
    out = DEFAULTS.copy()
    out.update(data)
    return out

def save_config(cfg: Dict[str, Any], path: Optional[str] = None) -> str:
    p = path or config_path()
    atomic_write_bytes(p, dump_json_bytes(cfg))
    return p

def policy_from_config(cfg: Dict[str, Any]) -> PasswordPolicy:
    """
    Build the length policy from config values.
    Raises ValueError for non-integer or unsatisfiable settings.
    """
    values = {}
    for name in ("min_length", "max_length", "readable_symbols"):
        raw = cfg.get(name, DEFAULTS[name])
        try:
            values[name] = int(raw)
        except (TypeError, ValueError) as e:
            raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    return PasswordPolicy(**values)

from __future__ import annotations
import os
import json
import logging
from typing import Any, Dict
from pathlib import Path
import copy

logger = logging.getLogger(__name__)

_DEFAULTS: Dict[str, Any] = {
    "log_level": "INFO",
    "provider": "apple_music",
    "backend": {
        "base_url": "https://timedeck-api.onrender.com",
        "timeout_seconds": 15,
    },
    "providers": {
        "apple_music": {
            "api_base": "https://api.music.apple.com/v1",
            "user_token": None,
            "search_timeout": 15,
            "create_timeout": 30,
            "commit_timeout": 30,
            "rate_limit_retries": 0,
        },
        "youtube": {
            "api_base": "https://www.googleapis.com/youtube/v3",
            "access_token": None,
            "region_code": "US",
            "privacy_status": "private",
            "search_timeout": 15,
            "create_timeout": 30,
            "commit_timeout": 30,
            "rate_limit_retries": 0,
        },
    },
    "export": {
        "pacing_seconds": 0.2,  # fixed pause between catalog searches
        "description": "Created with TapeDeck",
        "progress_interval": 10,
    },
}

# Config keys holding secrets; redacted by `tapedeck config --redact`
SECRET_KEYS = ("user_token", "access_token")


def validate_provider_selection(cfg: Dict[str, Any]) -> str:
    """Validate the selected provider and return its name.

    Exactly one provider is used per run; it is chosen by the top-level
    ``provider`` key and must be registered and have a config section.

    Args:
        cfg: Configuration dictionary

    Returns:
        str: The name of the selected provider

    Raises:
        ValueError: If the provider is unknown or its section is missing
    """
    from .providers import available_provider_instances

    name = cfg.get('provider')
    if not name:
        raise ValueError(
            "No provider selected. "
            "Please set TAPEDECK__PROVIDER (e.g., apple_music or youtube)"
        )
    available = available_provider_instances()
    if name not in available:
        raise ValueError(f"Unknown provider '{name}'. Available: {', '.join(available)}")
    providers = cfg.get('providers', {})
    if not isinstance(providers.get(name), dict):
        raise ValueError(
            f"Provider '{name}' selected but no providers.{name} section configured. "
            f"Please set TAPEDECK__PROVIDERS__{name.upper()}__..."
        )
    logger.debug(f"Using provider: {name}")
    return name


def deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Merge dict b into a (shallow copies) returning new dict.
    Nested dicts are merged recursively; other values override.
    """
    result = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = deep_merge(result[k], v)  # type: ignore[arg-type]
        else:
            result[k] = v
    return result


def _load_dotenv(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    if not path.exists():
        return values
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, val = line.split('=', 1)
        key = key.strip()
        val = val.strip()
        # Strip inline comments starting with # unless inside quotes
        if '#' in val:
            in_single = False
            in_double = False
            result_chars = []
            for ch in val:
                if ch == "'" and not in_double:
                    in_single = not in_single
                elif ch == '"' and not in_single:
                    in_double = not in_double
                if ch == '#' and not in_single and not in_double:
                    break
                result_chars.append(ch)
            val = ''.join(result_chars).rstrip()
        # Remove wrapping quotes if present
        if (val.startswith('"') and val.endswith('"')) or (val.startswith("'") and val.endswith("'")):
            if len(val) >= 2:
                val = val[1:-1]
        if key:
            values[key] = val
    return values


def load_config(overrides: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Load configuration merging defaults <- .env <- environment <- overrides.

    During test runs (detected via PYTEST_CURRENT_TEST) .env loading is skipped
    unless TAPEDECK_ENABLE_DOTENV=1 is set to allow deterministic defaults.

    Args:
        overrides: Dict of values to deep-merge last (primarily for tests).

    Returns:
        dict: Configuration dictionary (for typed access use load_typed_config()).
    """
    dotenv_values: Dict[str, str] = {}
    if os.environ.get('TAPEDECK_ENABLE_DOTENV') or not os.environ.get('PYTEST_CURRENT_TEST'):
        dotenv_values = _load_dotenv(Path('.env'))
    # Deep copy defaults to avoid cross-call mutation of nested dicts
    cfg: Dict[str, Any] = copy.deepcopy(_DEFAULTS)

    prefix = "TAPEDECK__"
    # Merge .env and real environment (real env wins)
    combined = {**{k: v for k, v in dotenv_values.items() if k.startswith(prefix)},
                **{k: v for k, v in os.environ.items() if k.startswith(prefix)}}
    for raw_key, value in combined.items():
        path_parts = raw_key[len(prefix):].split("__")
        cursor: Dict[str, Any] = cfg
        for part in path_parts[:-1]:
            cursor = cursor.setdefault(part.lower(), {})  # type: ignore[assignment]
        cursor[path_parts[-1].lower()] = coerce_scalar(value)
    if overrides:
        cfg = deep_merge(cfg, overrides)

    # Configure logging based on log_level
    _configure_logging(cfg.get('log_level', 'INFO'))

    return cfg


def load_typed_config(overrides: Dict[str, Any] | None = None):
    """Load configuration as typed AppConfig object.

    Args:
        overrides: Dictionary of override values

    Returns:
        AppConfig: Typed configuration object with .to_dict() for dict conversion
    """
    from .config_types import AppConfig
    dict_config = load_config(overrides)
    return AppConfig.from_dict(dict_config)


def redact_secrets(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return a deep copy of cfg with token values replaced."""
    result = copy.deepcopy(cfg)
    for conf in result.get('providers', {}).values():
        if not isinstance(conf, dict):
            continue
        for key in SECRET_KEYS:
            if conf.get(key):
                conf[key] = '*** redacted ***'
    return result


def _configure_logging(level_str: str) -> None:
    """Configure Python logging based on configured level."""
    level_str = str(level_str).upper()
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL,
    }
    level = level_map.get(level_str, logging.INFO)

    # Configure root logger
    logging.basicConfig(
        level=level,
        format='%(message)s',  # Simple format - just the message
        force=True  # Reconfigure even if already configured
    )


def coerce_scalar(value: str) -> Any:
    txt = value.strip()
    # JSON object or array
    if (txt.startswith('[') and txt.endswith(']')) or (txt.startswith('{') and txt.endswith('}')):
        try:
            return json.loads(txt)
        except ValueError:
            pass  # fall through to scalar heuristics
    lower = txt.lower()
    if lower in {"true", "yes"}:
        return True
    if lower in {"false", "no"}:
        return False
    if lower in {"none", "null"}:
        return None
    # int
    if txt.isdigit() or (txt.startswith("-") and txt[1:].isdigit()):
        return int(txt)
    # float
    try:
        return float(txt)
    except ValueError:
        return txt

__all__ = ["load_config", "deep_merge", "load_typed_config", "validate_provider_selection", "redact_secrets"]

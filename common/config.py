import json
from pathlib import Path
from typing import Dict, Any

from common.logging.logger import get_logger

logger = get_logger("config")

# Centralized default values for all config keys used across the codebase.
# Each entry: (type, default_value)
# Types: str, int, float, bool, None (any)
CONFIG_SCHEMA: Dict[str, tuple] = {
    # Paths
    "paths.logs_dir":                   (str,   "logs"),

    # Entropy estimation
    "entropy.algorithm":                (str,   "compression"),
    "entropy.container":                (str,   "gzip"),
    "entropy.compression_level":        (int,   9),

    # Diagnostic thresholds (defaults mirror scanner.diagnostics constants)
    "diagnostics.dropout_coherence":    (float, 0.25),
    "diagnostics.optimal_lmc":          (float, 1.8),
    "diagnostics.stereotype_entropy":   (float, 0.3),
    "diagnostics.noise_entropy":        (float, 0.85),

    # Scan
    "scan.max_workers":                 (int,   1),

    # Coherence provider
    "provider.backend":                 (str,   "openai"),
    "provider.timeout_seconds":         (float, 30.0),
    "provider.ollama_url":              (str,   "http://localhost:11434"),
    "provider.ollama_model":            (str,   "llama3.2:1b"),

    # LLM
    "llm.model":                        (str,   "gpt-4o-mini"),
    "llm.api_key":                      (str,   None),
}


class Config:
    _instance = None
    _config: Dict[str, Any] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self):
        config_path = Path("config.json")
        if not config_path.exists():
            self._config = {}
            return

        with open(config_path, "r") as f:
            self._config = json.load(f)

        # Ensure directories exist (best-effort, don't fail on inaccessible paths)
        self._ensure_dirs()

    def _ensure_dirs(self):
        paths = self._config.get("paths", {})
        for path in paths.values():
            if isinstance(path, str) and not path.endswith(('db', 'json', 'txt')):
                try:
                    Path(path).mkdir(parents=True, exist_ok=True)
                except OSError:
                    pass  # Skip inaccessible paths (e.g. unmounted volumes)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Gets a config value by dot-separated key.

        Lookup order:
        1. Value from config.json (if present and not None)
        2. Caller-provided default (if not None)
        3. Schema default from CONFIG_SCHEMA
        4. None
        """
        value = self._get_raw(key)

        # If found in config, return it
        if value is not None:
            return value

        # If caller provided an explicit default, use it
        if default is not None:
            return default

        # Fall back to schema default
        schema_entry = CONFIG_SCHEMA.get(key)
        if schema_entry is not None:
            return schema_entry[1]

        return None

    def validate(self) -> list:
        """
        Validates the loaded config against CONFIG_SCHEMA.

        Returns a list of warning strings for type mismatches.
        Does NOT raise -- config.json values always take precedence.
        """
        warnings = []
        for key, (expected_type, _default) in CONFIG_SCHEMA.items():
            if expected_type is None:
                continue
            value = self._get_raw(key)
            if value is None:
                continue
            # ints are acceptable wherever a float threshold is expected
            if expected_type is float and isinstance(value, int) and not isinstance(value, bool):
                continue
            if not isinstance(value, expected_type):
                warnings.append(
                    f"Config '{key}': expected {expected_type.__name__}, "
                    f"got {type(value).__name__} ({value!r})"
                )
        if warnings:
            for w in warnings:
                logger.warning(w)
        return warnings

    def _get_raw(self, key: str) -> Any:
        """Gets value from config.json without schema fallback."""
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return None
            if value is None:
                return None
        return value

    def require(self, key: str) -> Any:
        """
        Requires a config value to be explicitly set in config.json.

        Raises ValueError if missing.
        """
        value = self._get_raw(key)
        if value is None:
            logger.error(f"Missing required config key: {key}")
            raise ValueError(f"Missing required config key: {key}")
        return value


# Global accessor
config = Config()

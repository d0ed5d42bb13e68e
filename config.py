"""
config.py — Server Configuration
================================
Settings for the trace server.  Built from defaults, a YAML file, or
TRACE_* environment variables, then copied into Flask's app.config.

    cfg = AppConfig.from_yaml("trace.yaml")
    app = create_app(cfg)

Example YAML:
    secret_key: change-me
    default_start: 0
    log_level: DEBUG
    port: 8000
"""

import os
import secrets
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Optional

import yaml

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AppConfig:
    """Configuration for the trace server."""

    secret_key:    str  = field(default_factory=lambda: secrets.token_hex(32))
    default_start: int  = 0
    log_level:     str  = "INFO"
    debug:         bool = False
    testing:       bool = False
    host:          str  = "127.0.0.1"
    port:          int  = 5000

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: str) -> "AppConfig":
        """Load configuration from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "AppConfig":
        """Read TRACE_SECRET_KEY, TRACE_DEFAULT_START, TRACE_LOG_LEVEL, … ."""
        env = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        for f in fields(cls):
            raw = env.get(f"TRACE_{f.name.upper()}")
            if raw is None:
                continue
            if f.type in (int, "int"):
                data[f.name] = int(raw)
            elif f.type in (bool, "bool"):
                data[f.name] = raw.strip().lower() in ("1", "true", "yes", "on")
            else:
                data[f.name] = raw
        return cls(**data)

    def validate(self) -> None:
        """Validate configuration."""
        if not self.secret_key:
            raise ValueError("secret_key is required")
        if self.default_start < 0:
            raise ValueError("default_start must be a non-negative vertex id")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        if not (0 < self.port < 65536):
            raise ValueError(f"port out of range: {self.port}")

    def flask_settings(self) -> Dict[str, Any]:
        """The subset Flask reads, under Flask's own key names."""
        return {
            "SECRET_KEY":    self.secret_key,
            "DEBUG":         self.debug,
            "TESTING":       self.testing,
            "DEFAULT_START": self.default_start,
        }

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

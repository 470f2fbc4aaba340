"""
Actor configuration.

Settings may come from a YAML file:

```yaml
filesystem:
  root_dir: /srv/actor-data
  permissions: ["read", "write"]
  log_level: DEBUG
  structured_logging: true
```

or from environment variables (GATED_FS_ROOT, GATED_FS_PERMISSIONS,
GATED_FS_LOG_LEVEL, GATED_FS_STRUCTURED_LOGS). When no permissions are
configured the actor starts with the default read-only set.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class ActorConfig:
    """Configuration for a FilesystemActor.

    Attributes:
        root_dir: Directory request paths are resolved against.
        permissions: Labels granted at initialization. None means the
                     default policy applies.
        log_level: Level for the package loggers.
        structured_logging: Emit single-line JSON log records.
    """

    root_dir: Path = field(default_factory=Path.cwd)
    permissions: list[str] | None = None
    log_level: str = "INFO"
    structured_logging: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ActorConfig:
        """Build config from a settings mapping, validating field types."""
        config = cls()

        if "root_dir" in data:
            if not isinstance(data["root_dir"], str):
                raise ConfigurationError("root_dir", "expected a path string")
            config.root_dir = Path(data["root_dir"]).expanduser()

        permissions = data.get("permissions")
        if permissions is not None:
            if not isinstance(permissions, list) or not all(isinstance(p, str) for p in permissions):
                raise ConfigurationError("permissions", "expected a list of strings")
            config.permissions = list(permissions)

        if "log_level" in data:
            level = str(data["log_level"]).upper()
            if not isinstance(logging.getLevelName(level), int):
                raise ConfigurationError("log_level", f"unknown level {data['log_level']!r}")
            config.log_level = level

        if "structured_logging" in data:
            if not isinstance(data["structured_logging"], bool):
                raise ConfigurationError("structured_logging", "expected a boolean")
            config.structured_logging = data["structured_logging"]

        return config

    @classmethod
    def from_yaml(cls, path: Path) -> ActorConfig:
        """Load the ``filesystem`` section of a YAML settings file.

        A missing or unparseable file yields the defaults.

        Raises:
            ConfigurationError: If a field holds a value of the wrong type.
        """
        if not path.exists():
            return cls()

        try:
            settings = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Could not parse {path}, using defaults: {e}")
            return cls()

        section = settings.get("filesystem", {}) if isinstance(settings, dict) else {}
        if not isinstance(section, dict):
            raise ConfigurationError("filesystem", "expected a mapping")
        return cls.from_dict(section)

    @classmethod
    def from_env(cls) -> ActorConfig:
        """Create config from environment variables."""
        data: dict[str, Any] = {}

        root = os.environ.get("GATED_FS_ROOT")
        if root:
            data["root_dir"] = root

        permissions = os.environ.get("GATED_FS_PERMISSIONS")
        if permissions is not None:
            data["permissions"] = [p.strip() for p in permissions.split(",") if p.strip()]

        level = os.environ.get("GATED_FS_LOG_LEVEL")
        if level:
            data["log_level"] = level

        structured = os.environ.get("GATED_FS_STRUCTURED_LOGS")
        if structured is not None:
            data["structured_logging"] = structured.strip().lower() in _TRUE_VALUES

        return cls.from_dict(data)

    def init_bytes(self) -> bytes | None:
        """Initialization bytes for the actor, None when no permissions are set."""
        if self.permissions is None:
            return None
        return json.dumps({"permissions": self.permissions}).encode("utf-8")

"""Global tctl configuration: registered sources, settings and intents.

Configuration lives in ``$XDG_CONFIG_HOME/tctl`` (falling back to
``~/.config/tctl``)::

    sources.yaml    registered tool directories
    settings.yaml   user settings (default language)

.. code-block:: yaml

    # sources.yaml
    sources:
      - path: /home/me/projects/market/tools
        name: market
        added: 2026-01-12T09:30:00+00:00

Intents are read from a ``state.yaml`` next to each registered source
(in the source directory's parent), so a project keeps its workflows
beside its tools:

.. code-block:: yaml

    # /home/me/projects/market/state.yaml
    intents:
      morning:
        description: Everything the morning report needs
        includes: [prices, signals]

Missing files are not errors. Unparseable YAML and failures writing the
source list raise ``ConfigError``; the CLI reports these and exits 1.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from tctl.core.models import Intent
from tctl.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = "tctl"
SOURCES_FILE = "sources.yaml"
SETTINGS_FILE = "settings.yaml"
STATE_FILE = "state.yaml"


def config_dir() -> Path:
    """Return the tctl config directory (``$XDG_CONFIG_HOME/tctl`` or ``~/.config/tctl``)."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / CONFIG_DIR_NAME
    return Path.home() / ".config" / CONFIG_DIR_NAME


@dataclass
class Source:
    """A registered tool directory."""

    path: str
    name: str = ""
    added: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"path": self.path, "name": self.name}
        if self.added is not None:
            data["added"] = self.added.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Source:
        added = data.get("added")
        if isinstance(added, str):
            try:
                added = datetime.fromisoformat(added)
            except ValueError:
                added = None
        elif not isinstance(added, datetime):
            added = None
        return cls(path=str(data.get("path", "")), name=str(data.get("name") or ""), added=added)


@dataclass
class Settings:
    """User-level settings."""

    default_language: str = "python"


def _read_yaml(path: Path) -> Any:
    """Load a YAML file. Returns None when the file does not exist."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc


def load_intents(path: Path) -> dict[str, Intent]:
    """Read the ``intents`` mapping of one ``state.yaml``.

    Unlike the config files, a broken ``state.yaml`` belongs to a project,
    not to tctl; it is logged and ignored.
    """
    try:
        data = _read_yaml(path)
    except ConfigError:
        logger.warning("Ignoring unreadable intents file: %s", path, exc_info=True)
        return {}
    if not isinstance(data, dict) or not isinstance(data.get("intents"), dict):
        return {}

    intents: dict[str, Intent] = {}
    for name, body in data["intents"].items():
        body = body if isinstance(body, dict) else {}
        includes = body.get("includes") or []
        if not isinstance(includes, list):
            includes = [includes]
        intents[str(name)] = Intent(
            name=str(name),
            description=str(body.get("description") or ""),
            includes=[str(item) for item in includes],
        )
    return intents


@dataclass
class GlobalConfig:
    """The loaded configuration.

    Attributes:
        config_dir: Directory holding the YAML files.
        sources: Registered sources, in registration order.
        settings: User settings.
        intents: Intents merged from every source's ``state.yaml``; later
            sources override earlier ones on name clashes.
    """

    config_dir: Path
    sources: list[Source] = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)
    intents: dict[str, Intent] = field(default_factory=dict)

    @classmethod
    def load(cls, directory: Path | None = None) -> GlobalConfig:
        """Load configuration from ``directory`` (default: :func:`config_dir`).

        Raises:
            ConfigError: A config file exists but cannot be read or parsed.
        """
        directory = directory or config_dir()
        cfg = cls(config_dir=directory)

        sources = _read_yaml(directory / SOURCES_FILE)
        if isinstance(sources, dict):
            for entry in sources.get("sources") or []:
                if isinstance(entry, dict) and entry.get("path"):
                    cfg.sources.append(Source.from_dict(entry))

        settings = _read_yaml(directory / SETTINGS_FILE)
        if isinstance(settings, dict) and settings.get("default_language"):
            cfg.settings.default_language = str(settings["default_language"])

        for source in cfg.sources:
            state_path = Path(source.path).parent / STATE_FILE
            cfg.intents.update(load_intents(state_path))
        return cfg

    def save(self) -> None:
        """Write ``sources.yaml``.

        Raises:
            ConfigError: The directory or file cannot be written.
        """
        payload = {"sources": [s.to_dict() for s in self.sources]}
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            (self.config_dir / SOURCES_FILE).write_text(
                yaml.safe_dump(payload, sort_keys=False), encoding="utf-8",
            )
        except OSError as exc:
            raise ConfigError(f"cannot write {self.config_dir / SOURCES_FILE}: {exc}") from exc

    def add_source(self, path: Path | str, name: str = "") -> Source:
        """Register a directory and persist the change.

        Args:
            path: Directory to register; resolved to an absolute path.
            name: Display name. Defaults to the directory's basename.

        Returns:
            The new ``Source``.

        Raises:
            ConfigError: The path does not exist, is not a directory, is
                already registered, or the config cannot be saved.
        """
        abs_path = Path(path).expanduser().resolve()
        if not abs_path.exists():
            raise ConfigError(f"path does not exist: {abs_path}")
        if not abs_path.is_dir():
            raise ConfigError(f"path is not a directory: {abs_path}")
        if any(s.path == str(abs_path) for s in self.sources):
            raise ConfigError(f"already registered: {abs_path}")

        source = Source(
            path=str(abs_path),
            name=name or abs_path.name,
            added=datetime.now(timezone.utc),
        )
        self.sources.append(source)
        self.save()
        return source

    def remove_source(self, path_or_name: str) -> list[Source]:
        """Unregister every source matching a path or a name, then save.

        Returns:
            The removed sources.

        Raises:
            ConfigError: Nothing matched, or the config cannot be saved.
        """
        abs_path = str(Path(path_or_name).expanduser().resolve())
        removed = [s for s in self.sources if s.path == abs_path or s.name == path_or_name]
        if not removed:
            raise ConfigError(f"not registered: {path_or_name}")
        self.sources = [s for s in self.sources if s not in removed]
        self.save()
        return removed

    def source_paths(self) -> list[Path]:
        """Return every registered path, in registration order."""
        return [Path(s.path) for s in self.sources]

    def find_source(self, name: str) -> Source | None:
        """Return the source with this name, or None."""
        for source in self.sources:
            if source.name == name:
                return source
        return None

    def get_intent(self, name: str) -> Intent | None:
        return self.intents.get(name)

"""
Configuration for printer-reset.

Settings are resolved once at start-up from, in increasing precedence:
built-in defaults, the YAML settings file, environment variables and the
command line. The result is frozen into a CleanupContext that is handed to
the orchestrator, so nothing below the CLI reads ambient process state.
"""

import logging
import os
import tempfile
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from printreset.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".printreset"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

# Per-user printer preferences. Only the children of these keys are removed.
DEFAULT_REGISTRY_LOCATIONS = [
    r"HKCU\Printers\Connections",
    r"HKCU\Printers\DevModePerUser",
    r"HKCU\Printers\DevModes2",
    r"HKCU\Printers\Settings",
    r"HKCU\Software\Microsoft\Windows NT\CurrentVersion\Devices",
    r"HKCU\Software\Microsoft\Windows NT\CurrentVersion\PrinterPorts",
]

ENV_BACKUP_DIR = "PRINTRESET_BACKUP_DIR"
ENV_SETTLE_DELAY = "PRINTRESET_SETTLE_DELAY"


@dataclass(frozen=True)
class ResetOptions:
    """The three switches accepted on the command line."""

    remove_all_printers: bool = False
    force: bool = False
    user_level_only: bool = False


@dataclass
class Settings:
    """Tunable settings, loadable from ~/.printreset/config.yaml.

    Attributes:
        registry_locations: User registry keys whose children are cleared
        name_pattern: Case-insensitive substring selecting recent/temp items
        spooler_service: Service name of the print spooler
        settle_delay: Seconds to wait after the spooler restarts
        alternate_driver_environment: Environment used for the driver removal
            retry when the driver does not report its own
        backup_dir: Where registry exports are written (system temp if unset)
        command_timeout: Optional timeout in seconds for external commands
    """

    registry_locations: List[str] = field(
        default_factory=lambda: list(DEFAULT_REGISTRY_LOCATIONS)
    )
    name_pattern: str = "print"
    spooler_service: str = "Spooler"
    settle_delay: float = 3.0
    alternate_driver_environment: str = "Windows x64"
    backup_dir: Optional[str] = None
    command_timeout: Optional[float] = None

    def __post_init__(self):
        if self.settle_delay < 0:
            raise ConfigError("settle_delay must be non-negative")
        if self.command_timeout is not None and self.command_timeout <= 0:
            raise ConfigError("command_timeout must be positive")
        if not self.name_pattern:
            raise ConfigError("name_pattern must not be empty")
        if not self.spooler_service:
            raise ConfigError("spooler_service must not be empty")
        if isinstance(self.registry_locations, str):
            raise ConfigError("registry_locations must be a list of key paths")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Create from a dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown setting(s): {', '.join(unknown)}")
        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigError(str(e)) from e


def load_settings(
    path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None
) -> Settings:
    """Load settings from the YAML file and environment.

    Args:
        path: Explicit settings file. When given it must exist; the default
            location is optional.
        environ: Environment mapping, defaults to os.environ

    Returns:
        Settings with file and environment overrides applied

    Raises:
        ConfigError: If the file is unreadable or holds invalid values
    """
    environ = os.environ if environ is None else environ
    config_path = Path(path) if path else CONFIG_FILE

    data: Dict[str, Any] = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read {config_path}: {e}") from e
        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError(f"{config_path} must contain a mapping")
        data = loaded or {}
        logger.debug(f"Loaded settings from {config_path}")
    elif path:
        raise ConfigError(f"Settings file not found: {config_path}")

    settings = Settings.from_dict(data)

    if environ.get(ENV_BACKUP_DIR):
        settings = replace(settings, backup_dir=environ[ENV_BACKUP_DIR])
    if environ.get(ENV_SETTLE_DELAY):
        try:
            delay = float(environ[ENV_SETTLE_DELAY])
        except ValueError as e:
            raise ConfigError(f"{ENV_SETTLE_DELAY} must be a number") from e
        settings = replace(settings, settle_delay=delay)

    return settings


@dataclass(frozen=True)
class CleanupContext:
    """Everything a run needs, resolved up front.

    Attributes:
        options: Switches from the command line
        settings: Loaded settings
        is_admin: Whether the caller holds administrative rights
        recent_dir: The user's Recent Items folder
        temp_dirs: User temp folders, de-duplicated
        spool_dir: The spooler queue directory
        backup_dir: Where registry backups are written
    """

    options: ResetOptions
    settings: Settings
    is_admin: bool
    recent_dir: Path
    temp_dirs: tuple
    spool_dir: Path
    backup_dir: Path

    @property
    def user_level_only(self) -> bool:
        return self.options.user_level_only or not self.is_admin

    @classmethod
    def build(
        cls,
        options: ResetOptions,
        settings: Optional[Settings] = None,
        is_admin: bool = False,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "CleanupContext":
        """Resolve user and system paths from the environment."""
        environ = os.environ if environ is None else environ
        settings = settings or Settings()
        home = Path(environ.get("USERPROFILE") or Path.home())

        appdata = Path(environ.get("APPDATA") or home / "AppData" / "Roaming")
        local_appdata = Path(environ.get("LOCALAPPDATA") or home / "AppData" / "Local")
        system_root = Path(environ.get("SystemRoot") or environ.get("SYSTEMROOT") or r"C:\Windows")

        temp_dirs: List[Path] = []
        seen = set()
        for candidate in (environ.get("TEMP"), environ.get("TMP"), local_appdata / "Temp"):
            if not candidate:
                continue
            key = os.path.normcase(os.path.normpath(str(candidate)))
            if key not in seen:
                seen.add(key)
                temp_dirs.append(Path(candidate))

        backup_dir = Path(settings.backup_dir) if settings.backup_dir else Path(tempfile.gettempdir())

        return cls(
            options=options,
            settings=settings,
            is_admin=is_admin,
            recent_dir=appdata / "Microsoft" / "Windows" / "Recent",
            temp_dirs=tuple(temp_dirs),
            spool_dir=system_root / "System32" / "spool" / "PRINTERS",
            backup_dir=backup_dir,
        )

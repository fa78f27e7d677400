"""Configuration loader for weeknotes.toml."""

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Any

from .core.frontmatter import property_line

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore


class ConfigError(ValueError):
    """A configuration value is missing, empty or of the wrong type."""


@dataclass
class VaultConfig:
    """Vault location and editor."""
    root: Path = Path("./vault")
    editor: str | None = None


@dataclass
class DailyConfig:
    """Daily note settings."""
    template: str = "Templates/Daily Template.md"
    filename: str = "{{date}}.md"
    date_format: str = "YYYY-MM-DD"


@dataclass
class WeeklyConfig:
    """Weekly note settings."""
    template: str = "Templates/Weekly Template.md"
    filename: str = "WO{{woy}}.md"
    start_date_format: str = "YYYY-MM-DD"


@dataclass
class WeekMarkConfig:
    """Week tag and week frontmatter property, applied to both note kinds."""
    add_tag: bool = False
    tag_prefix: str = "week-"
    add_property: bool = False
    property_name: str = "week"


@dataclass
class NotesConfig:
    """Everything the note resolver needs."""
    folder: str = "Calendar"
    daily: DailyConfig = field(default_factory=DailyConfig)
    weekly: WeeklyConfig = field(default_factory=WeeklyConfig)
    week: WeekMarkConfig = field(default_factory=WeekMarkConfig)

    def validate(self) -> None:
        """Raise ConfigError if a required setting is empty or unusable."""
        required = {
            "notes.folder": self.folder,
            "daily.filename": self.daily.filename,
            "daily.date_format": self.daily.date_format,
            "weekly.filename": self.weekly.filename,
            "weekly.start_date_format": self.weekly.start_date_format,
        }
        if self.week.add_tag:
            required["week.tag_prefix"] = self.week.tag_prefix
        if self.week.add_property:
            required["week.property_name"] = self.week.property_name

        for key, value in required.items():
            if not value.strip():
                raise ConfigError(f"Setting '{key}' must not be empty")

        self._validate_folder()

        if self.week.add_property:
            try:
                property_line(self.week.property_name, 53)
            except ValueError as e:
                raise ConfigError(f"Setting 'week.property_name': {e}") from e

    def _validate_folder(self) -> None:
        """The notes folder must name a folder inside the vault."""
        folder = self.folder.strip()
        if not folder.strip("/"):
            raise ConfigError("Setting 'notes.folder' must name a folder inside the vault")
        if PurePosixPath(folder).is_absolute() or PureWindowsPath(folder).drive:
            raise ConfigError(f"Setting 'notes.folder' must be relative to the vault, got {self.folder!r}")
        if ".." in PurePosixPath(folder.replace("\\", "/")).parts:
            raise ConfigError(f"Setting 'notes.folder' must not contain '..', got {self.folder!r}")


@dataclass
class WeeknotesConfig:
    """Complete weeknotes configuration."""
    vault: VaultConfig
    notes: NotesConfig


def _table(data: dict[str, Any], name: str) -> dict[str, Any]:
    table = data.get(name, {})
    if not isinstance(table, dict):
        raise ConfigError(f"[{name}] must be a table")
    return table


def _get(
    table: dict[str, Any], section: str, key: str, default: Any, expected: type | None = None
) -> Any:
    if key not in table:
        return default
    value = table[key]
    if expected is None:
        expected = bool if isinstance(default, bool) else str
    if not isinstance(value, expected):
        raise ConfigError(
            f"Setting '{section}.{key}' must be a {expected.__name__}, got {value!r}"
        )
    return value


def load_config(config_path: Path | None = None, vault_path: Path | None = None) -> WeeknotesConfig:
    """
    Load configuration from weeknotes.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/weeknotes.toml
    3. vault_path/weeknotes.toml

    Every key that is absent keeps its default, so a file may set a single
    value and inherit the rest.

    Args:
        config_path: Explicit path to config file
        vault_path: Vault root path for fallback search

    Returns:
        WeeknotesConfig with resolved settings

    Raises:
        ConfigError: if a value has the wrong type or a required one is empty
    """
    toml_data: dict[str, Any] = {}

    # Search for config file
    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / "weeknotes.toml")
    if vault_path:
        search_paths.append(vault_path / "weeknotes.toml")

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    # Parse vault config
    vault_data = _table(toml_data, "vault")
    vault_root = _get(vault_data, "vault", "root", vault_path or VaultConfig.root, str)
    vault_config = VaultConfig(
        root=Path(vault_root),
        editor=_get(vault_data, "vault", "editor", None, str),
    )

    # Parse note configs
    notes_data = _table(toml_data, "notes")
    daily_data = _table(toml_data, "daily")
    weekly_data = _table(toml_data, "weekly")
    week_data = _table(toml_data, "week")

    daily_defaults = DailyConfig()
    daily_config = DailyConfig(
        template=_get(daily_data, "daily", "template", daily_defaults.template),
        filename=_get(daily_data, "daily", "filename", daily_defaults.filename),
        date_format=_get(daily_data, "daily", "date_format", daily_defaults.date_format),
    )

    weekly_defaults = WeeklyConfig()
    weekly_config = WeeklyConfig(
        template=_get(weekly_data, "weekly", "template", weekly_defaults.template),
        filename=_get(weekly_data, "weekly", "filename", weekly_defaults.filename),
        start_date_format=_get(
            weekly_data, "weekly", "start_date_format", weekly_defaults.start_date_format
        ),
    )

    week_defaults = WeekMarkConfig()
    week_config = WeekMarkConfig(
        add_tag=_get(week_data, "week", "add_tag", week_defaults.add_tag),
        tag_prefix=_get(week_data, "week", "tag_prefix", week_defaults.tag_prefix),
        add_property=_get(week_data, "week", "add_property", week_defaults.add_property),
        property_name=_get(week_data, "week", "property_name", week_defaults.property_name),
    )

    notes_config = NotesConfig(
        folder=_get(notes_data, "notes", "folder", NotesConfig.folder),
        daily=daily_config,
        weekly=weekly_config,
        week=week_config,
    )
    notes_config.validate()

    return WeeknotesConfig(
        vault=vault_config,
        notes=notes_config,
    )

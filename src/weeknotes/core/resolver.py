"""Create-or-open for daily and weekly notes."""

import logging
from datetime import date, datetime, timedelta

from ..config import NotesConfig
from .calendar import as_calendar_date, week_info
from .frontmatter import inject_property, property_line
from .model import NOTE_KINDS, NoteKind, PlaceholderMap, Resolution, WeekInfo
from .placeholders import DATE, build_placeholders, ensure_extension, substitute
from .ports import NoteStorage

logger = logging.getLogger(__name__)


def target_date(target: date | datetime | None = None, tomorrow: bool = False) -> date:
    """Calendar date a request refers to; "tomorrow" is one day after the target."""
    day = as_calendar_date(target if target is not None else datetime.now())
    if tomorrow:
        day += timedelta(days=1)
    return day


def note_filename(kind: NoteKind, config: NotesConfig, placeholders: PlaceholderMap) -> str:
    fmt = config.weekly.filename if kind == "weekly" else config.daily.filename
    return ensure_extension(substitute(fmt, placeholders))


def fallback_body(kind: NoteKind, week: WeekInfo, placeholders: PlaceholderMap) -> str:
    if kind == "weekly":
        return f"# Weekly Note WO{week.week_number}\n\n"
    return f"# Daily Note {placeholders[DATE]}\n\n"


def _read_template(storage: NoteStorage, path: str) -> str | None:
    try:
        return storage.read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Template not available at '%s' (%s); using a minimal note", path, e)
        return None


def render_body(
    kind: NoteKind,
    template: str | None,
    config: NotesConfig,
    week: WeekInfo,
    placeholders: PlaceholderMap,
) -> str:
    """
    Build the body of a new note from its template (or the fallback title),
    then add the week property and week tag if enabled.
    """
    body = template if template is not None else fallback_body(kind, week, placeholders)
    body = substitute(body, placeholders)

    if config.week.add_property:
        line = property_line(config.week.property_name, week.week_number)
        body = inject_property(body, line)

    if config.week.add_tag:
        body += f"\n\n#{config.week.tag_prefix}{week.week_number}"

    return body


def resolve_note(
    storage: NoteStorage,
    config: NotesConfig,
    kind: NoteKind,
    target: date | datetime | None = None,
    *,
    tomorrow: bool = False,
    open_note: bool = True,
) -> Resolution:
    """
    Open the note of the given kind for a date, creating it first if needed.

    Storage is touched in order: existence check, then (only for a new note)
    folder creation, template read and file creation. A missing or unreadable
    template falls back to a one-line title. The settings are validated
    first (ConfigError). Errors from creating the folder or the file
    propagate; if the note appeared since the existence check, create_text
    raises FileExistsError.

    Args:
        storage: Vault storage
        config: Note settings for this call
        kind: "daily" or "weekly"
        target: Date of the note (default: today)
        tomorrow: Use the day after target
        open_note: Hand the resulting path to storage.open_for_editing

    Returns:
        Resolution with the vault-relative path and whether it was created
    """
    if kind not in NOTE_KINDS:
        raise ValueError(f"Unknown note kind: {kind}")
    config.validate()

    day = target_date(target, tomorrow=tomorrow)
    week = week_info(day)
    placeholders = build_placeholders(
        day, config.daily.date_format, config.weekly.start_date_format
    )

    folder = config.folder.rstrip("/")
    path = f"{folder}/{note_filename(kind, config, placeholders)}"

    if storage.note_exists(path):
        logger.info("Note '%s' already exists; opening it", path)
        resolution = Resolution(path=path, created=False, kind=kind, day=day, week=week)
    else:
        if not storage.folder_exists(folder):
            logger.info("Folder '%s' does not exist; creating it", folder)
            storage.create_folder(folder)

        template_path = config.weekly.template if kind == "weekly" else config.daily.template
        template = _read_template(storage, template_path)
        body = render_body(kind, template, config, week, placeholders)

        created_path = storage.create_text(path, body)
        logger.info("Created note '%s'", created_path)
        resolution = Resolution(path=created_path, created=True, kind=kind, day=day, week=week)

    if open_note:
        storage.open_for_editing(resolution.path)
    return resolution


def weekly_note(
    storage: NoteStorage, config: NotesConfig, target: date | datetime | None = None, **kwargs
) -> Resolution:
    return resolve_note(storage, config, "weekly", target, **kwargs)


def daily_note(
    storage: NoteStorage, config: NotesConfig, target: date | datetime | None = None, **kwargs
) -> Resolution:
    return resolve_note(storage, config, "daily", target, **kwargs)


def tomorrow_note(
    storage: NoteStorage, config: NotesConfig, today: date | datetime | None = None, **kwargs
) -> Resolution:
    return resolve_note(storage, config, "daily", today, tomorrow=True, **kwargs)

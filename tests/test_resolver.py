"""Tests for creating and opening daily and weekly notes."""

import logging
from datetime import date, datetime, timedelta, timezone

import pytest

from weeknotes.adapters.memory_storage import MemoryStorage
from weeknotes.config import ConfigError, NotesConfig
from weeknotes.core.resolver import (
    daily_note,
    resolve_note,
    target_date,
    tomorrow_note,
    weekly_note,
)


class RecordingStorage(MemoryStorage):
    """MemoryStorage that records the order of storage calls."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls: list[str] = []

    def folder_exists(self, path):
        self.calls.append("folder_exists")
        return super().folder_exists(path)

    def create_folder(self, path):
        self.calls.append("create_folder")
        return super().create_folder(path)

    def note_exists(self, path):
        self.calls.append("note_exists")
        return super().note_exists(path)

    def read_text(self, path):
        self.calls.append("read_text")
        return super().read_text(path)

    def create_text(self, path, content):
        self.calls.append("create_text")
        return super().create_text(path, content)


@pytest.fixture
def config():
    return NotesConfig()


def test_weekly_note_from_template(config):
    """Test creating a weekly note with placeholders filled in."""
    storage = MemoryStorage({
        "Templates/Weekly Template.md": "# Week {{woy}} ({{week_of_year}})\n\nStarts {{wsd}}\n",
    })

    res = weekly_note(storage, config, date(2024, 3, 5))

    assert res.path == "Calendar/WO10.md"
    assert res.created is True
    assert res.kind == "weekly"
    assert res.week.week_number == 10
    assert res.week.week_start == date(2024, 3, 4)
    assert storage.files["Calendar/WO10.md"] == "# Week 10 (10)\n\nStarts 2024-03-04\n"
    assert storage.folder_exists("Calendar")
    assert storage.opened == ["Calendar/WO10.md"]


def test_daily_note_from_template(config):
    """Test creating a daily note; week placeholders are available too."""
    storage = MemoryStorage({
        "Templates/Daily Template.md": "# {{date}}\n\nWeek {{woy}}, started {{week_start_date}}",
    })

    res = daily_note(storage, config, date(2024, 3, 5))

    assert res.path == "Calendar/2024-03-05.md"
    assert storage.files[res.path] == "# 2024-03-05\n\nWeek 10, started 2024-03-04"


def test_weekly_fallback_body(config):
    """Test the minimal weekly note when the template is missing."""
    storage = MemoryStorage()

    res = weekly_note(storage, config, date(2024, 3, 5))

    assert storage.files[res.path] == "# Weekly Note WO10\n\n"


def test_daily_fallback_body(config):
    """Test the minimal daily note when the template is missing."""
    config.daily.date_format = "dddd, MMMM D"
    storage = MemoryStorage()

    res = daily_note(storage, config, date(2024, 3, 5))

    assert res.path == "Calendar/Tuesday, March 5.md"
    assert storage.files[res.path] == "# Daily Note Tuesday, March 5\n\n"


def test_missing_template_is_logged(config, caplog):
    """Test that a missing template is reported as a warning only."""
    storage = MemoryStorage()

    with caplog.at_level(logging.WARNING, logger="weeknotes.core.resolver"):
        res = weekly_note(storage, config, date(2024, 3, 5))

    assert res.created is True
    assert "Templates/Weekly Template.md" in caplog.text


def test_existing_note_is_opened_unchanged(config):
    """Test that an existing note is opened without writing."""
    storage = RecordingStorage({"Calendar/WO10.md": "my notes"})

    res = weekly_note(storage, config, date(2024, 3, 5))

    assert res.created is False
    assert res.path == "Calendar/WO10.md"
    assert storage.files["Calendar/WO10.md"] == "my notes"
    assert storage.calls == ["note_exists"]
    assert storage.opened == ["Calendar/WO10.md"]


def test_storage_call_order(config):
    """Test the existence check runs before folder, template and file calls."""
    storage = RecordingStorage()

    weekly_note(storage, config, date(2024, 3, 5))

    assert storage.calls == [
        "note_exists",
        "folder_exists",
        "create_folder",
        "read_text",
        "create_text",
    ]


def test_existing_folder_not_recreated(config):
    """Test that an existing folder is left alone."""
    storage = RecordingStorage(folders={"Calendar"})

    weekly_note(storage, config, date(2024, 3, 5))

    assert "create_folder" not in storage.calls


def test_tomorrow_across_week_boundary(config):
    """Test that tomorrow is computed before week arithmetic."""
    storage = MemoryStorage({"Templates/Daily Template.md": "week {{woy}} from {{wsd}}"})

    res = tomorrow_note(storage, config, date(2024, 12, 29))

    assert res.day == date(2024, 12, 30)
    assert res.week.week_number == 1
    assert res.path == "Calendar/2024-12-30.md"
    assert storage.files[res.path] == "week 1 from 2024-12-30"


def test_tomorrow_from_week_one_monday(config):
    """Test tomorrow from 2024-12-30 resolves 2024-12-31."""
    res = tomorrow_note(MemoryStorage(), config, date(2024, 12, 30))

    assert res.day == date(2024, 12, 31)
    assert res.week.week_number == 1
    assert res.week.week_start == date(2024, 12, 30)


def test_target_date():
    """Test target date resolution."""
    assert target_date(date(2024, 2, 28), tomorrow=True) == date(2024, 2, 29)
    assert target_date(date(2024, 12, 31), tomorrow=True) == date(2025, 1, 1)
    aware = datetime(2024, 12, 31, 23, 30, tzinfo=timezone(timedelta(hours=-8)))
    assert target_date(aware) == date(2024, 12, 31)
    assert target_date() == date.today()


def test_week_property_and_tag(config):
    """Test the week property and week tag on a templated note."""
    config.week.add_property = True
    config.week.add_tag = True
    storage = MemoryStorage({
        "Templates/Weekly Template.md": "---\ntitle: Week {{woy}}\n---\nBody",
    })

    res = weekly_note(storage, config, date(2024, 3, 5))

    assert storage.files[res.path] == "---\ntitle: Week 10\nweek: 10\n---\nBody\n\n#week-10"


def test_week_property_on_fallback_body(config):
    """Test the week property on a note without frontmatter."""
    config.week.add_property = True
    config.week.property_name = "currentWeek"

    storage = MemoryStorage()

    res = daily_note(storage, config, date(2024, 3, 5))

    assert storage.files[res.path] == "---\ncurrentWeek: 10\n---\n\n# Daily Note 2024-03-05\n\n"


def test_custom_filename_gets_extension(config):
    """Test that a filename format without extension gets .md."""
    config.weekly.filename = "Week of {{week_start_date}}"
    config.folder = "Journal/Weeks/"

    res = weekly_note(MemoryStorage(), config, date(2024, 3, 5))

    assert res.path == "Journal/Weeks/Week of 2024-03-04.md"


def test_open_note_disabled(config):
    """Test that open_note=False does not open the note."""
    storage = MemoryStorage()

    weekly_note(storage, config, date(2024, 3, 5), open_note=False)

    assert storage.opened == []


def test_folder_creation_failure_propagates(config):
    """Test that a folder creation error ends the request."""

    class ReadOnlyStorage(MemoryStorage):
        def create_folder(self, path):
            raise PermissionError(f"Read-only: {path}")

    storage = ReadOnlyStorage()

    with pytest.raises(PermissionError):
        weekly_note(storage, config, date(2024, 3, 5))

    assert storage.files == {}
    assert storage.opened == []


def test_creation_conflict_propagates(config):
    """Test that a note created concurrently is reported, not overwritten."""

    class RacingStorage(MemoryStorage):
        def note_exists(self, path):
            return False

    storage = RacingStorage({"Calendar/WO10.md": "written by someone else"})

    with pytest.raises(FileExistsError):
        weekly_note(storage, config, date(2024, 3, 5))

    assert storage.files["Calendar/WO10.md"] == "written by someone else"


def test_unknown_kind(config):
    """Test that an unknown note kind is rejected."""
    with pytest.raises(ValueError):
        resolve_note(MemoryStorage(), config, "monthly", date(2024, 3, 5))  # type: ignore[arg-type]


def test_folder_outside_vault_rejected_before_storage(config):
    """Test that an unusable notes folder fails before any storage call."""
    config.folder = "/"
    storage = RecordingStorage()

    with pytest.raises(ConfigError):
        weekly_note(storage, config, date(2024, 3, 5))

    assert storage.calls == []


def test_memory_overlay_reads_base_and_writes_nothing(config):
    """Test that an overlay renders from the base vault without touching it."""
    base = MemoryStorage({"Templates/Weekly Template.md": "# Week {{woy}}"})
    overlay = MemoryStorage(base=base)

    res = weekly_note(overlay, config, date(2024, 3, 5), open_note=False)

    assert res.created is True
    assert overlay.files[res.path] == "# Week 10"
    assert base.files == {"Templates/Weekly Template.md": "# Week {{woy}}"}
    assert not base.folder_exists("Calendar")


def test_memory_overlay_sees_existing_note(config):
    """Test that a note present in the base vault is reported as existing."""
    base = MemoryStorage({"Calendar/WO10.md": "kept"})
    overlay = MemoryStorage(base=base)

    res = weekly_note(overlay, config, date(2024, 3, 5), open_note=False)

    assert res.created is False
    assert overlay.files == {}

"""Runtime wiring helper for CLI applications."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.fs_storage import FsStorage
from .config import WeeknotesConfig, load_config
from .core.ports import NoteStorage


@dataclass
class Runtime:
    """Container for all wired components."""
    storage: NoteStorage
    config: WeeknotesConfig


def build_runtime(
    vault_path: Path | None = None,
    config_path: Path | None = None,
) -> Runtime:
    """Build and wire all components for a vault."""
    # Load configuration
    config = load_config(config_path=config_path, vault_path=vault_path)

    # Use config values if CLI args not provided
    if vault_path is None:
        vault_path = config.vault.root

    storage = FsStorage(vault_path, editor=config.vault.editor)

    return Runtime(
        storage=storage,
        config=config,
    )

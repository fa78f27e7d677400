import logging
import os
import shlex
import subprocess
from pathlib import Path, PurePosixPath

from ..core.ports import NoteStorage

logger = logging.getLogger(__name__)


class FsStorage(NoteStorage):
    def __init__(self, root: Path, editor: str | None = None):
        self.root = root
        self.editor = editor

    def _path(self, path: str) -> Path:
        p = self.root.joinpath(*PurePosixPath(path).parts)
        root = self.root.resolve()
        resolved = p.resolve()
        if resolved != root and root not in resolved.parents:
            raise ValueError(f"Path escapes the vault: {path}")
        return p

    def folder_exists(self, path: str) -> bool:
        return self._path(path).is_dir()

    def create_folder(self, path: str) -> None:
        self._path(path).mkdir(parents=True, exist_ok=True)

    def note_exists(self, path: str) -> bool:
        return self._path(path).is_file()

    def read_text(self, path: str) -> str:
        # utf-8-sig drops a leading byte-order mark so "---" is seen on line one
        return self._path(path).read_text(encoding="utf-8-sig")

    def create_text(self, path: str, content: str) -> str:
        # "x" fails if the file exists; a missing parent raises FileNotFoundError
        with open(self._path(path), "x", encoding="utf-8") as f:
            f.write(content)
        return path

    def open_for_editing(self, path: str) -> None:
        editor = self.editor or os.environ.get("EDITOR", "vi")
        cmd = shlex.split(editor) + [str(self._path(path))]
        try:
            subprocess.run(cmd)
        except OSError as e:
            logger.warning("Could not start editor '%s': %s", editor, e)

from posixpath import dirname

from ..core.ports import NoteStorage


class MemoryStorage(NoteStorage):
    """
    Dict-backed storage. With a base storage it becomes a write-nothing
    overlay for dry runs: lookups and reads fall through to the base, while
    created folders and files stay in memory.
    """

    def __init__(
        self,
        files: dict[str, str] | None = None,
        folders: set[str] | None = None,
        base: NoteStorage | None = None,
    ):
        self.files: dict[str, str] = dict(files or {})
        self.folders: set[str] = set(folders or ())
        self.base = base
        for path in self.files:
            self._add_parents(path)
        self.opened: list[str] = []

    def _add_parents(self, path: str) -> None:
        parent = dirname(path)
        while parent:
            self.folders.add(parent)
            parent = dirname(parent)

    def _has_folder(self, path: str) -> bool:
        if path in self.folders:
            return True
        return self.base is not None and self.base.folder_exists(path)

    def folder_exists(self, path: str) -> bool:
        return self._has_folder(path)

    def create_folder(self, path: str) -> None:
        if self._has_file(path):
            raise FileExistsError(f"A file already exists at: {path}")
        self.folders.add(path)
        self._add_parents(path)

    def _has_file(self, path: str) -> bool:
        if path in self.files:
            return True
        return self.base is not None and self.base.note_exists(path)

    def note_exists(self, path: str) -> bool:
        return self._has_file(path)

    def read_text(self, path: str) -> str:
        if path in self.files:
            return self.files[path]
        if self.base is not None:
            return self.base.read_text(path)
        raise FileNotFoundError(f"No such file: {path}")

    def create_text(self, path: str, content: str) -> str:
        if self._has_file(path):
            raise FileExistsError(f"File already exists: {path}")
        parent = dirname(path)
        if parent and not self._has_folder(parent):
            raise FileNotFoundError(f"Parent folder does not exist: {parent}")
        self.files[path] = content
        return path

    def open_for_editing(self, path: str) -> None:
        self.opened.append(path)

from typing import Protocol


class NoteStorage(Protocol):
    """
    Vault storage seen by the resolver. Paths are vault-relative and use "/"
    as separator ("Calendar/WO5.md").
    """

    def folder_exists(self, path: str) -> bool:
        pass

    def create_folder(self, path: str) -> None:
        """Create the folder (and parents). Raises OSError on failure."""
        pass

    def note_exists(self, path: str) -> bool:
        pass

    def read_text(self, path: str) -> str:
        """Raises OSError or UnicodeDecodeError if path is not a readable text file."""
        pass

    def create_text(self, path: str, content: str) -> str:
        """
        Create a new file and return its path. Raises FileExistsError if the
        path is taken and FileNotFoundError if the parent folder is missing.
        """
        pass

    def open_for_editing(self, path: str) -> None:
        pass

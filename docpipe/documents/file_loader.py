import mimetypes
from pathlib import Path

from docpipe.documents.models import FileDescriptor


class FileLoader:
    """Reads files from disk into FileDescriptors."""

    def load(self, path: Path) -> FileDescriptor:
        """Read file bytes and detect the media kind.

        Raises:
            FileNotFoundError: if the file does not exist.
        """
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        mime_type, _ = mimetypes.guess_type(path.name)
        return FileDescriptor.from_bytes(path.name, path.read_bytes(), mime_type)

    def load_many(self, paths: list[Path]) -> list[FileDescriptor]:
        return [self.load(path) for path in paths]

from pathlib import Path

from app.tasks.exceptions import TaskInputError


class FileLoader:
    """Resolves stored document paths and reads their bytes.

    Relative storage paths are taken relative to the configured storage
    directory; absolute paths are used as they are.
    """

    def __init__(self, storage_dir: Path) -> None:
        self._storage_dir = storage_dir

    def resolve(self, storage_path: str) -> Path:
        path = Path(storage_path)
        if path.is_absolute():
            return path
        return self._storage_dir / path

    def load(self, storage_path: str | None) -> bytes:
        """Read document bytes from disk.

        Raises:
            TaskInputError: if no path is given or nothing exists at it.
        """
        if not storage_path:
            raise TaskInputError(f"File not found at path: {storage_path}")
        path = self.resolve(storage_path)
        if not path.is_file():
            raise TaskInputError(f"File not found at path: {storage_path}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise TaskInputError(f"Could not read file at path: {storage_path}: {exc}") from exc

"""
Folder to JSON conversion.

Builds the nested representation uploaded when a new document is created:

    {"type": "folder", "name": "src", "content": [
        {"type": "file", "name": "main.py", "content": "..."},
        {"type": "folder", "name": "utils", "content": [...]},
    ]}

Hidden entries, dependency/build directories, symlinked directories, binary
files and very large files are skipped. Children are sorted by name so the
same tree always produces the same payload.
"""

import logging
from pathlib import Path
from typing import Any

from polyfact.docs.errors import FolderConversionError

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_DIRS = {
    "node_modules",
    "__pycache__",
    "venv",
    "env",
    "build",
    "dist",
    "target",
    "coverage",
    "site",
    "_build",
    "docs",
}

# Files above this size are almost always generated or data files
DEFAULT_MAX_FILE_BYTES = 512 * 1024


class FolderSerializer:
    """Serialize a folder tree to the upload format."""

    def __init__(
        self,
        exclude_dirs: set[str] | None = None,
        max_file_bytes: int = DEFAULT_MAX_FILE_BYTES,
    ):
        self.exclude_dirs = DEFAULT_EXCLUDE_DIRS if exclude_dirs is None else exclude_dirs
        self.max_file_bytes = max_file_bytes
        self.file_count = 0
        self.skipped: list[Path] = []

    def serialize(self, folder: str | Path) -> dict[str, Any]:
        """Convert ``folder`` to its JSON representation.

        Raises:
            FolderConversionError: If the folder does not exist or is not a directory
        """
        root = Path(folder).expanduser().resolve()

        if not root.exists():
            raise FolderConversionError(f"Folder does not exist: {root}")
        if not root.is_dir():
            raise FolderConversionError(f"Not a directory: {root}")

        logger.debug(f"Serializing folder: {root}")
        tree = self._folder_node(root)
        logger.debug(f"Serialized {self.file_count} files ({len(self.skipped)} skipped)")
        return tree

    def _folder_node(self, directory: Path) -> dict[str, Any]:
        content: list[dict[str, Any]] = []

        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except PermissionError:
            logger.warning(f"Permission denied accessing: {directory}")
            entries = []

        for item in entries:
            if item.name.startswith("."):
                continue

            if item.is_dir():
                # A link back to an ancestor would expand forever
                if item.is_symlink():
                    logger.debug(f"Skipping symlinked directory: {item}")
                    continue
                if item.name in self.exclude_dirs:
                    logger.debug(f"Skipping excluded directory: {item}")
                    continue
                content.append(self._folder_node(item))

            elif item.is_file():
                node = self._file_node(item)
                if node is not None:
                    content.append(node)

        return {"type": "folder", "name": directory.name, "content": content}

    def _file_node(self, path: Path) -> dict[str, Any] | None:
        try:
            if path.stat().st_size > self.max_file_bytes:
                logger.debug(f"Skipping large file: {path}")
                self.skipped.append(path)
                return None
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            logger.debug(f"Skipping binary file: {path}")
            self.skipped.append(path)
            return None
        except OSError as e:
            logger.warning(f"Could not read {path}: {e}")
            self.skipped.append(path)
            return None

        self.file_count += 1
        return {"type": "file", "name": path.name, "content": text}


def get_json_folder_representation(folder: str | Path) -> dict[str, Any]:
    """Convenience function: serialize ``folder`` with the default filters."""
    return FolderSerializer().serialize(folder)

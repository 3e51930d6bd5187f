"""
File scanner for Markdown documentation directories.

Recursively scans a directory to find every Markdown file that should be
merged into one document tree. Results are sorted by path so the merged
output is stable across runs and platforms.
"""

from pathlib import Path
from typing import Iterator, List, Optional, Set
import logging

logger = logging.getLogger(__name__)


class FileScanner:
    """
    Recursively scan a directory for Markdown files.

    Excludes common non-documentation directories:
    - node_modules, .git, __pycache__, .venv, venv, build, dist, etc.
    """

    SUPPORTED_EXTENSIONS = {'.md'}

    # Directories to exclude from scanning
    DEFAULT_EXCLUDE_DIRS = {
        'node_modules',
        '.git',
        '__pycache__',
        '.pytest_cache',
        '.venv',
        'venv',
        'build',
        'dist',
        '.build',  # SwiftPM build output
        '.docc-build',  # DocC archive output
    }

    def __init__(
        self,
        base_path: Path,
        extensions: Optional[Set[str]] = None,
        exclude_dirs: Optional[Set[str]] = None
    ):
        """
        Initialize the file scanner.

        Args:
            base_path: Directory to scan
            extensions: File extensions to include (default: .md)
            exclude_dirs: Directory names to skip (default: common build/cache dirs)

        Raises:
            FileNotFoundError: If base_path does not exist
            NotADirectoryError: If base_path is not a directory
        """
        self.base_path = Path(base_path)
        self.extensions = extensions or self.SUPPORTED_EXTENSIONS
        self.exclude_dirs = exclude_dirs or self.DEFAULT_EXCLUDE_DIRS

        if not self.base_path.exists():
            raise FileNotFoundError(f"Base path does not exist: {self.base_path}")

        if not self.base_path.is_dir():
            raise NotADirectoryError(f"Base path is not a directory: {self.base_path}")

    def scan(self) -> List[Path]:
        """
        Scan the base directory recursively.

        Returns:
            Markdown file paths, sorted by path
        """
        logger.debug(f"Scanning {self.base_path} for {', '.join(sorted(self.extensions))} files")

        doc_files = sorted(
            file_path
            for file_path in self._walk_directory(self.base_path)
            if file_path.suffix.lower() in self.extensions
        )

        logger.debug(f"Found {len(doc_files)} markdown files in {self.base_path}")
        return doc_files

    def has_files(self) -> bool:
        """True as soon as one matching file is found."""
        return any(
            file_path.suffix.lower() in self.extensions
            for file_path in self._walk_directory(self.base_path)
        )

    def _walk_directory(self, directory: Path) -> Iterator[Path]:
        try:
            items = list(directory.iterdir())
        except PermissionError:
            logger.warning(f"Permission denied accessing: {directory}")
            return

        for item in items:
            if item.is_dir():
                if item.name in self.exclude_dirs:
                    logger.debug(f"Skipping excluded directory: {item.name}")
                    continue
                yield from self._walk_directory(item)
            elif item.is_file():
                yield item


def scan_markdown_files(docs_path: Path) -> List[Path]:
    """
    Convenience function to list Markdown files under a directory.

    Example:
        >>> files = scan_markdown_files(Path("Sources/MyKit/MyKit.docc"))
    """
    return FileScanner(docs_path).scan()

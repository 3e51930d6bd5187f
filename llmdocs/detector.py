"""
Format auto-detection.

Picks the adapter for a source path from its extension, confirmed by the
adapter's own content probe, falling back to asking every registered
adapter in registration order.
"""

from typing import Dict, List, Optional
import logging

from llmdocs.adapters import FormatAdapter, HeadingTreeAdapter, SpecListAdapter
from llmdocs.adapters.base import PathLike, get_extension
from llmdocs.errors import FormatDetectionError

logger = logging.getLogger(__name__)

AUTO = "auto"

# Extension fast path (extension -> format name)
EXTENSION_FORMATS: Dict[str, str] = {
    'yml': SpecListAdapter.format,
    'yaml': SpecListAdapter.format,
    'md': HeadingTreeAdapter.format,
    'markdown': HeadingTreeAdapter.format,
}


class FormatDetector:
    """
    Detect the format of a source path.

    Adapters are consulted in registration order; registering a new adapter
    is all it takes to support a new format.
    """

    def __init__(self, adapters: Optional[List[FormatAdapter]] = None):
        """
        Initialize detector.

        Args:
            adapters: Adapters to register (default: spec-list, heading-tree)
        """
        self._adapters: List[FormatAdapter] = []

        if adapters is None:
            adapters = [SpecListAdapter(), HeadingTreeAdapter()]

        for adapter in adapters:
            self.register(adapter)

    def register(self, adapter: FormatAdapter) -> None:
        """Append an adapter; it is probed after every earlier one."""
        self._adapters.append(adapter)
        logger.debug(f"Registered format adapter: {adapter.format}")

    @property
    def adapters(self) -> List[FormatAdapter]:
        return list(self._adapters)

    @property
    def available_formats(self) -> List[str]:
        return [adapter.format for adapter in self._adapters]

    def get_adapter(self, format_name: str) -> Optional[FormatAdapter]:
        """First registered adapter for a format, or None."""
        for adapter in self._adapters:
            if adapter.format == format_name:
                return adapter
        return None

    def detect(self, source_path: PathLike, hint: Optional[str] = None) -> str:
        """
        Detect the format of a source.

        Strategy:
        1. An explicit hint other than "auto" is returned as-is
        2. Extension guess, confirmed by that format's probe
        3. Each registered probe in order; first match wins

        Args:
            source_path: File or directory
            hint: Optional format name ("auto" or None to detect)

        Returns:
            Format name

        Raises:
            FormatDetectionError: If no probe recognises the source
        """
        if hint and hint != AUTO:
            return hint

        guess = EXTENSION_FORMATS.get(get_extension(source_path))
        if guess:
            adapter = self.get_adapter(guess)
            if adapter and adapter.detect(source_path):
                logger.debug(f"Detected {guess} from extension: {source_path}")
                return guess
            logger.debug(f"Extension suggests {guess} but probe failed: {source_path}")

        for adapter in self._adapters:
            if adapter.detect(source_path):
                logger.debug(f"Detected {adapter.format} by probing: {source_path}")
                return adapter.format

        raise FormatDetectionError(str(source_path), self.available_formats)


_detector: Optional[FormatDetector] = None


def get_detector() -> FormatDetector:
    """Global detector instance (created on first use)."""
    global _detector
    if _detector is None:
        _detector = FormatDetector()
    return _detector


def detect_format(source_path: PathLike, hint: Optional[str] = None) -> str:
    """
    Convenience function to detect a source's format.

    Example:
        >>> detect_format("specs/supabase_swift_v2.yml")
        'openref'
        >>> detect_format("TSPL.docc")
        'markdown'
    """
    return get_detector().detect(source_path, hint)


def get_adapter(format_name: str) -> Optional[FormatAdapter]:
    """Convenience function for get_detector().get_adapter()."""
    return get_detector().get_adapter(format_name)

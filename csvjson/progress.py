from __future__ import annotations

from typing import Callable, Optional

from .logger import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[float], None]


class ProgressTracker:
    """
    Turns byte counts from a streamed read into a completion percentage.

    Values handed to the callback stay within [0, 100] and never go down
    during one read. Reads of unknown length report nothing until complete().
    """

    def __init__(self, callback: Optional[ProgressCallback] = None):
        self._callback = callback
        self.percent = 0.0

    def on_bytes_read(self, loaded: int, total: Optional[int]) -> Optional[float]:
        if not total:
            return None

        percent = min(max(100.0 * loaded / total, 0.0), 100.0)
        if percent < self.percent:
            percent = self.percent

        logger.debug("Progress: %s%%", percent)
        return self._emit(percent)

    def complete(self) -> float:
        return self._emit(100.0)

    def _emit(self, percent: float) -> float:
        self.percent = percent
        if self._callback is not None:
            self._callback(percent)
        return percent

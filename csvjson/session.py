"""
Conversion session state machine.

One session holds at most one file and runs at most one read at a time.
Every read is tagged with a generation number; selecting a file or starting
a read advances it, and events from older reads are dropped.
"""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional

from .convert import convert_table, decode_content, parse_table, summarize
from .errors import ConversionError
from .logger import get_logger
from .models import SessionState, SessionStatus, UploadedFile
from .progress import ProgressTracker
from .reader import read_content
from .rules import READ_CHUNK_SIZE
from .validate import validate

logger = get_logger(__name__)

StateListener = Callable[[SessionState], None]


class ConversionSession:
    def __init__(self, chunk_size: int = READ_CHUNK_SIZE):
        self.chunk_size = chunk_size
        self._state = SessionState()
        self._file: Optional[UploadedFile] = None
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def file(self) -> Optional[UploadedFile]:
        return self._file

    @property
    def generation(self) -> int:
        return self._generation

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call listener with every new state. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def select_file(self, file: Optional[UploadedFile]) -> SessionState:
        """Validate and hold a new file, discarding everything from before."""
        self._generation += 1

        try:
            self._file = validate(file)
        except ConversionError as exc:
            self._file = None
            logger.warning("File rejected (%s): %s", exc.kind, exc.message)
            return self._set_state(SessionState(status=SessionStatus.ERROR, error_message=exc.message))

        logger.info("File selected: %s (%d bytes)", file.name, file.size_bytes)
        return self._set_state(SessionState(status=SessionStatus.FILE_SELECTED))

    def request_conversion(self) -> Optional[asyncio.Task]:
        """
        Start converting the held file. Must be called from a running event loop.

        Returns the read task, or None when the request is ignored: a read is
        already running, or no file is held.
        """
        if self._state.status == SessionStatus.CONVERTING:
            logger.debug("Conversion already in progress; request ignored")
            return None

        if self._file is None:
            logger.debug("No file held; conversion request ignored")
            return None

        self._generation += 1
        generation = self._generation
        tracker = ProgressTracker(lambda percent: self._on_progress(generation, percent))

        self._set_state(SessionState(status=SessionStatus.CONVERTING))
        logger.info("Converting %s", self._file.name)

        self._task = asyncio.get_running_loop().create_task(self._run(generation, self._file, tracker))
        return self._task

    async def wait(self) -> SessionState:
        """Wait for the current read, if any, then return the state."""
        if self._task is not None:
            await self._task
        return self._state

    async def _run(self, generation: int, file: UploadedFile, tracker: ProgressTracker) -> None:
        try:
            raw = await read_content(file, tracker.on_bytes_read, self.chunk_size)
            table = parse_table(decode_content(raw))
            result = convert_table(table)
        except ConversionError as exc:
            self._on_failed(generation, exc)
            return

        if self._is_stale(generation, "completion"):
            return

        tracker.complete()
        summary = summarize(table)
        logger.info("Converted %s: %d records, %d fields", file.name, summary.records, summary.fields)
        self._set_state(
            SessionState(status=SessionStatus.READY, progress_percent=100.0, result=result, summary=summary)
        )

    def _on_progress(self, generation: int, percent: float) -> None:
        if self._is_stale(generation, "progress"):
            return
        self._set_state(self._state.model_copy(update={"progress_percent": percent}))

    def _on_failed(self, generation: int, exc: ConversionError) -> None:
        if self._is_stale(generation, "failure"):
            return
        logger.warning("Conversion failed (%s): %s", exc.kind, exc.message)
        self._set_state(
            SessionState(
                status=SessionStatus.ERROR,
                progress_percent=self._state.progress_percent,
                error_message=exc.message,
            )
        )

    def _is_stale(self, generation: int, event: str) -> bool:
        if generation != self._generation:
            logger.debug("Dropping %s from superseded read %d (current %d)", event, generation, self._generation)
            return True
        return False

    def _set_state(self, state: SessionState) -> SessionState:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
        return state

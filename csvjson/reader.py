from __future__ import annotations

import asyncio
import io
from typing import Callable, Optional

from .errors import ReadError
from .models import UploadedFile
from .rules import READ_CHUNK_SIZE

ByteCountCallback = Callable[[int, Optional[int]], None]


async def read_content(
    file: UploadedFile,
    on_bytes_read: Optional[ByteCountCallback] = None,
    chunk_size: int = READ_CHUNK_SIZE,
) -> bytes:
    """
    Read a file's content chunk by chunk, yielding to the event loop in between.

    on_bytes_read(loaded, total) fires after every chunk. total is the
    declared size, or None when the descriptor declares no size.
    Seekable streams are rewound first, so the same file can be read again.
    Any failure from the underlying stream is raised as ReadError.
    """
    stream = io.BytesIO(file.content) if isinstance(file.content, (bytes, bytearray)) else file.content
    total = file.size_bytes or None

    chunks = []
    loaded = 0
    try:
        if getattr(stream, "seekable", None) is not None and stream.seekable():
            stream.seek(0)

        while True:
            chunk = stream.read(chunk_size)
            if not chunk:
                break
            chunks.append(chunk)
            loaded += len(chunk)
            if on_bytes_read is not None:
                on_bytes_read(loaded, total)
            await asyncio.sleep(0)
    except Exception as exc:
        raise ReadError() from exc

    return b"".join(chunks)

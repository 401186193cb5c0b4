"""Inter-process lock for the record directories.

filelock blocks, so acquire and release are pushed to a worker thread.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from filelock import FileLock, Timeout
from loguru import logger

from pmtracker.domain.errors import StorageError

DEFAULT_LOCK_TIMEOUT_S = 30.0


@asynccontextmanager
async def async_file_lock(
    lock_path: Path, timeout_s: float = DEFAULT_LOCK_TIMEOUT_S
) -> AsyncIterator[None]:
    """Hold the lock at lock_path for the duration of the block.

    Raises StorageError when another process keeps it longer than timeout_s.
    """
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    lock = FileLock(lock_path, timeout=timeout_s)

    try:
        await asyncio.to_thread(lock.acquire)
    except Timeout as e:
        logger.error(f"Lock {lock_path} still held after {timeout_s:g}s")
        raise StorageError(f"Timed out waiting for {lock_path}") from e
    try:
        yield
    finally:
        await asyncio.to_thread(lock.release)

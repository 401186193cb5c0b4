from __future__ import annotations

import asyncio
import tempfile
from pathlib import Path

import aiofiles
from loguru import logger


async def atomic_write(path: Path, content: str | bytes, suffix: str | None = None) -> None:
    """Write a record or blob so readers never see a partial file.

    Content goes to a hidden temp file next to path, which then replaces
    path in one rename.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(
        dir=str(path.parent), prefix=".tmp_", suffix=suffix or path.suffix
    )
    temp_path = Path(temp_name)

    try:
        if isinstance(content, bytes):
            async with aiofiles.open(fd, mode="wb", closefd=True) as f:
                await f.write(content)
        else:
            async with aiofiles.open(fd, mode="w", encoding="utf-8", closefd=True) as f:
                await f.write(content)
        await asyncio.to_thread(temp_path.replace, path)
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise
    logger.debug("Wrote {} ({} bytes)", path.name, len(content))


async def read_text(path: Path) -> str | None:
    """Read a UTF-8 record, None if it does not exist."""
    if not path.exists():
        return None
    async with aiofiles.open(path, encoding="utf-8") as f:
        return await f.read()

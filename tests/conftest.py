import io
import struct
import zlib
from collections.abc import Callable
from pathlib import Path
from uuid import uuid4

import pytest
from PIL import Image

from pmtracker.domain.entities.checklist_task import ChecklistTask
from pmtracker.domain.entities.checklist_template import ChecklistTemplate
from pmtracker.domain.value_objects import Team


def _image_bytes(fmt: str) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (64, 48), (200, 60, 30)).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def temp_state_dir(tmp_path: Path) -> Path:
    state_dir = tmp_path / ".pmtracker"
    state_dir.mkdir()
    return state_dir


@pytest.fixture
def png_bytes() -> bytes:
    return _image_bytes("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return _image_bytes("JPEG")


@pytest.fixture
def oversized_png() -> bytes:
    """A header-only PNG claiming 30000x30000 pixels, past Pillow's bomb limit."""

    def chunk(kind: bytes, data: bytes) -> bytes:
        crc = struct.pack(">I", zlib.crc32(kind + data))
        return struct.pack(">I", len(data)) + kind + data + crc

    header = struct.pack(">IIBBBBB", 30000, 30000, 8, 2, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", header) + chunk(b"IEND", b"")


@pytest.fixture
def team() -> Team:
    return Team(technician_1="Ana Pérez", technician_2="Luis", reviewer="Marta")


@pytest.fixture
def make_template() -> Callable[..., ChecklistTemplate]:
    """Build a template of plain tasks; measurement_at marks measurement tasks."""

    def _make(
        n_tasks: int = 3,
        measurement_at: tuple[int, ...] = (),
        source_file_name: str | None = "PM-0042 Compresor.pdf",
    ) -> ChecklistTemplate:
        tasks = tuple(
            ChecklistTask(
                id=uuid4(),
                sequence_number=100 + 10 * i,
                order=i + 1,
                title=(
                    f"Record motor temperature {i}" if i in measurement_at else f"Clean filter {i}"
                ),
                key_points="Use gloves",
                rationale="Keeps the unit reliable",
            )
            for i in range(n_tasks)
        )
        return ChecklistTemplate(
            id=uuid4(),
            pm_id=uuid4(),
            pm_number="PM-0042",
            name="Compresor",
            source_file_name=source_file_name,
            tasks=tasks,
        )

    return _make

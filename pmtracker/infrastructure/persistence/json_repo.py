"""File-based JSON implementations of the persistence ports.

One JSON document per record, written atomically under a per-directory
file lock. OS-level failures surface as StorageError.
"""

from __future__ import annotations

import asyncio
from contextlib import AbstractAsyncContextManager
from pathlib import Path
from typing import TypeVar
from uuid import UUID

from loguru import logger
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from pmtracker.domain.entities.checklist_template import ChecklistTemplate
from pmtracker.domain.entities.execution import Execution
from pmtracker.domain.entities.pm_record import PMRecord
from pmtracker.domain.errors import NotFoundError, StorageError
from pmtracker.domain.ports.execution_repo_port import ExecutionRepoPort
from pmtracker.domain.ports.pm_repo_port import PMRepoPort
from pmtracker.domain.ports.template_repo_port import TemplateRepoPort
from pmtracker.infrastructure.persistence._paths import StatePaths
from pmtracker.infrastructure.persistence.async_file_lock import async_file_lock
from pmtracker.infrastructure.persistence.atomic_io import atomic_write, read_text

ModelT = TypeVar("ModelT", bound=BaseModel)


class _JsonStore:
    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def _lock(self) -> AbstractAsyncContextManager[None]:
        return async_file_lock(self.directory / ".lock")

    async def write(self, path: Path, model: BaseModel) -> None:
        try:
            async with self._lock():
                await atomic_write(path, model.model_dump_json(indent=2))
        except OSError as e:
            raise StorageError(f"Could not write {path}: {e}") from e

    async def read(self, path: Path, model_type: type[ModelT]) -> ModelT | None:
        try:
            async with self._lock():
                content = await read_text(path)
        except OSError as e:
            raise StorageError(f"Could not read {path}: {e}") from e
        if content is None:
            return None
        return model_type.model_validate_json(content)

    def _record_paths(self) -> list[Path]:
        return sorted(p for p in self.directory.glob("*.json") if not p.name.startswith("."))

    async def read_all(self, model_type: type[ModelT]) -> list[ModelT]:
        if not self.directory.exists():
            return []
        paths = await asyncio.to_thread(self._record_paths)
        items: list[ModelT] = []
        for path in paths:
            try:
                item = await self.read(path, model_type)
            except PydanticValidationError as e:
                logger.warning("Skipping unreadable record {}: {}", path.name, e)
                continue
            if item is not None:
                items.append(item)
        return items


class JsonPMRepo(PMRepoPort):
    def __init__(self, state_dir: Path) -> None:
        self.paths = StatePaths(state_dir)
        self._store = _JsonStore(self.paths.pms_dir)

    async def get(self, pm_id: UUID) -> PMRecord:
        pm = await self._store.read(self.paths.pm_path(pm_id), PMRecord)
        if pm is None:
            raise NotFoundError("PM", pm_id)
        return pm

    async def save(self, pm: PMRecord) -> None:
        await self._store.write(self.paths.pm_path(pm.id), pm)
        logger.debug("Saved PM {}", pm.id)

    async def list(self) -> list[PMRecord]:
        return await self._store.read_all(PMRecord)


class JsonTemplateRepo(TemplateRepoPort):
    def __init__(self, state_dir: Path) -> None:
        self.paths = StatePaths(state_dir)
        self._store = _JsonStore(self.paths.templates_dir)

    async def get(self, template_id: UUID) -> ChecklistTemplate:
        template = await self._store.read(self.paths.template_path(template_id), ChecklistTemplate)
        if template is None:
            raise NotFoundError("Template", template_id)
        return template

    async def get_for_pm(self, pm_id: UUID) -> ChecklistTemplate | None:
        for template in await self._store.read_all(ChecklistTemplate):
            if template.pm_id == pm_id:
                return template
        return None

    async def save(self, template: ChecklistTemplate) -> None:
        await self._store.write(self.paths.template_path(template.id), template)
        logger.info("Saved template {} ({} tasks)", template.id, len(template.tasks))


class JsonExecutionRepo(ExecutionRepoPort):
    def __init__(self, state_dir: Path) -> None:
        self.paths = StatePaths(state_dir)
        self._store = _JsonStore(self.paths.executions_dir)

    async def save(self, execution: Execution) -> UUID:
        path = self.paths.execution_path(execution.id)
        if path.exists():
            raise StorageError(f"Execution {execution.id} already exists")
        await self._store.write(path, execution)
        logger.info("Saved execution {}", execution.id)
        return execution.id

    async def get(self, execution_id: UUID) -> Execution:
        execution = await self._store.read(self.paths.execution_path(execution_id), Execution)
        if execution is None:
            raise NotFoundError("Execution", execution_id)
        return execution

    async def attach_report(self, execution_id: UUID, report_ref: str) -> Execution:
        execution = (await self.get(execution_id)).attach_report(report_ref)
        await self._store.write(self.paths.execution_path(execution_id), execution)
        return execution

    async def list_ids(self) -> list[UUID]:
        if not self.paths.executions_dir.exists():
            return []
        return [
            UUID(p.stem)
            for p in sorted(self.paths.executions_dir.glob("*.json"))
            if not p.name.startswith(".")
        ]

    async def list_for_template(self, template_id: UUID) -> list[Execution]:
        executions = [
            e for e in await self._store.read_all(Execution) if e.template_id == template_id
        ]
        executions.sort(key=lambda e: e.finished_at, reverse=True)
        return executions

"""Integration tests for the JSON persistence adapters."""

from collections.abc import Callable
from datetime import timedelta
from pathlib import Path
from uuid import uuid4

import pytest

from pmtracker.domain.entities.checklist_template import ChecklistTemplate
from pmtracker.domain.entities.execution import Execution
from pmtracker.domain.entities.pm_record import PMRecord
from pmtracker.domain.errors import NotFoundError, StorageError
from pmtracker.domain.services.execution_wizard import ExecutionWizard
from pmtracker.domain.value_objects import PMStatus, ResultStatus, Team
from pmtracker.infrastructure.persistence import (
    JsonExecutionRepo,
    JsonPMRepo,
    JsonTemplateRepo,
)


def _execution(template: ChecklistTemplate, team: Team, minutes: int) -> Execution:
    wizard = ExecutionWizard(template)
    for i in range(len(wizard)):
        wizard.set_result(i, ResultStatus.PASSED)
    wizard.toggle_flag(0)
    wizard.set_comment(0, "Belt worn")
    return wizard.finalize(
        team, wizard.started_at, wizard.started_at + timedelta(minutes=minutes)
    )


class TestJsonPMRepo:
    async def test_save_and_get(self, temp_state_dir: Path) -> None:
        repo = JsonPMRepo(temp_state_dir)
        pm = PMRecord(id=uuid4(), file_name="PM-0042.pdf", owner="Marta")

        await repo.save(pm)
        loaded = await repo.get(pm.id)

        assert loaded == pm
        assert (temp_state_dir / "pms" / f"{pm.id.hex}.json").exists()

    async def test_save_overwrites(self, temp_state_dir: Path) -> None:
        repo = JsonPMRepo(temp_state_dir)
        pm = PMRecord(id=uuid4(), file_name="PM-0042.pdf")
        await repo.save(pm)

        pm.record_execution(uuid4(), pm.uploaded_at)
        await repo.save(pm)

        assert (await repo.get(pm.id)).status == PMStatus.COMPLETED
        assert len(await repo.list()) == 1

    async def test_get_missing(self, temp_state_dir: Path) -> None:
        with pytest.raises(NotFoundError):
            await JsonPMRepo(temp_state_dir).get(uuid4())

    async def test_list_empty_without_directory(self, temp_state_dir: Path) -> None:
        assert await JsonPMRepo(temp_state_dir).list() == []

    async def test_list_skips_corrupt_records(self, temp_state_dir: Path) -> None:
        repo = JsonPMRepo(temp_state_dir)
        pm = PMRecord(id=uuid4(), file_name="ok.pdf")
        await repo.save(pm)
        (temp_state_dir / "pms" / f"{uuid4().hex}.json").write_text("{}", encoding="utf-8")

        assert [p.id for p in await repo.list()] == [pm.id]


class TestJsonTemplateRepo:
    async def test_roundtrip_and_lookup_by_pm(
        self, temp_state_dir: Path, make_template: Callable[..., ChecklistTemplate]
    ) -> None:
        repo = JsonTemplateRepo(temp_state_dir)
        template = make_template(4)

        await repo.save(template)

        assert await repo.get(template.id) == template
        assert await repo.get_for_pm(template.pm_id) == template
        assert await repo.get_for_pm(uuid4()) is None

    async def test_get_missing(self, temp_state_dir: Path) -> None:
        with pytest.raises(NotFoundError):
            await JsonTemplateRepo(temp_state_dir).get(uuid4())


class TestJsonExecutionRepo:
    async def test_save_get_and_attach_report(
        self,
        temp_state_dir: Path,
        make_template: Callable[..., ChecklistTemplate],
        team: Team,
    ) -> None:
        repo = JsonExecutionRepo(temp_state_dir)
        execution = _execution(make_template(3), team, minutes=5)

        assert await repo.save(execution) == execution.id
        loaded = await repo.get(execution.id)
        assert loaded == execution
        assert loaded.results[0].flagged is True

        updated = await repo.attach_report(execution.id, "file:///r.pdf")

        assert updated.report_ref == "file:///r.pdf"
        assert (await repo.get(execution.id)).report_ref == "file:///r.pdf"
        assert await repo.list_ids() == [execution.id]

    async def test_save_twice_fails(
        self,
        temp_state_dir: Path,
        make_template: Callable[..., ChecklistTemplate],
        team: Team,
    ) -> None:
        repo = JsonExecutionRepo(temp_state_dir)
        execution = _execution(make_template(1), team, minutes=1)
        await repo.save(execution)

        with pytest.raises(StorageError, match="already exists"):
            await repo.save(execution)

    async def test_attach_report_missing(self, temp_state_dir: Path) -> None:
        with pytest.raises(NotFoundError):
            await JsonExecutionRepo(temp_state_dir).attach_report(uuid4(), "file:///r.pdf")

    async def test_list_for_template_newest_first(
        self,
        temp_state_dir: Path,
        make_template: Callable[..., ChecklistTemplate],
        team: Team,
    ) -> None:
        repo = JsonExecutionRepo(temp_state_dir)
        template = make_template(2)
        short = _execution(template, team, minutes=5)
        long = _execution(template, team, minutes=50)
        other = _execution(make_template(2), team, minutes=10)
        for execution in (short, long, other):
            await repo.save(execution)

        listed = await repo.list_for_template(template.id)

        assert [e.id for e in listed] == [long.id, short.id]

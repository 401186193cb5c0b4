from pathlib import Path
from uuid import UUID


class StatePaths:
    """Directory layout of the state dir."""

    def __init__(self, state_dir: Path) -> None:
        self.state_dir = state_dir

    @property
    def pms_dir(self) -> Path:
        return self.state_dir / "pms"

    @property
    def templates_dir(self) -> Path:
        return self.state_dir / "templates"

    @property
    def executions_dir(self) -> Path:
        return self.state_dir / "executions"

    @property
    def blobs_dir(self) -> Path:
        return self.state_dir / "blobs"

    @property
    def logs_dir(self) -> Path:
        return self.state_dir / "logs"

    def pm_path(self, pm_id: UUID) -> Path:
        return self.pms_dir / f"{pm_id.hex}.json"

    def template_path(self, template_id: UUID) -> Path:
        return self.templates_dir / f"{template_id.hex}.json"

    def execution_path(self, execution_id: UUID) -> Path:
        return self.executions_dir / f"{execution_id.hex}.json"

    def lock_path(self, directory: Path) -> Path:
        return directory / ".lock"

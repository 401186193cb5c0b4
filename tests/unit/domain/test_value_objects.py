import pytest
from pydantic import ValidationError as PydanticValidationError

from pmtracker.domain.value_objects import (
    ImageFormat,
    PMFilter,
    PMStatus,
    Team,
    detect_image_format,
    format_for_content_type,
    is_review_transition,
)


class TestImageFormat:
    def test_detects_real_images(self, png_bytes: bytes, jpeg_bytes: bytes) -> None:
        assert detect_image_format(png_bytes) == ImageFormat.PNG
        assert detect_image_format(jpeg_bytes) == ImageFormat.JPEG

    def test_rejects_other_data(self) -> None:
        assert detect_image_format(b"GIF89a....") is None
        assert detect_image_format(b"") is None

    def test_content_type_lookup(self) -> None:
        assert format_for_content_type("image/jpeg; charset=binary") == ImageFormat.JPEG
        assert format_for_content_type("IMAGE/PNG") == ImageFormat.PNG
        assert format_for_content_type("image/gif") is None
        assert ImageFormat.JPEG.content_type == "image/jpeg"


class TestPMStatusTransitions:
    @pytest.mark.parametrize(
        ("current", "requested", "allowed"),
        [
            (PMStatus.COMPLETED, PMStatus.CLOSED, True),
            (PMStatus.CLOSED, PMStatus.COMPLETED, True),
            (PMStatus.OPEN, PMStatus.CLOSED, False),
            (PMStatus.OPEN, PMStatus.COMPLETED, False),
            (PMStatus.CLOSED, PMStatus.OPEN, False),
            (PMStatus.COMPLETED, PMStatus.COMPLETED, False),
        ],
    )
    def test_review_transitions(
        self, current: PMStatus, requested: PMStatus, allowed: bool
    ) -> None:
        assert is_review_transition(current, requested) is allowed


class TestTeam:
    def test_names_are_stripped(self) -> None:
        team = Team(technician_1=" Ana ", technician_2="  ", reviewer="Marta")

        assert team.technician_1 == "Ana"
        assert team.technician_2 is None
        assert team.technicians == ["Ana"]

    def test_blank_reviewer_is_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            Team(technician_1="Ana", reviewer=" ")

    def test_team_line(self) -> None:
        team = Team(technician_1="Ana", technician_2="Luis", reviewer="Marta")
        assert team.team_line() == "Team: Ana & Luis | GL: Marta"


class TestPMFilter:
    def test_default_shows_all_active(self) -> None:
        f = PMFilter()

        assert f.matches("Marta", PMStatus.CLOSED, "Mensual", True)
        assert not f.matches("Marta", PMStatus.OPEN, "Mensual", False)

    def test_owner_is_case_insensitive_exact(self) -> None:
        f = PMFilter(owner="marta")

        assert f.matches("Marta ", PMStatus.OPEN, "", True)
        assert not f.matches("Marta Gomez", PMStatus.OPEN, "", True)

    def test_status_and_type(self) -> None:
        f = PMFilter(statuses=frozenset({PMStatus.OPEN}), pm_type="mensual")

        assert f.matches("x", PMStatus.OPEN, "MENSUAL", True)
        assert not f.matches("x", PMStatus.COMPLETED, "MENSUAL", True)
        assert not f.matches("x", PMStatus.OPEN, "Anual", True)

    def test_include_inactive(self) -> None:
        assert PMFilter(include_inactive=True).matches("x", PMStatus.OPEN, "", False)

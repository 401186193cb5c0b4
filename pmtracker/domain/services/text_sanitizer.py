import re
import textwrap
import unicodedata

from pmtracker.domain.value_objects import Team

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_NON_ASCII = re.compile(r"[^\x00-\x7f]")
_NON_FILENAME = re.compile(r"[^A-Za-z0-9_.-]+")


def _strip_marks(text: str) -> str:
    return _COMBINING_MARKS.sub("", unicodedata.normalize("NFD", text))


def sanitize_for_pdf(text: str | None) -> str:
    """Reduce text to what the base-14 PDF fonts can draw.

    Accents are folded ("Señal" -> "Senal"); any other non-ASCII
    character is dropped.
    """
    if not text:
        return ""
    return _NON_ASCII.sub("", _strip_marks(text))


def sanitize_for_filename(text: str | None) -> str:
    if not text:
        return ""
    return _NON_FILENAME.sub("_", _strip_marks(text))


def build_report_filename(base_name: str, team: Team) -> str:
    """EXEC_<base>_GL(<reviewer>)_A1(<tech 1>)[_A2(<tech 2>)].pdf"""
    name = (
        f"EXEC_{sanitize_for_filename(base_name)}"
        f"_GL({sanitize_for_filename(team.reviewer)})"
        f"_A1({sanitize_for_filename(team.technician_1)})"
    )
    second = sanitize_for_filename(team.technician_2)
    if second:
        name += f"_A2({second})"
    return name + ".pdf"


def wrap_text(text: str, width_pt: float, font_size: float) -> list[str]:
    """Wrap text for a column using an average glyph width estimate."""
    avg_char_w = font_size * 0.5
    max_chars = max(10, int(width_pt / avg_char_w))
    lines: list[str] = []
    for paragraph in text.split("\n"):
        lines.extend(textwrap.wrap(paragraph, width=max_chars) or [""])
    return lines

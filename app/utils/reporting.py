from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from app.config import get_settings
from hms_risk.core import RiskLevel

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN_X = 40
MARGIN_TOP = 50
MARGIN_BOTTOM = 50
TEXT_WIDTH = PAGE_WIDTH - 2 * MARGIN_X
RECORD_GAP = 10

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"


@dataclass(slots=True, frozen=True)
class ReportLine:
    text: str
    font: str = FONT
    size: float = 10
    color: str | None = None

    @property
    def height(self) -> float:
        return self.size * 1.4


class PageCursor:
    """
    Vertical write position on a fixed-height page.

    ``y`` starts at the top margin and decreases as content is placed. A block
    that would cross the bottom margin moves to a fresh page, unless the
    cursor is already at the top of a page (the block is taller than a page
    and is placed anyway).
    """

    def __init__(
        self,
        page_height: float = PAGE_HEIGHT,
        *,
        top_margin: float = MARGIN_TOP,
        bottom_margin: float = MARGIN_BOTTOM,
        on_new_page: Callable[[], None] | None = None,
    ) -> None:
        if page_height - top_margin <= bottom_margin:
            raise ValueError("page margins leave no room for content")
        self.top = page_height - top_margin
        self.bottom = bottom_margin
        self.y = self.top
        self.page_count = 1
        self._on_new_page = on_new_page

    @property
    def at_page_top(self) -> bool:
        return self.y >= self.top

    def fits(self, height: float) -> bool:
        return self.y - height >= self.bottom

    def ensure(self, height: float) -> bool:
        """Break the page if ``height`` does not fit; returns True on a break."""
        if self.fits(height) or self.at_page_top:
            return False
        self.new_page()
        return True

    def new_page(self) -> None:
        if self._on_new_page is not None:
            self._on_new_page()
        self.page_count += 1
        self.y = self.top

    def advance(self, height: float) -> None:
        self.y -= height


def _fmt_date(value: Any) -> str:
    if not value:
        return ""
    if isinstance(value, (date, datetime)):
        return value.strftime("%d.%m.%Y")
    try:
        return date.fromisoformat(str(value)[:10]).strftime("%d.%m.%Y")
    except ValueError:
        return str(value)


def _wrap(text: str, font: str, size: float, width: float = TEXT_WIDTH) -> list[str]:
    clean = " ".join(str(text or "").split())
    if not clean:
        return [""]
    return simpleSplit(clean, font, size, width) or [""]


def _wrapped(text: str, *, font: str = FONT, size: float = 10, color: str | None = None) -> list[ReportLine]:
    return [ReportLine(part, font, size, color) for part in _wrap(text, font, size)]


def record_lines(index: int, record: Mapping[str, Any]) -> list[ReportLine]:
    """Lines for one numbered assessment, wrapped to the page width."""
    level = str(record.get("risk_level") or "")
    try:
        level_color: str | None = RiskLevel(level).color
    except ValueError:
        level_color = None

    lines: list[ReportLine] = []
    lines += _wrapped(f"{index}. {record.get('hazard_type', '')}", font=FONT_BOLD, size=14)
    lines += _wrapped(f"Beskrivelse: {record.get('hazard_description', '')}")
    lines += _wrapped(
        f"Sannsynlighet: {record.get('likelihood')}/5 | "
        f"Konsekvens: {record.get('consequence')}/5 | "
        f"Risiko: {record.get('risk_score')}"
    )
    lines += _wrapped(f"Risikonivå: {level}", font=FONT_BOLD, color=level_color)
    lines += _wrapped(f"Tiltak: {record.get('preventive_measures', '')}")
    lines += _wrapped(f"Ansvarlig: {record.get('responsible_person', '')} | Status: {record.get('status', '')}")
    deadline = _fmt_date(record.get("deadline"))
    if deadline:
        lines += _wrapped(f"Frist: {deadline}")
    return lines


def _draw_line(pdf: canvas.Canvas, cursor: PageCursor, line: ReportLine) -> None:
    cursor.ensure(line.height)
    cursor.advance(line.height)
    pdf.setFont(line.font, line.size)
    pdf.setFillColor(colors.HexColor(line.color) if line.color else colors.black)
    pdf.drawString(MARGIN_X, cursor.y, line.text)


def _draw_footer(pdf: canvas.Canvas, page_no: int) -> None:
    pdf.setFont(FONT, 8)
    pdf.setFillColor(colors.grey)
    pdf.drawRightString(PAGE_WIDTH - MARGIN_X, MARGIN_BOTTOM / 2, f"Side {page_no}")


def render_risk_report_pdf(
    records: Sequence[Mapping[str, Any]],
    *,
    title: str | None = None,
    generated_at: datetime | None = None,
    out_dir: Path | None = None,
) -> tuple[Path, int]:
    settings = get_settings()
    generated = generated_at or datetime.utcnow()
    export_dir = out_dir or settings.export_dir
    export_dir.mkdir(parents=True, exist_ok=True)
    pdf_path = export_dir / f"risk_assessment_{generated.strftime('%Y%m%d_%H%M%S_%f')}.pdf"

    pdf = canvas.Canvas(str(pdf_path), pagesize=A4)
    pdf.setTitle(title or settings.report_title)

    def _next_page() -> None:
        _draw_footer(pdf, cursor.page_count)
        pdf.showPage()

    cursor = PageCursor(on_new_page=_next_page)

    for line in _wrapped(title or settings.report_title, font=FONT_BOLD, size=18):
        _draw_line(pdf, cursor, line)
    _draw_line(pdf, cursor, ReportLine(f"Generert: {_fmt_date(generated)}", size=11))
    cursor.advance(RECORD_GAP)

    if not records:
        _draw_line(pdf, cursor, ReportLine("Ingen risikovurderinger registrert."))

    for idx, record in enumerate(records, start=1):
        lines = record_lines(idx, record)
        # Keep a record on one page when it fits on an empty one.
        cursor.ensure(sum(line.height for line in lines))
        for line in lines:
            _draw_line(pdf, cursor, line)
        cursor.advance(RECORD_GAP)

    _draw_footer(pdf, cursor.page_count)
    pdf.save()
    return pdf_path, cursor.page_count

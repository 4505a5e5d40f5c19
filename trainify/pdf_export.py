# trainify/pdf_export.py

"""
PDF export of the three plans.

Draws directly onto a reportlab canvas with a manually tracked vertical cursor,
so pagination follows the same geometry everywhere: A4 pages, 20 mm margins,
a 7 mm line height and a page break whenever the cursor passes
`page height - margin - 20 mm` before a line is drawn. Lines are classified by
the shared segmenter, so the PDF shows the same cleaned text as the screen.

Coordinates below are measured from the top of the page, like the cursor;
`_baseline` converts to reportlab's bottom-up coordinates when drawing.
"""

from io import BytesIO
from pathlib import Path
from typing import Dict, List, Optional, Union

from loguru import logger
from pydantic import BaseModel, Field
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from trainify.text_format import LineKind, LineRecord, PlanCategory, print_safe, segment


# --- Page geometry ---

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 20 * mm
LINE_HEIGHT = 7 * mm
MAX_WIDTH = PAGE_WIDTH - 2 * MARGIN
PAGE_BREAK_Y = PAGE_HEIGHT - MARGIN - 20 * mm

REGULAR = "Helvetica"
BOLD = "Helvetica-Bold"
ITALIC = "Helvetica-Oblique"

HEADING_SIZES = {1: 18, 2: 16, 3: 14}

# --- Document layout ---

PDF_FILENAME = "trainify-ai-plan.pdf"
DOCUMENT_TITLE = "Trainify AI - Your Personalized Plan"
SECTION_TITLES = {
    PlanCategory.WORKOUT: "Workout Plan",
    PlanCategory.DIET: "Diet Plan",
    PlanCategory.MOTIVATION: "Motivation & Tips",
}


class ExportResult(BaseModel):
    success: bool
    filename: str = PDF_FILENAME
    content: Optional[bytes] = None
    page_counts: Dict[str, int] = Field(default_factory=dict)
    error: Optional[str] = None

    @property
    def total_pages(self) -> int:
        return sum(self.page_counts.values())


class PdfPaginator:
    """Lays out plan text on A4 pages, tracking the cursor and page count."""

    def __init__(self, buffer: Optional[BytesIO] = None):
        self.buffer = buffer or BytesIO()
        self.canvas = canvas.Canvas(self.buffer, pagesize=A4)
        self.canvas.setTitle(DOCUMENT_TITLE)
        self.y = MARGIN
        self.page_count = 1

    # --- Cursor and drawing primitives ---

    def new_page(self) -> None:
        self.canvas.showPage()
        self.y = MARGIN
        self.page_count += 1

    def _baseline(self) -> float:
        return PAGE_HEIGHT - self.y

    def _wrap(self, text: str, font: str, size: float, width: float) -> List[str]:
        return simpleSplit(text, font, size, width) or [text]

    def _draw(self, text: str, x: float, font: str, size: float) -> None:
        self.canvas.setFont(font, size)
        self.canvas.drawString(x, self._baseline(), text)

    def _draw_wrapped(self, lines: List[str], x: float, font: str, size: float, step: float) -> None:
        """Draws wrapped lines from the cursor down, breaking the page between lines.

        The first line is drawn at the cursor. Each following line advances the
        cursor by `step` and starts a new page once it passes `PAGE_BREAK_Y`, so
        long paragraphs flow over as many pages as they need.
        """
        self.canvas.setFont(font, size)
        for i, line in enumerate(lines):
            if i > 0:
                self.y += step
                if self.y > PAGE_BREAK_Y:
                    self.new_page()
                    # showPage resets the graphics state
                    self.canvas.setFont(font, size)
            self.canvas.drawString(x, self._baseline(), line)

    # --- Line kinds ---

    def _heading(self, text: str, size: float) -> None:
        self.y += LINE_HEIGHT * 1.5
        lines = self._wrap(text, BOLD, size, MAX_WIDTH)
        self._draw_wrapped(lines, MARGIN, BOLD, size, LINE_HEIGHT)
        self.y += LINE_HEIGHT * 1.2

    def _item(self, record: LineRecord) -> None:
        self.y += LINE_HEIGHT
        self._draw("•", MARGIN, BOLD, 11)
        self._draw(record.name, MARGIN + 8 * mm, BOLD, 11)
        if record.detail:
            self.y += LINE_HEIGHT * 0.8
            lines = self._wrap(record.detail, REGULAR, 10, MAX_WIDTH - 30 * mm)
            self._draw_wrapped(lines, MARGIN + 15 * mm, REGULAR, 10, LINE_HEIGHT * 0.8)

    def _bullet(self, text: str) -> None:
        self.y += LINE_HEIGHT
        self._draw("•", MARGIN, REGULAR, 10)
        lines = self._wrap(text, REGULAR, 10, MAX_WIDTH - 25 * mm)
        self._draw_wrapped(lines, MARGIN + 8 * mm, REGULAR, 10, LINE_HEIGHT)

    def _description(self, text: str) -> None:
        self.y += LINE_HEIGHT * 0.8
        lines = self._wrap(text, ITALIC, 9, MAX_WIDTH - 35 * mm)
        self._draw_wrapped(lines, MARGIN + 20 * mm, ITALIC, 9, LINE_HEIGHT * 0.8)

    def _numbered(self, record: LineRecord) -> None:
        self.y += LINE_HEIGHT
        if record.marker:
            self._draw(record.marker, MARGIN, BOLD, 10)
            lines = self._wrap(record.detail, BOLD, 10, MAX_WIDTH - 30 * mm)
            self._draw_wrapped(lines, MARGIN + 15 * mm, BOLD, 10, LINE_HEIGHT)
        else:
            lines = self._wrap(record.text, BOLD, 10, MAX_WIDTH - 15 * mm)
            self._draw_wrapped(lines, MARGIN, BOLD, 10, LINE_HEIGHT)

    def _paragraph(self, text: str, font: str = REGULAR) -> None:
        if not text:
            return
        lines = self._wrap(text, font, 10, MAX_WIDTH - 15 * mm)
        self.y += LINE_HEIGHT
        self._draw_wrapped(lines, MARGIN, font, 10, LINE_HEIGHT)

    # --- Public API ---

    def render_record(self, record: LineRecord) -> None:
        if record.kind is LineKind.BLANK:
            if self.y <= PAGE_BREAK_Y:
                self.y += LINE_HEIGHT * 0.5
            return

        if self.y > PAGE_BREAK_Y:
            self.new_page()

        if record.kind is LineKind.HEADING:
            self._heading(record.text, HEADING_SIZES.get(record.level, 16))
        elif record.kind is LineKind.DAY_HEADER:
            self._heading(record.text, 16)
        elif record.kind is LineKind.ITEM:
            self._item(record)
        elif record.kind in (LineKind.PLAIN_ITEM, LineKind.BULLET):
            self._bullet(record.text)
        elif record.kind is LineKind.DESCRIPTION:
            self._description(record.text)
        elif record.kind is LineKind.NUMBERED:
            self._numbered(record)
        elif record.kind is LineKind.QUOTE:
            self._paragraph(print_safe(record.text), ITALIC)
        else:
            self._paragraph(print_safe(record.raw))

    def render_plan(self, plan: str, category: PlanCategory = PlanCategory.WORKOUT) -> None:
        """Draws one plan body from the current cursor position."""
        for record in segment(plan, category):
            self.render_record(record)

    def title(self, text: str = DOCUMENT_TITLE) -> None:
        self.canvas.setFont(BOLD, 22)
        self.canvas.drawCentredString(PAGE_WIDTH / 2, self._baseline(), text)
        self.y += 15 * mm

    def section_title(self, text: str) -> None:
        self._draw(text, MARGIN, BOLD, 18)
        self.y += 12 * mm

    def finish(self) -> bytes:
        self.canvas.save()
        return self.buffer.getvalue()


def build_plans_pdf(workout: str, diet: str, motivation: str) -> ExportResult:
    """Lays out all three plans, each section starting on a new page."""
    paginator = PdfPaginator()
    paginator.title()

    plans = {
        PlanCategory.WORKOUT: workout,
        PlanCategory.DIET: diet,
        PlanCategory.MOTIVATION: motivation,
    }
    page_counts: Dict[str, int] = {}
    for position, (category, plan) in enumerate(plans.items()):
        if position > 0:
            paginator.new_page()
        first_page = paginator.page_count
        paginator.section_title(SECTION_TITLES[category])
        paginator.render_plan(plan or "", category)
        page_counts[category.value] = paginator.page_count - first_page + 1

    return ExportResult(success=True, content=paginator.finish(), page_counts=page_counts)


def export_plans_pdf(
    workout: str,
    diet: str,
    motivation: str,
    path: Optional[Union[str, Path]] = None,
) -> ExportResult:
    """
    Exports the three plans as `trainify-ai-plan.pdf`.

    Args:
        workout: Workout plan text.
        diet: Diet plan text.
        motivation: Motivation plan text.
        path: Optional directory or file path to also write the document to.

    Returns:
        An `ExportResult`. Layout or write failures are reported through
        `success=False` and `error` instead of being raised.
    """
    try:
        result = build_plans_pdf(workout, diet, motivation)
        if path is not None:
            target = Path(path)
            if target.is_dir():
                target = target / PDF_FILENAME
            target.write_bytes(result.content)
            logger.info(f"PDF written to {target}")
    except Exception as e:
        logger.exception("PDF export failed")
        return ExportResult(success=False, error=f"Failed to export PDF: {e}")

    logger.info(f"PDF exported ({result.total_pages} pages: {result.page_counts})")
    return result

"""Excel workbook export of the gradebook collections."""

import logging
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from app.models import Snapshot
from app.services.analytics import grade_percentage

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"

STUDENT_COLUMNS = [("Name", 25), ("Email", 30), ("Enrollment Date", 16)]
GRADE_COLUMNS = [
    ("Student", 25),
    ("Exam", 25),
    ("Subject", 15),
    ("Score", 10),
    ("Max Score", 12),
    ("Percentage", 12),
    ("Date", 12),
]
EXAM_COLUMNS = [
    ("Name", 25),
    ("Subject", 15),
    ("Max Score", 12),
    ("Date", 12),
    ("Duration (min)", 15),
]

# Styles
HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin')
)
CENTER_ALIGN = Alignment(horizontal='center', vertical='center')


def build_workbook(snapshot: Snapshot, decimals: int = 1) -> bytes:
    """Render Students, Grades and Exams sheets for a snapshot as .xlsx bytes.

    Percentages in the Grades sheet are written with ``decimals`` places.
    """
    wb = Workbook()

    ws = wb.active
    ws.title = "Students"
    _write_sheet(
        ws,
        STUDENT_COLUMNS,
        (
            [s.name, s.email, s.enrollment_date.strftime(DATE_FORMAT)]
            for s in snapshot.students
        ),
    )

    names = {s.id: s.name for s in snapshot.students}
    grade_rows = []
    for g in snapshot.grades:
        percentage = grade_percentage(g)
        grade_rows.append([
            names.get(g.student_id, "Unknown"),
            g.exam_name,
            g.subject,
            g.score,
            g.max_score,
            f"{percentage:.{decimals}f}%" if percentage is not None else "N/A",
            g.date.strftime(DATE_FORMAT),
        ])
    _write_sheet(wb.create_sheet("Grades"), GRADE_COLUMNS, grade_rows)

    _write_sheet(
        wb.create_sheet("Exams"),
        EXAM_COLUMNS,
        (
            [e.name, e.subject, e.max_score, e.date.strftime(DATE_FORMAT), e.duration_minutes]
            for e in snapshot.exams
        ),
    )

    logger.info(
        f"[EXPORT] Built workbook for snapshot v{snapshot.version}: "
        f"{len(snapshot.students)} students, {len(snapshot.grades)} grades, "
        f"{len(snapshot.exams)} exams"
    )

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output.getvalue()


def _write_sheet(ws: Worksheet, columns: list[tuple[str, int]], rows) -> None:
    """Write a styled header row followed by data rows."""
    for col_idx, (header, width) in enumerate(columns, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.border = THIN_BORDER
        cell.alignment = CENTER_ALIGN
        ws.column_dimensions[get_column_letter(col_idx)].width = width

    for row_idx, row in enumerate(rows, start=2):
        for col_idx, value in enumerate(row, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value).border = THIN_BORDER

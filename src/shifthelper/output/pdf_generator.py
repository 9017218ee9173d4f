"""PDF generation for week schedule output.

This module creates a printable PDF showing:
- A seven-column week grid with each day's shifts and assigned employees
- A conflicts page listing understaffed shifts and why employees were excluded
"""

from io import BytesIO
from pathlib import Path
from typing import Union

from shifthelper.domain.models import (
    AssignedShift,
    DaySchedule,
    ShiftType,
    WeekSchedule,
)
from shifthelper.domain.timewindow import format_time_of_day

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    ShiftType.MORNING: (0.99, 0.85, 0.55),  # Amber
    ShiftType.AFTERNOON: (0.55, 0.75, 0.95),  # Blue
    ShiftType.NIGHT: (0.65, 0.6, 0.85),  # Violet
    ShiftType.CUSTOM: (0.7, 0.85, 0.7),  # Green
    "closed": (0.9, 0.9, 0.9),  # Light gray
    "conflict": (0.85, 0.2, 0.2),  # Red
}

DAY_NAMES = ["Dom", "Seg", "Ter", "Qua", "Qui", "Sex", "Sáb"]


class PDFGenerator:
    """Generates printable PDF week schedules.

    Example:
        >>> generator = PDFGenerator()
        >>> generator.generate(week, "schedule.pdf")
    """

    def __init__(
        self,
        page_width: float = 792,  # Letter landscape width (11")
        page_height: float = 612,  # Letter landscape height (8.5")
        margin: float = 36,  # 0.5 inch margins
        title: str = "Escala Semanal",
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.title = title

    def generate(
        self,
        week: WeekSchedule,
        output_path: Union[str, Path],
        include_conflicts: bool = True,
    ) -> None:
        """Generate PDF schedule and save to file.

        Args:
            week: The week schedule to render.
            output_path: Path to save the PDF.
            include_conflicts: Whether to add the conflicts page.
        """
        from reportlab.pdfgen import canvas

        c = canvas.Canvas(str(output_path), pagesize=(self.page_width, self.page_height))
        self._draw(c, week, include_conflicts)
        c.save()

    def generate_to_buffer(
        self,
        week: WeekSchedule,
        include_conflicts: bool = True,
    ) -> BytesIO:
        """Generate PDF and return as bytes buffer."""
        from reportlab.pdfgen import canvas

        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=(self.page_width, self.page_height))
        self._draw(c, week, include_conflicts)
        c.save()
        buffer.seek(0)
        return buffer

    def _draw(self, c, week: WeekSchedule, include_conflicts: bool) -> None:
        self._draw_week_page(c, week)
        if include_conflicts and week.total_conflicts:
            self._draw_conflicts_page(c, week)

    def _draw_week_page(self, c, week: WeekSchedule) -> None:
        """Draw the week grid."""
        header_height = 50
        self._draw_header(c, week)

        grid_top = self.page_height - self.margin - header_height
        grid_bottom = self.margin + 20
        column_width = (self.page_width - 2 * self.margin) / 7

        for i, day in enumerate(week.days):
            x = self.margin + i * column_width
            self._draw_day_column(c, day, x, grid_top, grid_bottom, column_width)

        c.setFont("Helvetica", 8)
        c.setFillColorRGB(0, 0, 0)
        c.drawString(
            self.margin,
            self.margin,
            f"Turnos: {week.total_shifts}   Alocações: {week.total_assignments}   "
            f"Conflitos: {week.total_conflicts}",
        )
        c.showPage()

    def _draw_header(self, c, week: WeekSchedule) -> None:
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"{self.title} - {week.week_start_date.strftime('%d/%m/%Y')} a "
            f"{week.week_end_date.strftime('%d/%m/%Y')}",
        )

    def _draw_day_column(
        self,
        c,
        day: DaySchedule,
        x: float,
        top: float,
        bottom: float,
        width: float,
    ) -> None:
        """Draw one day's column: header, then a block per shift."""
        c.setStrokeColorRGB(0.6, 0.6, 0.6)
        c.setLineWidth(0.5)
        c.rect(x, bottom, width, top - bottom, fill=0, stroke=1)

        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 10)
        c.drawCentredString(
            x + width / 2,
            top - 14,
            f"{DAY_NAMES[day.day_of_week]} {day.schedule_date.strftime('%d/%m')}",
        )

        if not day.is_open:
            c.setFillColorRGB(*COLORS["closed"])
            c.rect(x + 2, bottom + 2, width - 4, top - bottom - 24, fill=1, stroke=0)
            c.setFillColorRGB(0.4, 0.4, 0.4)
            c.setFont("Helvetica-Oblique", 9)
            c.drawCentredString(x + width / 2, (top + bottom) / 2, "Fechado")
            return

        y = top - 24
        for shift in day.shifts:
            y = self._draw_shift_block(c, shift, x + 3, y, width - 6)
            if y < bottom + 10:
                break

    def _draw_shift_block(
        self,
        c,
        shift: AssignedShift,
        x: float,
        y: float,
        width: float,
    ) -> float:
        """Draw a shift block and return the y position below it."""
        line_height = 10
        lines = max(1, shift.assigned_count)
        height = 14 + lines * line_height
        block_y = y - height

        c.setFillColorRGB(*COLORS.get(shift.shift_type, (0.8, 0.8, 0.8)))
        c.rect(x, block_y, width, height, fill=1, stroke=0)
        if shift.is_understaffed:
            c.setStrokeColorRGB(*COLORS["conflict"])
            c.setLineWidth(1.5)
            c.rect(x, block_y, width, height, fill=0, stroke=1)

        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 7)
        c.drawString(
            x + 3,
            y - 9,
            f"{shift.shift_label} {format_time_of_day(shift.start_time)}-"
            f"{format_time_of_day(shift.end_time)} "
            f"({shift.assigned_count}/{shift.min_employees})",
        )

        c.setFont("Helvetica", 7)
        text_y = y - 9 - line_height
        if not shift.assignees:
            c.setFillColorRGB(*COLORS["conflict"])
            c.drawString(x + 5, text_y, "sem funcionários")
        for assignee in shift.assignees:
            c.drawString(x + 5, text_y, assignee.name[:22])
            text_y -= line_height

        return block_y - 4

    def _draw_conflicts_page(self, c, week: WeekSchedule) -> None:
        """Draw a page listing every conflict with exclusion reasons."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"Conflitos - semana de {week.week_start_date.strftime('%d/%m/%Y')}",
        )

        y = self.page_height - self.margin - 50
        for day in week.days:
            for conflict in day.conflicts:
                if y < self.margin + 40:
                    c.showPage()
                    y = self.page_height - self.margin - 20

                c.setFillColorRGB(*COLORS["conflict"])
                c.setFont("Helvetica-Bold", 10)
                c.drawString(
                    self.margin,
                    y,
                    f"{DAY_NAMES[day.day_of_week]} {day.schedule_date.strftime('%d/%m')} - "
                    f"{conflict.shift_label}: {conflict.available}/{conflict.required}",
                )
                y -= 14

                c.setFillColorRGB(0, 0, 0)
                c.setFont("Helvetica", 9)
                for employee in conflict.unavailable_employees:
                    c.drawString(self.margin + 20, y, f"{employee.name}: {employee.reason}")
                    y -= 12
                    if y < self.margin + 20:
                        c.showPage()
                        c.setFont("Helvetica", 9)
                        y = self.page_height - self.margin - 20
                y -= 6

        c.showPage()

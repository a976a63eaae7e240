"""PDF generation for schedule output.

This module creates printable PDF schedules showing:
- A grid of days and slots with assigned staff and alerts
- A dashboard page with KPIs and per-staff workload
"""

from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from shiftplanner.domain.directory import StaffDirectory
from shiftplanner.domain.models import DaySchedule, Schedule, ShiftAssignment
from shiftplanner.scheduling.aggregator import StatisticsAggregator

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    "filled": (0.82, 0.93, 0.82),  # Green
    "shortage": (1.0, 0.93, 0.7),  # Yellow
    "empty": (0.98, 0.8, 0.8),  # Light red
    "conflict_text": (0.8, 0.1, 0.1),  # Red
    "header": (0.9, 0.9, 0.95),  # Light blue/gray
    "grid": (0.6, 0.6, 0.6),
}

# Built-in reportlab CID font covering Japanese text
UNICODE_FONT = "HeiseiKakuGo-W5"

LINE_HEIGHT = 10


class PDFGenerator:
    """Generates printable PDF schedules.

    Example:
        >>> generator = PDFGenerator()
        >>> generator.generate(schedule, directory, "schedule.pdf")

    Standard PDF fonts only cover Latin text. Pass ``unicode_font=True``
    for names or alerts in Japanese.
    """

    def __init__(
        self,
        page_width: float = 792,  # Letter landscape width (11")
        page_height: float = 612,  # Letter landscape height (8.5")
        margin: float = 36,  # 0.5 inch margins
        unicode_font: bool = False,
        aggregator: Optional[StatisticsAggregator] = None,
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.unicode_font = unicode_font
        self.aggregator = aggregator or StatisticsAggregator()
        self.font = "Helvetica"
        self.bold_font = "Helvetica-Bold"

    def generate(
        self,
        schedule: Schedule,
        directory: StaffDirectory,
        output_path: Union[str, Path],
        include_dashboard: bool = True,
    ) -> None:
        """Generate PDF schedule and save to file.

        Args:
            schedule: The schedule to render.
            directory: Staff directory the schedule was generated from.
            output_path: Path to save the PDF.
            include_dashboard: Whether to include the dashboard page.
        """
        self._render(str(output_path), schedule, directory, include_dashboard)

    def generate_to_buffer(
        self,
        schedule: Schedule,
        directory: StaffDirectory,
        include_dashboard: bool = True,
    ) -> BytesIO:
        """Generate PDF and return as bytes buffer."""
        buffer = BytesIO()
        self._render(buffer, schedule, directory, include_dashboard)
        buffer.seek(0)
        return buffer

    def _render(self, target, schedule: Schedule, directory: StaffDirectory,
                include_dashboard: bool) -> None:
        try:
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )

        self._setup_fonts()
        c = canvas.Canvas(target, pagesize=(self.page_width, self.page_height))

        self._draw_schedule_pages(c, schedule)

        if include_dashboard:
            self._draw_dashboard_page(c, schedule, directory)

        c.save()

    def _setup_fonts(self) -> None:
        if not self.unicode_font:
            self.font = "Helvetica"
            self.bold_font = "Helvetica-Bold"
            return

        from reportlab.pdfbase import pdfmetrics
        from reportlab.pdfbase.cidfonts import UnicodeCIDFont

        if UNICODE_FONT not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(UnicodeCIDFont(UNICODE_FONT))
        self.font = UNICODE_FONT
        self.bold_font = UNICODE_FONT

    def _draw_schedule_pages(self, c, schedule: Schedule) -> None:
        """Draw the day/slot grid, as many pages as needed."""
        header_height = 60
        footer_height = 20
        label_width = 110
        grid_top = self.page_height - self.margin - header_height
        grid_bottom = self.margin + footer_height

        if schedule.is_empty:
            self._draw_header(c, schedule)
            c.setFont(self.font, 11)
            c.drawString(self.margin, grid_top, "No schedule has been generated.")
            c.showPage()
            return

        slots = [shift.slot for shift in schedule.days[0].shifts]
        column_width = (self.page_width - 2 * self.margin - label_width) / len(slots)

        page_num = 1
        y = self._start_grid_page(c, schedule, slots, label_width, column_width, grid_top)
        for day in schedule.days:
            row_height = self._row_height(day)
            if y - row_height < grid_bottom:
                self._draw_page_number(c, page_num)
                c.showPage()
                page_num += 1
                y = self._start_grid_page(c, schedule, slots, label_width, column_width, grid_top)
            y -= row_height
            self._draw_day_row(c, day, y, row_height, label_width, column_width)

        self._draw_page_number(c, page_num)
        c.showPage()

    def _start_grid_page(self, c, schedule: Schedule, slots, label_width: float,
                         column_width: float, top: float) -> float:
        """Draw header and column titles; return the y below them."""
        self._draw_header(c, schedule)

        title_height = 16
        y = top - title_height
        c.setFillColorRGB(*COLORS["header"])
        c.rect(self.margin, y, label_width + column_width * len(slots), title_height,
               fill=1, stroke=0)
        c.setFillColorRGB(0, 0, 0)
        c.setFont(self.bold_font, 9)
        c.drawString(self.margin + 4, y + 4, "Date")
        for i, slot in enumerate(slots):
            x = self.margin + label_width + i * column_width
            c.drawString(x + 4, y + 4, slot.label)
        return y

    def _draw_header(self, c, schedule: Schedule) -> None:
        """Draw page header with date range and headcount."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont(self.bold_font, 16)
        if schedule.is_empty:
            title = "Shift Schedule"
        else:
            title = f"Shift Schedule - {schedule.start_date} to {schedule.end_date}"
        c.drawString(self.margin, self.page_height - self.margin - 20, title)

        c.setFont(self.font, 10)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 35,
            f"Required staff per slot: {schedule.required_count}",
        )

    def _row_height(self, day: DaySchedule) -> float:
        lines = max((s.assigned_count + len(s.alerts) for s in day.shifts), default=1)
        return max(1, lines) * LINE_HEIGHT + 8

    def _draw_day_row(self, c, day: DaySchedule, y: float, height: float,
                      label_width: float, column_width: float) -> None:
        """Draw a single day's row of slot cells."""
        c.setStrokeColorRGB(*COLORS["grid"])
        c.setLineWidth(0.5)

        c.setFillColorRGB(0, 0, 0)
        c.setFont(self.bold_font, 9)
        c.drawString(self.margin + 4, y + height - 12, day.schedule_date.isoformat())
        c.setFont(self.font, 8)
        c.drawString(self.margin + 4, y + height - 22, day.schedule_date.strftime("%A"))
        c.rect(self.margin, y, label_width, height, fill=0, stroke=1)

        for i, shift in enumerate(day.shifts):
            x = self.margin + label_width + i * column_width
            self._draw_shift_cell(c, shift, x, y, column_width, height)

    def _draw_shift_cell(self, c, shift: ShiftAssignment, x: float, y: float,
                         width: float, height: float) -> None:
        """Draw one slot cell: background by fill level, names, then alerts."""
        if shift.assigned_count == 0:
            color = COLORS["empty"]
        elif shift.shortfall:
            color = COLORS["shortage"]
        else:
            color = COLORS["filled"]
        c.setFillColorRGB(*color)
        c.rect(x, y, width, height, fill=1, stroke=1)

        max_chars = int(width / 4.5)
        text_y = y + height - 12
        c.setFillColorRGB(0, 0, 0)
        c.setFont(self.font, 8)
        for member in shift.assigned_staff:
            c.drawString(x + 4, text_y, f"{member.name} ({member.skill})"[:max_chars])
            text_y -= LINE_HEIGHT

        c.setFillColorRGB(*COLORS["conflict_text"])
        c.setFont(self.font, 7)
        for alert in shift.alerts:
            c.drawString(x + 4, text_y, f"! {alert.message}"[:max_chars])
            text_y -= LINE_HEIGHT
        c.setFillColorRGB(0, 0, 0)

    def _draw_page_number(self, c, page_num: int) -> None:
        c.setFont(self.font, 9)
        c.drawCentredString(self.page_width / 2, self.margin - 10, f"Page {page_num}")

    def _draw_dashboard_page(self, c, schedule: Schedule, directory: StaffDirectory) -> None:
        """Draw dashboard page with KPIs and the per-staff table."""
        summary = self.aggregator.summarize(schedule, directory)
        stats = self.aggregator.aggregate(schedule, directory)

        c.setFillColorRGB(0, 0, 0)
        c.setFont(self.bold_font, 16)
        c.drawString(self.margin, self.page_height - self.margin - 20, "Dashboard")

        y = self.page_height - self.margin - 60
        c.setFont(self.bold_font, 12)
        c.drawString(self.margin, y, "Overview")
        y -= 20

        c.setFont(self.font, 10)
        for line in [
            f"Total Staff: {summary.total_staff}",
            f"Total Slots: {summary.total_slots}",
            f"Average Fulfillment: {summary.fulfillment_percent}%",
            f"Understaffed Slots: {summary.shortage_slots}",
            f"Conflict Alerts: {summary.conflict_alerts}",
        ]:
            c.drawString(self.margin + 20, y, line)
            y -= 15

        y -= 15
        c.setFont(self.bold_font, 12)
        c.drawString(self.margin, y, "Workload by Staff")
        y -= 18

        columns = [("Name", 0), ("Slots", 200), ("Hours", 260), ("Days", 320)]
        c.setFont(self.bold_font, 9)
        for title, offset in columns:
            c.drawString(self.margin + 20 + offset, y, title)
        y -= 14

        for stat in stats:
            if y < self.margin + 10:
                c.showPage()
                y = self.page_height - self.margin - 20
            c.setFont(self.font, 9)
            values = [
                stat.name[:30],
                str(stat.total_assigned_slots),
                f"{stat.derived_work_hours}h",
                f"{stat.derived_work_days}d",
            ]
            for (_, offset), value in zip(columns, values):
                c.drawString(self.margin + 20 + offset, y, value)
            y -= 13

        c.showPage()

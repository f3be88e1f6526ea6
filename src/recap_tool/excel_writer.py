"""Exportación del recap a Excel: tabla diaria y calendario por semanas."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from recap_tool.calendar_grid import DAY_LABELS
from recap_tool.model import Recap, WeekColumn

_HEADER_MAP: dict[str, str] = {
    "weekday": "Day",
    "date": "Date",
    "activities": "Activities",
    "minutes": "Minutes",
    "distance": "Distance",
    "metric": "Effort metric",
    "value": "Effort value",
    "score": "Effort score",
    "level": "Level",
    "types": "Types",
}

# Fill per effort level, 0 (rest) to 4.
LEVEL_FILLS: tuple[str, ...] = ("EBEDF0", "C6E48B", "7BC96F", "239A3B", "196127")
OUTSIDE_FILL = "F6F8FA"

# header -> (column width, number format)
_DAY_COLUMNS: dict[str, tuple[int | None, str | None]] = {
    "Day": (6, None),
    "Date": (12, "yyyy-mm-dd"),
    "Activities": (10, "0"),
    "Minutes": (9, "0"),
    "Distance": (10, "0.00"),
    "Effort metric": (13, None),
    "Effort value": (12, "0.00"),
    "Effort score": (12, "0"),
    "Level": (7, "0"),
    "Types": (30, None),
}

_THIN = Side(style="thin")
_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)


@dataclass(frozen=True)
class ExcelLayout:
    """Layout/formatting configuration for the recap workbook."""

    days_sheet: str = "Days"
    calendar_sheet: str = "Calendar"


def recap_days_frame(recap: Recap) -> pd.DataFrame:
    """One row per day of the window with its effort."""
    rows = [
        {
            "weekday": DAY_LABELS[d.day.weekday()],
            "date": d.day,
            "activities": d.activity_count,
            "minutes": d.total_duration_minutes,
            "distance": d.total_distance,
            "metric": d.effort_metric.value,
            "value": d.effort_value,
            "score": d.effort_score,
            "level": d.level,
            "types": ", ".join(d.activity_types),
        }
        for d in recap.days
    ]
    return pd.DataFrame(rows, columns=list(_HEADER_MAP))


def write_recap_xlsx(recap: Recap, out_path: Path, layout: ExcelLayout) -> None:
    """Write the recap workbook.

    Args:
        recap: Recap to export.
        out_path: Output path for the XLSX file.
        layout: Sheet names.
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)

    export_df = recap_days_frame(recap).rename(columns=_HEADER_MAP)

    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        export_df.to_excel(writer, index=False, sheet_name=layout.days_sheet)
        _format_sheet(writer.book[layout.days_sheet])

        ws = writer.book.create_sheet(layout.calendar_sheet)
        _write_calendar(ws, recap.weeks)


def _write_calendar(ws: Any, weeks: list[WeekColumn]) -> None:
    """Semanas como columnas, lunes a domingo como filas."""
    center = Alignment(horizontal="center", vertical="center")

    for row, label in enumerate(DAY_LABELS, start=2):
        ws.cell(row=row, column=1, value=label).font = Font(bold=True)
    ws.column_dimensions["A"].width = 6

    for week in weeks:
        col = week.index + 2
        header = ws.cell(row=1, column=col, value=week.month_label or "")
        header.font = Font(bold=True)
        header.alignment = center
        for row, cell in enumerate(week.cells, start=2):
            target = ws.cell(row=row, column=col)
            target.border = _BORDER
            target.alignment = center
            if cell.day is not None and not cell.outside:
                target.value = cell.day.day
            color = OUTSIDE_FILL if cell.outside else LEVEL_FILLS[cell.level]
            target.fill = PatternFill(start_color=color, end_color=color, fill_type="solid")
        ws.column_dimensions[ws.cell(row=1, column=col).column_letter].width = 5


def _format_sheet(ws: Any) -> None:
    """Bold bordered header, centred bordered body, per-column width and format.

    Headers missing from the column table keep openpyxl defaults.

    Args:
        ws: openpyxl worksheet with the header in row 1.
    """
    header_font = Font(bold=True)
    header_align = Alignment(horizontal="center", vertical="center", wrap_text=True)
    body_align = Alignment(horizontal="center", vertical="center")

    for cell in ws[1]:
        cell.font = header_font
        cell.alignment = header_align
        cell.border = _BORDER
        width, fmt = _DAY_COLUMNS.get(str(cell.value), (None, None))
        if width is not None:
            ws.column_dimensions[cell.column_letter].width = width
        for (body,) in ws.iter_rows(min_row=2, min_col=cell.column, max_col=cell.column):
            body.alignment = body_align
            body.border = _BORDER
            if fmt is not None:
                body.number_format = fmt
    ws.freeze_panes = "A2"

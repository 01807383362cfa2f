"""
Turns a TableState into display rows following the column configuration.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from src.client.table_state import LoadPhase, TableState
from src.models.dto.config_dto import ColumnConfig
from src.models.dto.drug_dto import DrugResponse

EMPTY_CELL = "—"
CHARS_PER_WIDTH_UNIT = 8


@dataclass(frozen=True)
class Cell:
    key: str
    text: str
    # Set on clickable cells: the company to filter by when clicked
    filter_value: Optional[str] = None


def format_date(value: Optional[datetime]) -> str:
    """Day.month.year, e.g. 05.03.2024."""
    if value is None:
        return "Invalid Date"
    return value.strftime("%d.%m.%Y")


def visible_columns(state: TableState) -> List[ColumnConfig]:
    if state.config is None:
        return []
    return [column for column in state.config.columns if column.visible]


def render_cell(drug: DrugResponse, column: ColumnConfig) -> Cell:
    value = getattr(drug, _attribute_name(column.key), None)
    if column.type == 'date' or isinstance(value, datetime):
        return Cell(column.key, format_date(value))
    text = EMPTY_CELL if value is None or value == "" else str(value)
    if column.clickable:
        return Cell(column.key, text, filter_value=str(value) if value else None)
    return Cell(column.key, text)


def build_rows(state: TableState) -> List[List[Cell]]:
    columns = visible_columns(state)
    return [[render_cell(drug, column) for column in columns] for drug in state.drugs]


def summary_line(state: TableState) -> str:
    """'Drug List (Filtered by: X)' plus the total count."""
    title = "Drug List"
    if state.selected_company:
        title += f" (Filtered by: {state.selected_company})"
    return f"{title}    Total: {state.total_count:,} drugs"


def render_text(state: TableState) -> str:
    """Plain text rendering of the table, used by terminals and logs."""
    if state.phase == LoadPhase.LOADING:
        return "Loading Drug Information..."

    lines = []
    if state.error:
        lines.append(f"[error] {state.error}")
    if state.config is None:
        return "\n".join(lines)

    lines.append(summary_line(state))
    if state.phase == LoadPhase.FILTERING:
        lines.append("Loading drugs...")

    columns = visible_columns(state)
    widths = [max(len(column.label), (column.width or 80) // CHARS_PER_WIDTH_UNIT) for column in columns]
    lines.append(" | ".join(column.label.ljust(width) for column, width in zip(columns, widths)))
    lines.append("-+-".join("-" * width for width in widths))

    rows = build_rows(state)
    if not rows:
        lines.append("No drugs found")
    for row in rows:
        lines.append(" | ".join(_fit(cell.text, width) for cell, width in zip(row, widths)))

    lines.append(f"Page {state.current_page} of {max(state.total_pages, 1)}")
    return "\n".join(lines)


def _fit(text: str, width: int) -> str:
    if len(text) <= width:
        return text.ljust(width)
    return text[:width - 1] + "…"


def _attribute_name(key: str) -> str:
    """camelCase column key -> snake_case DTO attribute."""
    return "".join(f"_{ch.lower()}" if ch.isupper() else ch for ch in key)

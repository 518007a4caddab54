"""
Excel Parser Service
Reads an uploaded workbook and turns its columns into department previews.
"""
import logging
from io import BytesIO
from typing import Any, List, Tuple, Union

from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from cel_schedule.schemas.batch_import import (
    DepartmentPreview,
    SheetValidationError,
    ValidationErrorType,
)

logger = logging.getLogger(__name__)

# Row layout of each department column
DEPARTMENT_NAME_ROW = 0
HEAD_ROW = 1


class SpreadsheetReadError(Exception):
    """The upload could not be read as a workbook."""


class ExcelParserService:
    """Service for reading workbook content from an upload."""

    def __init__(self, content: Union[bytes, BytesIO]):
        """Initialize with the raw bytes of an Excel file."""
        self.content = BytesIO(content) if isinstance(content, bytes) else content
        self.workbook = None

    def __enter__(self):
        """Context manager entry - load workbook."""
        try:
            self.workbook = load_workbook(self.content, read_only=True, data_only=True)
        except Exception as e:
            raise SpreadsheetReadError(str(e) or e.__class__.__name__) from e
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - close workbook."""
        if self.workbook:
            self.workbook.close()

    def get_sheet_names(self) -> List[str]:
        """Get list of sheet names in the workbook."""
        if not self.workbook:
            raise ValueError("Workbook not loaded. Use context manager.")
        return self.workbook.sheetnames

    def get_first_sheet(self) -> Worksheet:
        """Get the first worksheet of the workbook."""
        sheet_names = self.get_sheet_names()
        if not sheet_names:
            raise SpreadsheetReadError("Excel file has no sheets")
        return self.workbook[sheet_names[0]]

    def read_rows(self) -> List[List[str]]:
        """
        Read the first worksheet as a grid of trimmed strings.

        Empty cells become empty strings. Trailing empty rows are dropped.

        Raises:
            SpreadsheetReadError: If the sheet XML cannot be parsed
        """
        sheet = self.get_first_sheet()
        # Read-only sheets are parsed lazily while iterating
        try:
            rows = [
                [self._format_cell_value(value) for value in row]
                for row in sheet.iter_rows(values_only=True)
            ]
        except Exception as e:
            raise SpreadsheetReadError(str(e) or e.__class__.__name__) from e
        while rows and not any(rows[-1]):
            rows.pop()
        return rows

    @staticmethod
    def _format_cell_value(value: Any) -> str:
        """Format a cell value for display."""
        if value is None:
            return ""
        # Whole numbers come back as floats
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value).strip()


def parse_departments(
    rows: List[List[str]],
) -> Tuple[List[DepartmentPreview], List[SheetValidationError]]:
    """
    Parse a grid into department previews.

    Each column is one department: row 0 holds the department name, row 1 the
    head and the remaining rows the members. Blank cells are skipped and fully
    blank columns are ignored.

    Args:
        rows: Sheet content, row by row

    Returns:
        Valid department previews and the validation errors found
    """
    if not rows:
        return [], [
            SheetValidationError(
                error_type=ValidationErrorType.INVALID_FILE_FORMAT,
                message="Excel file is empty",
            )
        ]

    departments: List[DepartmentPreview] = []
    errors: List[SheetValidationError] = []
    max_cols = max(len(row) for row in rows)

    for col_idx in range(max_cols):
        department_name = ""
        head_name = ""
        members: List[str] = []
        seen_members = set()

        for row_idx, row in enumerate(rows):
            if col_idx >= len(row):
                continue
            value = (row[col_idx] or "").strip()
            if not value:
                continue

            if row_idx == DEPARTMENT_NAME_ROW:
                department_name = value
            elif row_idx == HEAD_ROW:
                head_name = value
            else:
                key = value.lower()
                if key in seen_members:
                    errors.append(SheetValidationError(
                        error_type=ValidationErrorType.DUPLICATE_IN_COLUMN,
                        message=f"Duplicate volunteer '{value}' in column {col_idx + 1}",
                        column_index=col_idx,
                        row_index=row_idx,
                        department_name=department_name or None,
                    ))
                    continue
                seen_members.add(key)
                members.append(value)

        if not department_name and not head_name and not members:
            continue

        if not department_name:
            errors.append(SheetValidationError(
                error_type=ValidationErrorType.EMPTY_DEPARTMENT_NAME,
                message=f"Department name is empty in column {col_idx + 1}",
                column_index=col_idx,
            ))
            continue

        if not head_name:
            errors.append(SheetValidationError(
                error_type=ValidationErrorType.EMPTY_HEAD,
                message=f"Department head is empty for '{department_name}'",
                column_index=col_idx,
                department_name=department_name,
            ))
            continue

        if head_name.lower() in seen_members:
            errors.append(SheetValidationError(
                error_type=ValidationErrorType.DUPLICATE_IN_COLUMN,
                message=f"Department head '{head_name}' is also listed as a member",
                column_index=col_idx,
                department_name=department_name,
            ))
            continue

        departments.append(DepartmentPreview(
            department_name=department_name,
            head_name=head_name,
            members=members,
            column_index=col_idx,
        ))

    logger.info(
        "Parsed %d departments with %d validation errors", len(departments), len(errors)
    )
    return departments, errors


async def parse_excel_file(
    content: bytes,
) -> Tuple[List[DepartmentPreview], List[SheetValidationError], int]:
    """
    Async wrapper for reading an uploaded workbook and parsing its first sheet.

    Returns:
        Department previews, validation errors and the number of rows read

    Raises:
        SpreadsheetReadError: If the content is not a readable workbook
    """
    with ExcelParserService(content) as parser:
        rows = parser.read_rows()
    departments, errors = parse_departments(rows)
    return departments, errors, len(rows)

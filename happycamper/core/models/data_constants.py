"""
Empty-value convention shared by every roster component.

Several concrete strings mean "no data" depending on where a value came from
(CSV import, feature output, display layer). Everything that needs to know
whether a cell is empty goes through is_empty().
"""

EMPTY_VALUE = None
DISPLAY_EMPTY = " - "
DISPLAY_NO_DATA = "No Data"
EXPORT_EMPTY = ""


def is_empty(value: str | None) -> bool:
    """
    Check whether a cell value is semantically empty.

    None, empty string, whitespace-only, and both display placeholders
    count as empty.

    Args:
        value: Cell value to check

    Returns:
        True if the value carries no data
    """
    if value is None:
        return True
    return (
        value == EXPORT_EMPTY
        or value == DISPLAY_NO_DATA
        or value == DISPLAY_EMPTY
        or value.strip() == ""
    )


def normalize_empty(value: str | None) -> str | None:
    """Trim a value and collapse "no data" strings to EMPTY_VALUE."""
    if value is None:
        return EMPTY_VALUE
    value = value.strip()
    if value == "" or value == DISPLAY_NO_DATA:
        return EMPTY_VALUE
    return value


def get_display_value(value: str | None, use_placeholder: bool = True) -> str:
    """
    Get the value to show in a table cell.

    Args:
        value: Raw cell value
        use_placeholder: Show "No Data" for empty cells instead of " - "

    Returns:
        Display string
    """
    if is_empty(value):
        return DISPLAY_NO_DATA if use_placeholder else DISPLAY_EMPTY
    return value


def get_export_value(value: str | None) -> str:
    return EXPORT_EMPTY if is_empty(value) else value

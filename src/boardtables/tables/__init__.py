"""Table projection of a board snapshot."""

from boardtables.tables.builder import HEADINGS, NOTES_HEADING, Table, build_row, build_tables

__all__ = [
    "HEADINGS",
    "NOTES_HEADING",
    "Table",
    "build_row",
    "build_tables",
]

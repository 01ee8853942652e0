from .reader import CsvReadError, EmptyTableError, InvalidFileTypeError, frame_to_table, read_csv_table

__all__ = [
    "CsvReadError",
    "EmptyTableError",
    "InvalidFileTypeError",
    "frame_to_table",
    "read_csv_table",
]

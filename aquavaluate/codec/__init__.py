from .csv_codec import IMPUTED_MARKER, parse_annotated, parse_number, serialize

__all__ = [
    "IMPUTED_MARKER",
    "serialize",
    "parse_annotated",
    "parse_number",
]

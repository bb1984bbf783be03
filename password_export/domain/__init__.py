from .entry import Entry, RowSample, ExtractionResult

__all__ = [
    'Entry',
    'RowSample',
    'ExtractionResult',
]

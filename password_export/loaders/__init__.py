from password_export.loaders.csv_encoder import (
    HEADER,
    build_document,
    encode_cell,
    encode_entries,
    encode_rows,
)
from password_export.loaders.local import LocalStorageClient

__all__ = [
    'HEADER',
    'LocalStorageClient',
    'build_document',
    'encode_cell',
    'encode_entries',
    'encode_rows',
]

from typing import Iterable, Sequence

from password_export.domain import Entry

HEADER = [
    'Title',
    'Login URL',
    'Login Username',
    'Login Password',
    'Additional URLs',
]

# Additional URLs share the last cell. URLs never contain spaces.
ADDITIONAL_URL_SEPARATOR = ' '

LINE_BREAKS = '\n\r\v\f\x1c\x1d\x1e\x85\u2028\u2029'

# Unlike RFC 4180, a space on its own also forces quoting. Importers of the
# exported file rely on this, so keep it.
QUOTE_TRIGGERS = frozenset(',' + ' ' + '"' + LINE_BREAKS)

CsvDocument = list[list[str]]


def encode_cell(value: str | None) -> str:
    """Escape a single cell: double embedded quotes, then quote the cell if needed."""
    if not value:
        return ''

    escaped = value.replace('"', '""')
    if any(ch in QUOTE_TRIGGERS for ch in escaped):
        return f'"{escaped}"'
    return escaped


def encode_row(row: Iterable[str | None]) -> str:
    return ','.join(encode_cell(cell) for cell in row)


def encode_rows(rows: Iterable[Iterable[str | None]]) -> str:
    """Encode rows of cells, joined with a single line feed and no trailing newline."""
    return '\n'.join(encode_row(row) for row in rows)


def entry_to_row(entry: Entry) -> list[str]:
    return [
        entry.title or '',
        entry.site_url or '',
        entry.username or '',
        entry.password or '',
        ADDITIONAL_URL_SEPARATOR.join(entry.additional_urls),
    ]


def build_document(entries: Sequence[Entry]) -> CsvDocument:
    """Build the CSV rows for the given entries, with the fixed header first."""
    return [list(HEADER)] + [entry_to_row(entry) for entry in entries]


def encode_entries(entries: Sequence[Entry]) -> str:
    return encode_rows(build_document(entries))

from password_export.extractors.base import FieldUnavailable, OpenFailure, Source, SourceProtocolError
from password_export.extractors.errors import (
    AbortReason,
    EmptySourceError,
    ExportError,
    ExternalAbortError,
    ExtractionAborted,
    GlobalTimeoutError,
    RowOpenFailure,
    UnstableSourceError,
    WriteFailure,
)
from password_export.extractors.stabilizer import RowCountStabilizer
from password_export.extractors.detail_collector import DetailCollector
from password_export.extractors.engine import EngineState, ExtractionEngine, row_indices
from password_export.extractors.recorded import RecordedSource, get_source

__all__ = [
    'AbortReason',
    'DetailCollector',
    'EmptySourceError',
    'EngineState',
    'ExportError',
    'ExternalAbortError',
    'ExtractionAborted',
    'ExtractionEngine',
    'FieldUnavailable',
    'GlobalTimeoutError',
    'OpenFailure',
    'RecordedSource',
    'RowCountStabilizer',
    'RowOpenFailure',
    'Source',
    'SourceProtocolError',
    'UnstableSourceError',
    'WriteFailure',
    'get_source',
    'row_indices',
]

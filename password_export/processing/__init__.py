from password_export.processing.extraction_stats import ExtractionStats

__all__ = [
    'ExtractionStats',
]

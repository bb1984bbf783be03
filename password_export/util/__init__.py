from password_export.util.retry import retry_on
from password_export.util.timestamped_logger import TimestampedLogger

__all__ = [
    'retry_on',
    'TimestampedLogger',
]

import os
import tempfile
from pathlib import Path
from typing import Iterable

from password_export.extractors.errors import WriteFailure
from password_export.loaders.csv_encoder import encode_rows


class LocalStorageClient:
    """Client for writing export files to a local directory."""

    def __init__(self, base_dir: str | Path = '.'):
        """
        Initialize the local storage client.

        Args:
            base_dir: The directory that relative file paths are resolved against
        """
        self.base_dir = Path(base_dir).resolve()

    def file_exists(self, file_path: str | Path) -> bool:
        """
        Check if a file exists in the local storage.

        Args:
            file_path: The path to the file, absolute or relative to base_dir

        Returns:
            True if the file exists, False otherwise
        """
        return self._resolve(file_path).exists()

    def write_csv(self, file_path: str | Path, rows: Iterable[Iterable[str]], encoding: str = 'utf-8') -> Path:
        """
        Write CSV rows to a local file, replacing any existing file.

        The rows are encoded in full first and written to a temporary file in
        the same directory, which then replaces the target. A failed write
        leaves any previous file untouched.

        Args:
            file_path: The path to the file, absolute or relative to base_dir
            rows: The CSV data as an iterable of rows, header first
            encoding: 'utf-8' (default) or 'utf-16'

        Returns:
            Path: The full path of the written file

        Raises:
            WriteFailure: If the file could not be encoded or written
        """
        full_path = self._resolve(file_path)
        text = encode_rows(rows)

        temp_name = None
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            data = text.encode(encoding)

            fd, temp_name = tempfile.mkstemp(dir=full_path.parent, prefix=f".{full_path.name}.", suffix='.tmp')
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
            os.replace(temp_name, full_path)
            temp_name = None
        except (OSError, UnicodeError, LookupError) as e:
            raise WriteFailure(str(full_path), e) from e
        finally:
            if temp_name is not None and os.path.exists(temp_name):
                os.remove(temp_name)

        print(f"    Written to: {full_path}")
        return full_path

    def _resolve(self, file_path: str | Path) -> Path:
        return self.base_dir / file_path

"""Upload storage on local disk."""
import logging
from pathlib import Path
from typing import BinaryIO, Optional

from songvault.config import settings
from songvault.errors import InvalidInputError
from songvault.utils.paths import ensure_directory, unique_upload_name

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1MB


class UploadStorage:
    """Writes uploaded audio under the upload directory."""

    def __init__(self, upload_dir: Optional[Path] = None, max_bytes: Optional[int] = None):
        self.upload_dir = Path(upload_dir or settings.upload_dir)
        self.max_bytes = max_bytes or settings.max_upload_bytes

    def save(self, filename: str, stream: BinaryIO) -> Path:
        """Copy ``stream`` to a uniquely named file and return its path.

        The file is either written completely or removed.

        Raises:
            InvalidInputError: If the upload is empty or too large
        """
        ensure_directory(self.upload_dir)
        target = self.upload_dir / unique_upload_name(filename)

        written = 0
        try:
            with open(target, "wb") as out:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise InvalidInputError(
                            f"File too large (max {self.max_bytes // (1024 * 1024)}MB)"
                        )
                    out.write(chunk)
            if written == 0:
                raise InvalidInputError("Uploaded file is empty")
        except Exception:
            self.discard(target)
            raise

        logger.info(f"Stored upload {filename} as {target} ({written} bytes)")
        return target

    def discard(self, path: Path) -> None:
        """Remove a stored file if it exists."""
        path = Path(path)
        if path.exists():
            path.unlink()
            logger.info(f"Removed upload {path}")


"""UploadLifecycleManager: owns the temp file behind a multipart image upload."""
import asyncio
import logging
import tempfile
from pathlib import Path

from src.constants import (
    EVENT_CLEANUP_FAILED,
    MSG_LOG_CLEANUP_FAILED,
    MSG_LOG_UPLOAD_SAVED,
    UPLOAD_FILE_PREFIX,
)
from src.errors import ResourceCleanupError

logger = logging.getLogger(__name__)


def _remove(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        raise ResourceCleanupError(str(path)) from exc


class UploadLifecycleManager:
    """Creates one temp file per vision request and guarantees its deletion.

    Deletion failures are logged and counted, never raised: by the time
    cleanup runs the response is already decided.
    """

    def __init__(self, upload_dir: Path | str) -> None:
        self._dir = Path(upload_dir)
        self._dir.mkdir(parents=True, exist_ok=True)
        self._cleanup_failures = 0

    @property
    def upload_dir(self) -> Path:
        return self._dir

    @property
    def cleanup_failures(self) -> int:
        return self._cleanup_failures

    async def persist(self, content: bytes) -> Path:
        path = await asyncio.to_thread(self._write, content)
        logger.debug(MSG_LOG_UPLOAD_SAVED, path, len(content))
        return path

    async def discard(self, path: Path) -> None:
        try:
            await asyncio.to_thread(_remove, path)
        except ResourceCleanupError as exc:
            self._cleanup_failures += 1
            logger.warning(
                MSG_LOG_CLEANUP_FAILED,
                path,
                exc.__cause__,
                extra={"event": EVENT_CLEANUP_FAILED, "path": str(path)},
            )

    def _write(self, content: bytes) -> Path:
        f = tempfile.NamedTemporaryFile(
            dir=self._dir, prefix=UPLOAD_FILE_PREFIX, delete=False
        )
        path = Path(f.name)
        try:
            with f:
                f.write(content)
        except OSError:
            # A partial write must not outlive the failed request.
            path.unlink(missing_ok=True)
            raise
        return path

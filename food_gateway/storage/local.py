"""
Local upload directory.
Persists uploaded images and implements the local half of file management.
"""

import asyncio
import logging
import shutil
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from food_gateway.models.upload import UploadedImage

logger = logging.getLogger(__name__)


class UploadStore:
    """Filesystem directory holding uploads and synced segmented images."""

    def __init__(self, upload_dir: Union[str, Path]):
        self.upload_dir = Path(upload_dir)

    def ensure_dir(self) -> Path:
        """Create the upload directory if it doesn't exist."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        return self.upload_dir

    def resolve(self, filename: str) -> Path:
        """
        Map a caller-supplied filename to a path inside the upload directory.

        Raises:
            FileNotFoundError: If the name would escape the directory
        """
        if not filename or Path(filename).name != filename or filename in (".", ".."):
            raise FileNotFoundError(f"Invalid filename: {filename!r}")
        return self.upload_dir / filename

    async def save(
        self,
        source: BinaryIO,
        original_filename: str,
        content_type: Optional[str] = None
    ) -> UploadedImage:
        """
        Write an uploaded file under a timestamped unique name.

        Args:
            source: Readable binary file object (e.g. UploadFile.file)
            original_filename: Client-supplied filename
            content_type: MIME type reported by the client

        Returns:
            The stored image
        """
        image = UploadedImage.create(self.upload_dir, original_filename, content_type)

        def _write():
            self.ensure_dir()
            source.seek(0)
            with open(image.local_path, "wb") as target:
                shutil.copyfileobj(source, target)

        await asyncio.to_thread(_write)
        logger.info(f"Stored upload {image.original_filename} as {image.local_path}")
        return image

    async def list_files(self) -> List[str]:
        """
        List filenames in the upload directory.

        Raises:
            OSError: If the directory can't be read (including when missing)
        """
        def _list():
            return sorted(entry.name for entry in self.upload_dir.iterdir())

        return await asyncio.to_thread(_list)

    async def delete(self, filename: str) -> Path:
        """
        Delete one file from the upload directory.

        Raises:
            OSError: If the file doesn't exist or can't be removed
        """
        path = self.resolve(filename)
        await asyncio.to_thread(path.unlink)
        logger.info(f"Deleted local file: {path}")
        return path

    async def delete_all(self) -> None:
        """
        Recursively remove the upload directory.

        Raises:
            OSError: If the directory is missing or can't be removed
        """
        await asyncio.to_thread(shutil.rmtree, self.upload_dir)
        logger.info(f"Deleted upload directory: {self.upload_dir}")

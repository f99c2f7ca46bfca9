"""
Segmented-image artifacts in object storage.
Mirrors the artifact prefix into the local upload directory and implements the
remote half of file management.
"""

import asyncio
import logging
import posixpath
from concurrent.futures import Executor
from pathlib import Path
from typing import List, Optional, Union

from food_gateway.core.exceptions import ArtifactSyncError
from food_gateway.models.artifact import ArtifactOutcome, ArtifactStatus, SyncReport
from food_gateway.s3.client import S3Client

logger = logging.getLogger(__name__)


class ArtifactStore:
    """
    Operations on every object under one bucket prefix.

    Blocking S3 calls run in the given executor; passing the S3 client's
    transfer executor bounds the number of simultaneous downloads.
    """

    def __init__(
        self,
        s3_client: S3Client,
        bucket: str,
        prefix: str,
        executor: Optional[Executor] = None
    ):
        self.s3 = s3_client
        self.bucket = bucket
        self.prefix = prefix
        self._executor = executor

    async def _run(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, func, *args)

    def key_for(self, filename: str) -> str:
        """Object key of a file stored under the prefix."""
        if not self.prefix or self.prefix.endswith("/"):
            return f"{self.prefix}{filename}"
        return f"{self.prefix}/{filename}"

    async def list_keys(self) -> List[str]:
        """
        List artifact keys under the prefix, ignoring folder placeholders.

        Raises:
            ArtifactSyncError: If the listing fails
        """
        try:
            keys = await self._run(self.s3.list_files, self.bucket, self.prefix)
        except Exception as e:
            logger.error(f"Error while listing files in {self.bucket}/{self.prefix}: {e}")
            raise ArtifactSyncError(self.bucket, self.prefix, e) from e

        return [key for key in keys if not key.endswith("/")]

    async def sync_to(
        self,
        local_dir: Union[str, Path],
        skip_existing: bool = False
    ) -> SyncReport:
        """
        Download every artifact into local_dir, named by its basename.

        Existing local files are overwritten unless skip_existing is set.
        A failed download is recorded in the report and never cancels the
        other downloads.

        Raises:
            ArtifactSyncError: If the prefix can't be listed
        """
        local_dir = Path(local_dir)
        keys = await self.list_keys()
        local_dir.mkdir(parents=True, exist_ok=True)

        outcomes = await asyncio.gather(
            *(self._download(key, local_dir, skip_existing) for key in keys)
        )
        report = SyncReport(outcomes=list(outcomes))

        logger.info(
            f"Artifact sync from {self.bucket}/{self.prefix}: "
            f"{report.downloaded} downloaded, {report.skipped} skipped, {report.failed} failed"
        )
        return report

    async def _download(self, key: str, local_dir: Path, skip_existing: bool) -> ArtifactOutcome:
        filename = posixpath.basename(key)
        destination = local_dir / filename

        if skip_existing and destination.exists():
            return ArtifactOutcome(key=key, filename=filename, status=ArtifactStatus.SKIPPED)

        try:
            await self._run(self.s3.download_file, self.bucket, key, destination)
        except Exception as e:
            logger.error(f"Error while downloading {key} to {destination}: {e}")
            return ArtifactOutcome(
                key=key,
                filename=filename,
                status=ArtifactStatus.FAILED,
                error=str(e)
            )

        return ArtifactOutcome(key=key, filename=filename, status=ArtifactStatus.DOWNLOADED)

    async def delete(self, filename: str) -> str:
        """
        Delete the artifact stored under the prefix with this filename.

        S3 deletes of a missing key succeed silently, so the key is checked
        first and a missing object counts as a failed deletion.

        Raises:
            FileNotFoundError: If no object exists under the key
            ClientError: If the check or the deletion fails
        """
        key = self.key_for(filename)
        if not await self._run(self.s3.file_exists, self.bucket, key):
            raise FileNotFoundError(f"No such object: {self.bucket}/{key}")
        await self._run(self.s3.delete_file, self.bucket, key)
        return key

    async def delete_all(self) -> int:
        """
        Delete every object under the prefix.

        Returns:
            Number of deleted objects

        Raises:
            Exception: The first listing or deletion failure
        """
        keys = await self._run(self.s3.list_files, self.bucket, self.prefix)
        await asyncio.gather(
            *(self._run(self.s3.delete_file, self.bucket, key) for key in keys)
        )
        logger.info(f"Deleted {len(keys)} files from {self.bucket}/{self.prefix}")
        return len(keys)

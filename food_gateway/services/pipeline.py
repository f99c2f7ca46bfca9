"""
Upload-process-aggregate pipeline.
Volume estimation, then classification, then artifact sync.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from food_gateway.clients.classification_client import ClassificationClient
from food_gateway.clients.volume_client import VolumeEstimationClient
from food_gateway.models.artifact import SyncReport
from food_gateway.models.upload import UploadedImage
from food_gateway.storage.artifacts import ArtifactStore

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Classification body plus the sync report backing its file paths."""

    body: Any
    sync_report: Optional[SyncReport] = None


class AnalysisPipeline:
    """
    Runs one uploaded image through both inference services.

    When an artifact store is configured, the response is only produced after
    every segmented image under the storage prefix has been mirrored into the
    local directory, so the returned paths are backed by local files.
    """

    def __init__(
        self,
        volume_client: VolumeEstimationClient,
        classification_client: ClassificationClient,
        artifact_store: Optional[ArtifactStore] = None,
        local_dir: Union[str, Path, None] = None,
        skip_existing: bool = False
    ):
        self.volume_client = volume_client
        self.classification_client = classification_client
        self.artifact_store = artifact_store
        self.local_dir = local_dir
        self.skip_existing = skip_existing

    async def run(self, image: UploadedImage) -> PipelineResult:
        """
        Process a stored image.

        Raises:
            httpx.HTTPError: If either inference service fails
            ArtifactSyncError: If the artifact prefix can't be listed
        """
        volume = await self.volume_client.estimate(image)
        classification = await self.classification_client.classify(volume)

        if self.artifact_store is None:
            return PipelineResult(body=classification)

        local_dir = self.local_dir if self.local_dir is not None else image.local_path.parent
        report = await self.artifact_store.sync_to(local_dir, skip_existing=self.skip_existing)
        if report.failed:
            logger.warning(
                f"{report.failed} of {report.total} segmented images failed to download "
                f"for {image.stored_filename}"
            )

        return PipelineResult(body=classification, sync_report=report)

"""
S3 client wrapper.
Handles the object-storage operations the gateway needs: listing, downloading
and deleting segmented images.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Union

import boto3
from boto3.s3.transfer import TransferConfig
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from food_gateway.s3.config import (
    LIST_PAGE_SIZE,
    MAX_PART_CONCURRENCY,
    MULTIPART_CHUNKSIZE,
    MULTIPART_THRESHOLD,
)

logger = logging.getLogger(__name__)


class S3Client:
    """Wrapper for S3-compatible object storage operations."""

    def __init__(
        self,
        endpoint: str = "",
        access_key: str = "",
        secret_key: str = "",
        secure: bool = False,
        region: str = "us-east-1",
        max_concurrency: int = 8
    ):
        """
        Initialize the boto3 client.

        Args:
            endpoint: Endpoint host or URL; empty uses the AWS default
            access_key: Access key; empty falls back to the boto3 credential chain
            secret_key: Secret key
            secure: Use https when the endpoint has no scheme
            region: Region name
            max_concurrency: Size of the transfer thread pool
        """
        endpoint_url = None
        if endpoint:
            endpoint_url = endpoint
            if not endpoint_url.startswith(('http://', 'https://')):
                protocol = 'https' if secure else 'http'
                endpoint_url = f"{protocol}://{endpoint_url}"

        client_kwargs = {
            "endpoint_url": endpoint_url,
            "config": Config(signature_version='s3v4'),
            "region_name": region,
        }
        if access_key and secret_key:
            client_kwargs["aws_access_key_id"] = access_key
            client_kwargs["aws_secret_access_key"] = secret_key

        self.client = boto3.client('s3', **client_kwargs)
        self.endpoint_url = endpoint_url

        # Bounded pool for blocking transfers (caps open connections and file handles)
        self.transfer_executor = ThreadPoolExecutor(
            max_workers=max(1, max_concurrency),
            thread_name_prefix="s3-transfer"
        )

        self._transfer_config = TransferConfig(
            multipart_threshold=MULTIPART_THRESHOLD,
            multipart_chunksize=MULTIPART_CHUNKSIZE,
            max_concurrency=MAX_PART_CONCURRENCY,
            use_threads=False  # We're running in the transfer executor already
        )

        logger.info(f"S3 client initialized with endpoint: {endpoint_url or 'aws-default'}")

    def list_files(self, bucket: str, prefix: str = "") -> List[str]:
        """
        List every object key in a bucket under a prefix.

        Follows continuation tokens, so the result is complete.

        Args:
            bucket: Bucket name
            prefix: Key prefix to filter results

        Returns:
            List of object keys

        Raises:
            ClientError: If listing fails
        """
        try:
            paginator = self.client.get_paginator('list_objects_v2')
            keys = []
            for page in paginator.paginate(
                Bucket=bucket,
                Prefix=prefix,
                PaginationConfig={'PageSize': LIST_PAGE_SIZE}
            ):
                keys.extend(obj['Key'] for obj in page.get('Contents', []))
            return keys

        except ClientError as e:
            logger.error(f"Failed to list files in {bucket}/{prefix}: {e}")
            raise

    def download_file(self, bucket: str, key: str, destination: Union[str, Path]) -> str:
        """
        Download an object to a local path, replacing any existing file.

        Args:
            bucket: Bucket name
            key: Object key
            destination: Local file path

        Returns:
            The local path written

        Raises:
            ClientError: If the download fails
        """
        try:
            self.client.download_file(
                bucket,
                key,
                str(destination),
                Config=self._transfer_config
            )
            logger.info(f"Downloaded {bucket}/{key} to {destination}")
            return str(destination)

        except ClientError as e:
            logger.error(f"Failed to download {bucket}/{key}: {e}")
            raise

    def delete_file(self, bucket: str, key: str) -> dict:
        """
        Delete a file from the bucket.

        Args:
            bucket: Bucket name
            key: Object key

        Returns:
            Dict with deletion result

        Raises:
            ClientError: If deletion fails
        """
        try:
            self.client.delete_object(Bucket=bucket, Key=key)
            logger.info(f"Deleted file: {bucket}/{key}")

            return {
                "success": True,
                "bucket": bucket,
                "key": key
            }

        except ClientError as e:
            logger.error(f"Failed to delete {bucket}/{key}: {e}")
            raise

    def file_exists(self, bucket: str, key: str) -> bool:
        """
        Check if a file exists in the bucket.

        Args:
            bucket: Bucket name
            key: Object key

        Returns:
            True if file exists, False if the object is missing

        Raises:
            ClientError: For any failure other than a missing object
        """
        try:
            self.client.head_object(Bucket=bucket, Key=key)
            return True
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') in ('404', 'NoSuchKey', 'NotFound'):
                return False
            logger.error(f"Failed to check {bucket}/{key}: {e}")
            raise

    def bucket_reachable(self, bucket: str) -> bool:
        """Check that the bucket exists and the credentials can reach it."""
        try:
            self.client.head_bucket(Bucket=bucket)
            return True
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Bucket {bucket} not reachable: {e}")
            return False

    def shutdown(self, wait: bool = True) -> None:
        """Stop the transfer thread pool."""
        self.transfer_executor.shutdown(wait=wait)

"""
S3 Repository for file storage operations.
Stores uploads, generated orders and mapping records in Amazon S3.
"""
import logging
from typing import Optional
import boto3
from botocore.exceptions import ClientError
from src.core import config
from src.core.exceptions import NotFoundException, PersistenceException
from src.repositories.storage_repository import StorageRepository

logger = logging.getLogger(__name__)

_MISSING_KEY_CODES = {'NoSuchKey', '404', 'NotFound'}


class S3Repository(StorageRepository):
    """Repository for S3 file operations."""

    def __init__(self, bucket_name: Optional[str] = None, region: Optional[str] = None):
        self.s3_client = boto3.client('s3', region_name=region or config.settings.aws_region)
        self.bucket_name = bucket_name or config.settings.s3_bucket_name

    def put(self, key: str, content: bytes, content_type: Optional[str] = None) -> str:
        """
        Upload content to S3.

        Args:
            key: S3 object key
            content: File content
            content_type: MIME type stored with the object

        Returns:
            str: S3 location of the object

        Raises:
            PersistenceException: If upload fails
        """
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=content,
                ContentType=content_type or 'application/octet-stream'
            )
        except ClientError as e:
            raise PersistenceException("Failed to upload file to S3", details=str(e)) from e

        s3_location = f"s3://{self.bucket_name}/{key}"
        logger.debug("Stored %d bytes at %s", len(content), s3_location)
        return s3_location

    def get(self, key: str) -> bytes:
        """
        Retrieve file from S3.

        Args:
            key: S3 object key

        Returns:
            bytes: File content

        Raises:
            NotFoundException: If the object does not exist
            PersistenceException: If retrieval fails
        """
        try:
            response = self.s3_client.get_object(Bucket=self.bucket_name, Key=key)
            return response['Body'].read()
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') in _MISSING_KEY_CODES:
                raise NotFoundException(f"File '{key}' not found") from e
            raise PersistenceException("Failed to retrieve file from S3", details=str(e)) from e

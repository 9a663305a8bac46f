"""S3 manager for config downloads and calendar uploads."""
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class S3Manager:
    """Manager for S3 object operations on a single bucket."""

    CALENDAR_CONTENT_TYPE = 'text/calendar'

    def __init__(self, bucket: str, client=None):
        """
        Initialize S3 client and bucket reference.

        Args:
            bucket: Name of the S3 bucket
            client: Optional boto3 S3 client; one is created if omitted
        """
        self.bucket = bucket
        self.client = client or boto3.client('s3')
        logger.info(f"Initialized S3Manager for bucket: {bucket}")

    def download(self, key: str) -> bytes:
        """
        Read an object's body.

        Args:
            key: Object key

        Returns:
            Object content as bytes
        """
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            return response['Body'].read()
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error downloading s3://{self.bucket}/{key}: {e}")
            raise

    def upload(self, data: bytes, key: str, content_type: str = CALENDAR_CONTENT_TYPE) -> None:
        """
        Write an object, replacing any existing one.

        Args:
            data: Object content
            key: Object key
            content_type: MIME type stored with the object
        """
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error uploading s3://{self.bucket}/{key}: {e}")
            raise

# core/s3_client.py

import boto3
from typing import Tuple

from core.config import settings


def get_s3() -> Tuple[boto3.client, str, str]:
    """
    Get S3 client, bucket name, and region.
    Returns: (s3_client, bucket_name, region)
    Raises RuntimeError if the bucket is not configured.

    Explicit keys are optional; without them boto3 uses its default
    credential chain (instance role, ~/.aws, ...).
    """
    key = settings.AWS_ACCESS_KEY_ID
    secret = settings.AWS_SECRET_ACCESS_KEY
    bucket = settings.AWS_BUCKET_NAME
    region = settings.AWS_REGION

    if not bucket:
        raise RuntimeError("Missing AWS_BUCKET_NAME")

    if key and secret:
        client = boto3.client(
            "s3",
            aws_access_key_id=key,
            aws_secret_access_key=secret,
            region_name=region,
        )
    else:
        client = boto3.client("s3", region_name=region)

    return client, bucket, region

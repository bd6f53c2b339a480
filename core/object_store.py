# core/object_store.py

"""
Path-addressed object store for opaque uploaded documents (S3).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Optional

from core.errors import StoreError, store_error
from core.logging_config import logger
from core.s3_client import get_s3


@dataclass(frozen=True)
class StoredObject:
    path: str
    size: int
    last_modified: datetime


class ObjectStore:
    def __init__(self, client=None, bucket: Optional[str] = None):
        if client is None or bucket is None:
            try:
                client, bucket, _region = get_s3()
            except RuntimeError as e:
                logger.error(f"Object store not configured: {e}")
                raise StoreError() from e
        self.client = client
        self.bucket = bucket

    def put(self, path: str, data: bytes, content_type: Optional[str] = None) -> None:
        extra = {"ContentType": content_type} if content_type else {}
        try:
            self.client.put_object(Bucket=self.bucket, Key=path, Body=data, **extra)
        except Exception as e:
            raise store_error(e, f"S3 put {path}") from e

    def delete(self, path: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=path)
        except Exception as e:
            raise store_error(e, f"S3 delete {path}") from e

    def list(self, prefix: str) -> Iterator[StoredObject]:
        try:
            paginator = self.client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
                for obj in page.get("Contents", []):
                    yield StoredObject(
                        path=obj["Key"],
                        size=obj.get("Size", 0),
                        last_modified=obj["LastModified"],
                    )
        except Exception as e:
            raise store_error(e, f"S3 list {prefix}") from e

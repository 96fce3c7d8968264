"""S3 snapshot store and archive.

Stores the model as JSON objects in S3 with optional namespace prefix::

    s3://{bucket}/{prefix}/workspace.json
    s3://{bucket}/{prefix}/backups/backup-20250922-143012-000123.json

When prefix is None, the keys collapse to ``workspace.json`` and
``backups/...``.

Uses ``anyio.to_thread.run_sync`` to run boto3 calls in the thread pool,
matching the same async pattern as the local backend.
"""

from __future__ import annotations

from functools import partial
from typing import Any

import boto3
from anyio import to_thread
from botocore.config import Config

from tabledeck.core.models import AppModel
from tabledeck.core.store.base import BackupInfo, backup_name, is_backup_name


def _create_s3_client(
    endpoint_url: str,
    access_key: str,
    secret_key: str,
    region: str | None = None,
    path_style: bool = False,
) -> Any:
    """Create a boto3 S3 client.

    Args:
        endpoint_url: S3 endpoint URL.
        access_key: AWS access key ID.
        secret_key: AWS secret access key.
        region: AWS region name (optional, some endpoints require it).
        path_style: Use path-style addressing instead of virtual-hosted.
            Required by MinIO and some S3-compatible services.
    """
    config = Config(
        request_checksum_calculation="when_required",
        response_checksum_validation="when_required",
        s3={"addressing_style": "path" if path_style else "auto"},
    )

    return boto3.client(
        "s3",
        endpoint_url=endpoint_url,
        aws_access_key_id=access_key,
        aws_secret_access_key=secret_key,
        region_name=region,
        config=config,
    )


class _S3Backend:
    """Shared client, bucket and key prefix for the S3 store and archive."""

    def __init__(
        self,
        bucket: str,
        endpoint_url: str,
        access_key: str,
        secret_key: str,
        prefix: str | None = None,
        region: str | None = None,
        path_style: bool = False,
    ) -> None:
        self._bucket = bucket
        self._client = _create_s3_client(endpoint_url, access_key, secret_key, region=region, path_style=path_style)
        self._key_prefix = f"{prefix}/" if prefix else ""

    def _put(self, key: str, data: str) -> None:
        self._client.put_object(
            Bucket=self._bucket,
            Key=key,
            Body=data.encode("utf-8"),
            ContentType="application/json",
        )

    def _get_object_body(self, key: str) -> str:
        """Get object and read body in the same thread.

        Reading the streaming body must happen in the same thread as
        get_object to avoid issues with chunked transfer encoding.
        """
        try:
            resp = self._client.get_object(Bucket=self._bucket, Key=key)
        except self._client.exceptions.NoSuchKey:
            msg = f"Snapshot not found: {key}"
            raise FileNotFoundError(msg) from None
        return resp["Body"].read().decode("utf-8")


class S3SnapshotStore(_S3Backend):
    """S3 implementation of the SnapshotStore protocol."""

    @property
    def key(self) -> str:
        return f"{self._key_prefix}workspace.json"

    async def load(self) -> AppModel | None:
        try:
            body = await to_thread.run_sync(partial(self._get_object_body, self.key))
        except FileNotFoundError:
            return None
        return AppModel.model_validate_json(body)

    async def save(self, model: AppModel) -> None:
        await to_thread.run_sync(partial(self._put, self.key, model.model_dump_json(indent=2)))


class S3SnapshotArchive(_S3Backend):
    """S3 implementation of the SnapshotArchive protocol."""

    @property
    def backups_prefix(self) -> str:
        return f"{self._key_prefix}backups/"

    async def create(self, model: AppModel) -> BackupInfo:
        name = backup_name()
        data = model.model_dump_json(indent=2)
        await to_thread.run_sync(partial(self._put, self.backups_prefix + name, data))
        return BackupInfo(archive_id=name, size=len(data.encode("utf-8")))

    async def list(self) -> list[BackupInfo]:
        return await to_thread.run_sync(self._list_backups)

    async def fetch(self, archive_id: str) -> AppModel:
        if not is_backup_name(archive_id):
            msg = f"Backup not found: {archive_id}"
            raise FileNotFoundError(msg)
        body = await to_thread.run_sync(partial(self._get_object_body, self.backups_prefix + archive_id))
        return AppModel.model_validate_json(body)

    def _list_backups(self) -> list[BackupInfo]:
        paginator = self._client.get_paginator("list_objects_v2")
        infos: list[BackupInfo] = []
        for page in paginator.paginate(Bucket=self._bucket, Prefix=self.backups_prefix):
            for obj in page.get("Contents", []):
                name = obj["Key"][len(self.backups_prefix) :]
                if is_backup_name(name):
                    infos.append(BackupInfo(archive_id=name, size=obj["Size"], last_modified=obj["LastModified"]))
        return sorted(infos, key=lambda b: b.archive_id, reverse=True)

"""Object-storage backup store holding one JSON volume record per object."""

from __future__ import annotations

import asyncio
import base64
import binascii
import json
from logging import getLogger
from typing import TYPE_CHECKING, Any, Protocol

import aioboto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from drhub.domain.errors import RemoteIOError
from drhub.domain.model import VolumeRecord

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from drhub.config.backup import BackupConfig
    from drhub.domain.model import ObjectRef

log = getLogger(__name__)

MISSING_BUCKET_CODES = frozenset({"NoSuchBucket"})


class SecretReader(Protocol):
    def __call__(self, ref: ObjectRef) -> Mapping[str, str] | None: ...


class S3BackupStore:
    """``BackupStore`` backed by any S3-compatible endpoint."""

    def __init__(
        self,
        *,
        config: BackupConfig,
        secrets: SecretReader,
        session_factory: Callable[..., Any] | None = None,
    ) -> None:
        self._config = config
        self._secrets = secrets
        self._session_factory = session_factory or aioboto3.Session

    def download_volumes(
        self,
        *,
        endpoint: str,
        credential_ref: ObjectRef,
        caller_tag: str,
        bucket: str,
    ) -> list[VolumeRecord]:
        access_key_id, secret_access_key = self._credentials(credential_ref)
        log.info("Downloading volume records from bucket %s for %s", bucket, caller_tag)
        return asyncio.run(
            self._download_async(
                endpoint=endpoint,
                access_key_id=access_key_id,
                secret_access_key=secret_access_key,
                caller_tag=caller_tag,
                bucket=bucket,
            )
        )

    def _credentials(self, ref: ObjectRef) -> tuple[str, str]:
        data = self._secrets(ref)
        if data is None:
            raise RemoteIOError(f"object storage credential secret {ref} not found")
        return (
            _decode_field(data, self._config.access_key_id_field, ref),
            _decode_field(data, self._config.secret_access_key_field, ref),
        )

    async def _download_async(
        self,
        *,
        endpoint: str,
        access_key_id: str,
        secret_access_key: str,
        caller_tag: str,
        bucket: str,
    ) -> list[VolumeRecord]:
        session = self._session_factory(
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name=self._config.region,
        )
        extra: dict[str, object] = {"config": Config(user_agent_extra=caller_tag)}
        if endpoint:
            extra["endpoint_url"] = endpoint

        try:
            async with session.client("s3", **extra) as s3:
                keys: list[str] = []
                paginator = s3.get_paginator("list_objects_v2")
                async for page in paginator.paginate(Bucket=bucket):
                    keys.extend(obj["Key"] for obj in page.get("Contents", []))

                records: list[VolumeRecord] = []
                for key in sorted(keys):
                    resp = await s3.get_object(Bucket=bucket, Key=key)
                    body = await resp["Body"].read()
                    records.append(parse_volume_record(key, body))
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code in MISSING_BUCKET_CODES:
                log.info("Bucket %s does not exist; no volumes persisted", bucket)
                return []
            raise RemoteIOError(f"object storage request on bucket {bucket} failed: {exc}") from exc
        except BotoCoreError as exc:
            raise RemoteIOError(f"object storage request on bucket {bucket} failed: {exc}") from exc

        log.debug("Downloaded %d volume records from bucket %s", len(records), bucket)
        return records


def parse_volume_record(key: str, body: bytes) -> VolumeRecord:
    try:
        payload = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise RemoteIOError(f"volume record {key} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise RemoteIOError(f"volume record {key} is not a JSON object")

    metadata = payload.get("metadata")
    name = metadata.get("name") if isinstance(metadata, dict) else None
    return VolumeRecord(name=name if isinstance(name, str) else key, payload=payload)


def _decode_field(data: Mapping[str, str], field: str, ref: ObjectRef) -> str:
    raw = data.get(field)
    if not raw:
        raise RemoteIOError(f"credential secret {ref} has no {field}")
    try:
        return base64.b64decode(raw, validate=True).decode("utf-8").strip()
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise RemoteIOError(f"credential secret {ref} field {field} is not valid base64") from exc

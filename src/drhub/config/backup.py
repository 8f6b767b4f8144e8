"""Object-storage backup configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_S3_REGION = "us-east-1"
DEFAULT_ACCESS_KEY_ID_FIELD = "AWS_ACCESS_KEY_ID"
DEFAULT_SECRET_ACCESS_KEY_FIELD = "AWS_SECRET_ACCESS_KEY"  # noqa: S105


@dataclass(frozen=True, slots=True)
class BackupConfig:
    region: str = DEFAULT_S3_REGION
    access_key_id_field: str = DEFAULT_ACCESS_KEY_ID_FIELD
    secret_access_key_field: str = DEFAULT_SECRET_ACCESS_KEY_FIELD


def get_backup_config() -> BackupConfig:
    return BackupConfig(
        region=os.getenv("DRHUB_S3_REGION") or DEFAULT_S3_REGION,
    )

"""Object-storage backup adapter."""

from __future__ import annotations

from .backup import S3BackupStore, SecretReader, parse_volume_record

__all__ = ["S3BackupStore", "SecretReader", "parse_volume_record"]

"""Port for retrieving persisted volume definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from drhub.domain.model import ObjectRef, VolumeRecord


@runtime_checkable
class BackupStore(Protocol):
    """Object-storage collaborator holding per-application volume records."""

    def download_volumes(
        self,
        *,
        endpoint: str,
        credential_ref: ObjectRef,
        caller_tag: str,
        bucket: str,
    ) -> list[VolumeRecord]: ...


def volume_bucket_name(namespace: str, name: str) -> str:
    """Bucket holding the volume records of the subscription ``namespace/name``."""

    return f"{namespace}-{name}".lower()


__all__ = ["BackupStore", "volume_bucket_name"]

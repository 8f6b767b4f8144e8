"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from drhub.adapters.hub import (
    HubClient,
    HubClusterResolver,
    HubSecretReader,
    build_hub_repositories,
)
from drhub.adapters.s3 import S3BackupStore
from drhub.config import get_backup_config, get_hub_config
from drhub.domain.model import ReplicationPolicy
from drhub.domain.reconciliation import (
    PlacementSelector,
    ReconcileEngine,
    ReconcileResult,
    require_clusters,
)

if TYPE_CHECKING:
    from drhub.config import BackupConfig, HubConfig
    from drhub.domain.ports import (
        BackupStore,
        ClusterCandidateResolver,
        ClusterFilter,
        HubRepositories,
    )

log = getLogger(__name__)


def build_reconcile_engine(
    *,
    hub_config: HubConfig | None = None,
    backup_config: BackupConfig | None = None,
    repositories: HubRepositories | None = None,
    backup: BackupStore | None = None,
    resolver: ClusterCandidateResolver | None = None,
    cluster_filter: ClusterFilter = require_clusters,
    policy: ReplicationPolicy | None = None,
) -> ReconcileEngine:
    """Wire the hub and object-storage adapters into a reconcile engine.

    Collaborators that are passed in are used as-is; configuration is only read
    for the ones that have to be built.
    """

    client: HubClient | None = None

    def hub_client() -> HubClient:
        nonlocal client
        if client is None:
            client = HubClient(config=hub_config or get_hub_config())
        return client

    effective_repositories = repositories or build_hub_repositories(hub_client())
    effective_backup = backup or S3BackupStore(
        config=backup_config or get_backup_config(),
        secrets=HubSecretReader(hub_client()),
    )
    selector = PlacementSelector(
        placements=effective_repositories.placements,
        resolver=resolver or HubClusterResolver(hub_client()),
        cluster_filter=cluster_filter,
    )
    return ReconcileEngine(
        repositories=effective_repositories,
        backup=effective_backup,
        placement=selector,
        policy=policy or ReplicationPolicy(),
    )


def reconcile_intent(
    *,
    namespace: str,
    name: str,
    engine: ReconcileEngine | None = None,
) -> ReconcileResult:
    """Run one reconciliation pass over the DR intent ``namespace/name``."""

    effective_engine = engine or build_reconcile_engine()
    result = effective_engine.reconcile(namespace=namespace, name=name)
    log.info(
        "Finished reconciling %s/%s: decisions=%d, status_written=%s, requeue=%s",
        namespace,
        name,
        len(result.decisions),
        result.status_written,
        result.requeue,
    )
    return result

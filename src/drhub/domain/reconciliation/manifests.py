"""Builders for the payloads shipped to managed clusters.

All functions here are pure: they take typed inputs and return ``WorkBundle``
values ready for convergence. Payloads are JSON-normalised on the way in so a
bundle read back from the hub compares equal to the one generated here.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Final

from drhub.domain.errors import SerializationError
from drhub.domain.model import (
    BundleType,
    Manifest,
    ReplicationPolicy,
    WorkBundle,
    work_bundle_name,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from drhub.domain.model import VolumeRecord

ROLES_WORK_NAME: Final[str] = "ramendr-vrg-roles"
VRG_ROLE_NAME: Final[str] = "open-cluster-management:klusterlet-work-sa:agent:volrepgroup-edit"
VRG_API_GROUP: Final[str] = "ramendr.openshift.io"
VRG_API_VERSION: Final[str] = f"{VRG_API_GROUP}/v1alpha1"
RBAC_API_GROUP: Final[str] = "rbac.authorization.k8s.io"
WORK_AGENT_SERVICE_ACCOUNT: Final[str] = "klusterlet-work-sa"
WORK_AGENT_NAMESPACE: Final[str] = "open-cluster-management-agent"

VRG_WORK_LABELS: Final[dict[str, str]] = {"app": "VRG"}
RESTORE_WORK_LABELS: Final[dict[str, str]] = {"app": "PV"}


def to_manifest(obj: Mapping[str, object]) -> Manifest:
    """Serialize ``obj`` into a manifest, failing on anything JSON cannot represent."""

    try:
        encoded = json.dumps(obj, sort_keys=True, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"failed to serialize manifest payload: {exc}") from exc
    return Manifest(content=json.loads(encoded))


def vrg_cluster_role() -> dict[str, object]:
    return {
        "apiVersion": f"{RBAC_API_GROUP}/v1",
        "kind": "ClusterRole",
        "metadata": {"name": VRG_ROLE_NAME},
        "rules": [
            {
                "apiGroups": [VRG_API_GROUP],
                "resources": ["volumereplicationgroups"],
                "verbs": ["create", "get", "list", "update", "delete"],
            }
        ],
    }


def vrg_cluster_role_binding() -> dict[str, object]:
    return {
        "apiVersion": f"{RBAC_API_GROUP}/v1",
        "kind": "ClusterRoleBinding",
        "metadata": {"name": VRG_ROLE_NAME},
        "subjects": [
            {
                "kind": "ServiceAccount",
                "name": WORK_AGENT_SERVICE_ACCOUNT,
                "namespace": WORK_AGENT_NAMESPACE,
            }
        ],
        "roleRef": {
            "apiGroup": RBAC_API_GROUP,
            "kind": "ClusterRole",
            "name": VRG_ROLE_NAME,
        },
    }


def build_roles_work(cluster: str) -> WorkBundle:
    """Roles letting the work agent on ``cluster`` manage replication groups."""

    return WorkBundle(
        name=ROLES_WORK_NAME,
        cluster=cluster,
        manifests=[to_manifest(vrg_cluster_role()), to_manifest(vrg_cluster_role_binding())],
        labels={},
    )


def volume_replication_group(
    name: str,
    namespace: str,
    *,
    s3_endpoint: str,
    s3_secret_name: str,
    policy: ReplicationPolicy,
) -> dict[str, object]:
    return {
        "apiVersion": VRG_API_VERSION,
        "kind": "VolumeReplicationGroup",
        "metadata": {"name": name, "namespace": namespace},
        "spec": {
            "pvcSelector": {"matchLabels": dict(policy.pvc_selector)},
            "volumeReplicationClass": policy.replication_class,
            "replicationState": policy.replication_state,
            "s3Endpoint": s3_endpoint,
            "s3SecretName": s3_secret_name,
        },
    }


def build_replication_group_work(
    name: str,
    namespace: str,
    cluster: str,
    *,
    s3_endpoint: str,
    s3_secret_name: str,
    policy: ReplicationPolicy | None = None,
) -> WorkBundle:
    """Primary-role replication group for subscription ``namespace/name`` on ``cluster``."""

    manifest = to_manifest(
        volume_replication_group(
            name,
            namespace,
            s3_endpoint=s3_endpoint,
            s3_secret_name=s3_secret_name,
            policy=policy or ReplicationPolicy(),
        )
    )
    return WorkBundle(
        name=work_bundle_name(name, namespace, BundleType.REPLICATION_GROUP),
        cluster=cluster,
        manifests=[manifest],
        labels=dict(VRG_WORK_LABELS),
    )


def build_restore_work(
    name: str,
    namespace: str,
    cluster: str,
    volumes: Sequence[VolumeRecord],
) -> WorkBundle:
    """Wrap every backed-up volume in one bundle, preserving backup order.

    Either every record serializes or the whole bundle is rejected.
    """

    manifests = [to_manifest(volume.payload) for volume in volumes]
    return WorkBundle(
        name=work_bundle_name(name, namespace, BundleType.VOLUME_RESTORE),
        cluster=cluster,
        manifests=manifests,
        labels=dict(RESTORE_WORK_LABELS),
    )

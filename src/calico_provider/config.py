"""Typed configuration structures for the Calico provider.

Option values arrive as a flat string mapping.  They are copied into
:class:`ProviderSettings` by an explicit field-by-field mapping and then
narrowed into a :class:`ConnectionDescriptor` that only populates the variant
matching the selected datastore.

Every field records the provider option it comes from, so which values are
secret is decided by the ``secret`` flag of the option declaration alone.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Mapping
from urllib.parse import urlsplit, urlunsplit

from .options import SECRET_OPTIONS

REDACTED = "****"


class DatastoreType(Enum):
    """Backing store holding the Calico network policy state."""

    ETCDV2 = "etcdv2"
    KUBERNETES = "kubernetes"


def _opt(option: str, *, url: bool = False) -> Any:
    return field(
        default="",
        repr=option not in SECRET_OPTIONS,
        metadata={"option": option, "url": url},
    )


def redact_url(url: str) -> str:
    """Mask the password of ``user:password@`` style URL credentials."""

    try:
        parts = urlsplit(url)
    except ValueError:
        return REDACTED
    if parts.password is None:
        return url
    host = parts.netloc.rsplit("@", 1)[1]
    netloc = f"{parts.username}:{REDACTED}@{host}"
    return urlunsplit(parts._replace(netloc=netloc))


def redact_urls(value: str) -> str:
    """Apply :func:`redact_url` to each entry of a comma-delimited list."""

    return ",".join(redact_url(entry.strip()) for entry in value.split(",") if entry.strip())


def redacted_fields(obj: Any) -> Dict[str, Any]:
    """Return the dataclass ``obj`` as a mapping with secrets masked."""

    values: Dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value and f.metadata.get("option") in SECRET_OPTIONS:
            value = REDACTED
        elif value and f.metadata.get("url"):
            value = redact_urls(value)
        values[f.name] = value
    return values


@dataclass(frozen=True)
class ProviderSettings:
    """One typed field per provider option."""

    datastore_type: str = "etcdv2"
    etcd_endpoints: str = _opt("etcd_endpoints", url=True)
    etcd_username: str = _opt("etcd_username")
    etcd_password: str = _opt("etcd_password")
    etcd_key_file: str = _opt("etcd_key_file")
    etcd_cert_file: str = _opt("etcd_cert_file")
    etcd_ca_cert_file: str = _opt("etcd_ca_cert_file")
    kubeconfig: str = _opt("kubeconfig")
    k8s_api_endpoint: str = _opt("k8s_api_endpoint", url=True)
    k8s_cert_file: str = _opt("k8s_cert_file")
    k8s_key_file: str = _opt("k8s_key_file")
    k8s_ca_file: str = _opt("k8s_ca_file")
    k8s_token: str = _opt("k8s_token")

    @classmethod
    def from_options(cls, options: Mapping[str, str]) -> "ProviderSettings":
        return cls(
            datastore_type=options["datastore_type"],
            etcd_endpoints=options["etcd_endpoints"],
            etcd_username=options["etcd_username"],
            etcd_password=options["etcd_password"],
            etcd_key_file=options["etcd_key_file"],
            etcd_cert_file=options["etcd_cert_file"],
            etcd_ca_cert_file=options["etcd_ca_cert_file"],
            kubeconfig=options["kubeconfig"],
            k8s_api_endpoint=options["k8s_api_endpoint"],
            k8s_cert_file=options["k8s_cert_file"],
            k8s_key_file=options["k8s_key_file"],
            k8s_ca_file=options["k8s_ca_file"],
            k8s_token=options["k8s_token"],
        )


@dataclass(frozen=True)
class EtcdSpec:
    """Connection fields for an etcd v2 cluster."""

    endpoints: str = _opt("etcd_endpoints", url=True)
    username: str = _opt("etcd_username")
    password: str = _opt("etcd_password")
    key_file: str = _opt("etcd_key_file")
    cert_file: str = _opt("etcd_cert_file")
    ca_cert_file: str = _opt("etcd_ca_cert_file")

    def endpoint_list(self) -> List[str]:
        """Split the comma-delimited endpoints, keeping their order."""

        return [ep.strip() for ep in self.endpoints.split(",") if ep.strip()]

    def is_empty(self) -> bool:
        return all(not getattr(self, f.name) for f in fields(self))


@dataclass(frozen=True)
class KubernetesSpec:
    """Connection fields for the Kubernetes API datastore."""

    kubeconfig: str = _opt("kubeconfig")
    api_endpoint: str = _opt("k8s_api_endpoint", url=True)
    cert_file: str = _opt("k8s_cert_file")
    key_file: str = _opt("k8s_key_file")
    ca_file: str = _opt("k8s_ca_file")
    token: str = _opt("k8s_token")

    def is_empty(self) -> bool:
        return all(not getattr(self, f.name) for f in fields(self))


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Variant-typed bundle needed to open a datastore client.

    Only the spec matching ``datastore_type`` is ever populated; the other one
    keeps its empty defaults and is never read.
    """

    datastore_type: DatastoreType
    etcd: EtcdSpec = field(default_factory=EtcdSpec)
    kubernetes: KubernetesSpec = field(default_factory=KubernetesSpec)

    @classmethod
    def from_settings(cls, settings: ProviderSettings) -> "ConnectionDescriptor":
        datastore_type = DatastoreType(settings.datastore_type)
        if datastore_type is DatastoreType.ETCDV2:
            return cls(
                datastore_type=datastore_type,
                etcd=EtcdSpec(
                    endpoints=settings.etcd_endpoints,
                    username=settings.etcd_username,
                    password=settings.etcd_password,
                    key_file=settings.etcd_key_file,
                    cert_file=settings.etcd_cert_file,
                    ca_cert_file=settings.etcd_ca_cert_file,
                ),
            )
        return cls(
            datastore_type=datastore_type,
            kubernetes=KubernetesSpec(
                kubeconfig=settings.kubeconfig,
                api_endpoint=settings.k8s_api_endpoint,
                cert_file=settings.k8s_cert_file,
                key_file=settings.k8s_key_file,
                ca_file=settings.k8s_ca_file,
                token=settings.k8s_token,
            ),
        )

    def active_spec(self) -> EtcdSpec | KubernetesSpec:
        if self.datastore_type is DatastoreType.ETCDV2:
            return self.etcd
        return self.kubernetes

    def redacted(self) -> Dict[str, Any]:
        """Return the active variant as a mapping with secrets masked."""

        return {
            "datastore_type": self.datastore_type.value,
            **redacted_fields(self.active_spec()),
        }


@dataclass(frozen=True)
class ResolvedConfiguration:
    """Validated descriptor plus the client handle built from it."""

    descriptor: ConnectionDescriptor
    client: Any

    @property
    def datastore_type(self) -> DatastoreType:
        return self.descriptor.datastore_type

    def __repr__(self) -> str:
        return (
            f"ResolvedConfiguration(descriptor={self.descriptor.redacted()!r}, "
            f"client={type(self.client).__name__})"
        )

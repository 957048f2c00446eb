"""Default datastore client factory.

The resolver only needs something that accepts a
:class:`~calico_provider.config.ConnectionDescriptor` and exposes
``load_and_validate()``.  The clients here wrap python-etcd for the etcd v2
datastore and the official ``kubernetes`` client for the Kubernetes API
datastore.  :func:`new_client` builds the library client and makes one
round-trip so an unreachable host fails at construction; the
``load_and_validate()`` step then reads Calico's own data with the configured
credentials.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlsplit

import etcd
from kubernetes import client as k8s_client
from kubernetes import config as k8s_config

from .config import (
    ConnectionDescriptor,
    DatastoreType,
    EtcdSpec,
    KubernetesSpec,
    redact_url,
)

LOG = logging.getLogger(__name__)

DEFAULT_ETCD_ENDPOINT = "http://127.0.0.1:2379"
DEFAULT_ETCD_PORT = 2379

# Root of the Calico v1 data model in etcd.
CALICO_ROOT = "/calico/v1"

REQUEST_TIMEOUT = 10

_SCHEMES = ("http", "https")


def parse_endpoint(value: str, what: str) -> Tuple[str, str, Optional[int]]:
    """Split ``value`` into scheme, host and port, rejecting malformed URLs."""

    try:
        parts = urlsplit(value)
        port = parts.port
    except ValueError as exc:
        raise ValueError(f"invalid {what} {redact_url(value)!r}: {exc}") from None
    if parts.scheme not in _SCHEMES or not parts.hostname:
        raise ValueError(
            f"invalid {what} {redact_url(value)!r}: expected http(s)://host[:port]"
        )
    return parts.scheme, parts.hostname, port


def _require_files(**paths: str) -> None:
    for name, value in paths.items():
        if value and not Path(value).expanduser().is_file():
            raise ValueError(f"{name} {value!r} does not exist")


class DatastoreClient(ABC):
    """Handle on a Calico datastore."""

    datastore_type: DatastoreType

    @abstractmethod
    def connect(self) -> None:
        """Make one round-trip to the datastore."""

    @abstractmethod
    def load_and_validate(self) -> None:
        """Sanity-check the client once before it is handed to resources."""


class EtcdDatastoreClient(DatastoreClient):
    """python-etcd client for an etcd v2 backed Calico datastore."""

    datastore_type = DatastoreType.ETCDV2

    def __init__(self, spec: EtcdSpec) -> None:
        self._endpoints = spec.endpoint_list() or [DEFAULT_ETCD_ENDPOINT]

        schemes = set()
        hosts: List[Tuple[str, int]] = []
        url_credentials: Tuple[Optional[str], Optional[str]] = (None, None)
        for endpoint in self._endpoints:
            scheme, host, port = parse_endpoint(endpoint, "etcd endpoint")
            schemes.add(scheme)
            hosts.append((host, port or DEFAULT_ETCD_PORT))
            parts = urlsplit(endpoint)
            if parts.username and url_credentials == (None, None):
                url_credentials = (parts.username, parts.password)
        if len(schemes) > 1:
            raise ValueError("etcd endpoints must all use the same scheme")
        protocol = schemes.pop()

        if bool(spec.cert_file) != bool(spec.key_file):
            raise ValueError("etcd_cert_file and etcd_key_file must be set together")
        if spec.cert_file and protocol != "https":
            raise ValueError("etcd client certificates configured but endpoints use http")
        _require_files(
            etcd_cert_file=spec.cert_file,
            etcd_key_file=spec.key_file,
            etcd_ca_cert_file=spec.ca_cert_file,
        )

        username, password = spec.username, spec.password
        if not username and not password:
            username, password = url_credentials
        if bool(username) != bool(password):
            raise ValueError("etcd_username and etcd_password must be set together")

        kwargs: Dict[str, Any] = {
            "protocol": protocol,
            "read_timeout": REQUEST_TIMEOUT,
            "allow_reconnect": len(hosts) > 1,
        }
        if len(hosts) == 1:
            kwargs["host"], kwargs["port"] = hosts[0]
        else:
            kwargs["host"] = tuple(hosts)
        if spec.cert_file:
            kwargs["cert"] = (spec.cert_file, spec.key_file)
        if spec.ca_cert_file:
            kwargs["ca_cert"] = spec.ca_cert_file
        if username:
            kwargs["username"] = username
            kwargs["password"] = password

        self._client = etcd.Client(**kwargs)

    @property
    def endpoints(self) -> List[str]:
        return list(self._endpoints)

    @property
    def etcd_client(self) -> etcd.Client:
        return self._client

    def connect(self) -> None:
        machines = self._client.machines
        LOG.debug("etcd cluster members: %s", [redact_url(m) for m in machines])

    def load_and_validate(self) -> None:
        try:
            self._client.read(CALICO_ROOT)
        except etcd.EtcdKeyNotFound:
            LOG.info("Calico data not yet present under %s", CALICO_ROOT)
        LOG.debug(
            "etcd client validated for endpoints %s",
            [redact_url(ep) for ep in self._endpoints],
        )


class KubernetesDatastoreClient(DatastoreClient):
    """``kubernetes`` API client for the Kubernetes backed Calico datastore."""

    datastore_type = DatastoreType.KUBERNETES

    def __init__(self, spec: KubernetesSpec) -> None:
        if not spec.kubeconfig and not spec.api_endpoint:
            raise ValueError(
                "no Kubernetes API server configured (set kubeconfig or k8s_api_endpoint)"
            )
        if bool(spec.cert_file) != bool(spec.key_file):
            raise ValueError("k8s_cert_file and k8s_key_file must be set together")
        _require_files(
            k8s_cert_file=spec.cert_file,
            k8s_key_file=spec.key_file,
            k8s_ca_file=spec.ca_file,
        )

        configuration = k8s_client.Configuration()
        if spec.kubeconfig:
            k8s_config.load_kube_config(
                config_file=str(Path(spec.kubeconfig).expanduser()),
                client_configuration=configuration,
            )
        if spec.api_endpoint:
            parse_endpoint(spec.api_endpoint, "Kubernetes API endpoint")
            configuration.host = spec.api_endpoint
        if spec.cert_file:
            configuration.cert_file = spec.cert_file
            configuration.key_file = spec.key_file
        if spec.ca_file:
            configuration.ssl_ca_cert = spec.ca_file
        if spec.token:
            configuration.api_key["authorization"] = spec.token
            configuration.api_key_prefix["authorization"] = "Bearer"

        self._configuration = configuration
        self._api_client = k8s_client.ApiClient(configuration)

    @property
    def server(self) -> str:
        return self._configuration.host

    @property
    def api_client(self) -> k8s_client.ApiClient:
        return self._api_client

    def connect(self) -> None:
        version = k8s_client.VersionApi(self._api_client).get_code(
            _request_timeout=REQUEST_TIMEOUT
        )
        LOG.debug("Kubernetes API server %s reports version %s", redact_url(self.server), version.git_version)

    def load_and_validate(self) -> None:
        k8s_client.CoreV1Api(self._api_client).get_api_resources(
            _request_timeout=REQUEST_TIMEOUT
        )
        LOG.debug("Kubernetes client validated for server %s", redact_url(self.server))


def new_client(descriptor: ConnectionDescriptor) -> DatastoreClient:
    """Build and connect the client matching ``descriptor.datastore_type``."""

    client: DatastoreClient
    if descriptor.datastore_type is DatastoreType.ETCDV2:
        client = EtcdDatastoreClient(descriptor.etcd)
    else:
        client = KubernetesDatastoreClient(descriptor.kubernetes)
    client.connect()
    return client

"""Provider entry object tying the option schema, resources and resolver."""

from __future__ import annotations

from typing import List, Mapping, Optional

from oslo_config import cfg

from .client import new_client
from .config import ResolvedConfiguration
from .options import provider_opts
from .resolver import ClientFactory, resolve
from .resources import ResourceRegistry, build_default_registry


class Provider:
    """Calico provider as seen by the host runtime."""

    def __init__(
        self,
        resources: Optional[ResourceRegistry] = None,
        client_factory: ClientFactory = new_client,
    ) -> None:
        self._resources = resources or build_default_registry()
        self._client_factory = client_factory

    @property
    def schema(self) -> List[cfg.Opt]:
        return list(provider_opts)

    @property
    def resources(self) -> ResourceRegistry:
        return self._resources

    def configure(
        self,
        options: Optional[Mapping[str, Optional[str]]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> ResolvedConfiguration:
        """Resolve the provider configuration once per activation."""

        return resolve(options, environ=environ, client_factory=self._client_factory)


def default_provider() -> Provider:
    return Provider()

"""Resource types exposed by the Calico provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class ResourceType:
    """A provider resource name and the Calico kind it manages."""

    name: str
    kind: str


DEFAULT_RESOURCES = (
    ResourceType("calico_hostendpoint", "hostEndpoint"),
    ResourceType("calico_profile", "profile"),
    ResourceType("calico_policy", "policy"),
    ResourceType("calico_ippool", "ipPool"),
    ResourceType("calico_bgppeer", "bgpPeer"),
    ResourceType("calico_node", "node"),
)


class ResourceRegistry:
    """Ordered lookup of resource types by provider resource name."""

    def __init__(self) -> None:
        self._resources: Dict[str, ResourceType] = {}

    def register(self, name: str, kind: str) -> ResourceType:
        if name in self._resources:
            raise ValueError(f"resource '{name}' already registered")
        resource = ResourceType(name=name, kind=kind)
        self._resources[name] = resource
        return resource

    def get(self, name: str) -> ResourceType:
        try:
            return self._resources[name]
        except KeyError:
            raise KeyError(f"unknown resource '{name}'") from None

    def names(self) -> List[str]:
        return list(self._resources)

    def __contains__(self, name: object) -> bool:
        return name in self._resources

    def __len__(self) -> int:
        return len(self._resources)


def build_default_registry() -> ResourceRegistry:
    registry = ResourceRegistry()
    for resource in DEFAULT_RESOURCES:
        registry.register(resource.name, resource.kind)
    return registry

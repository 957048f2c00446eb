"""Calico datastore provider configuration.

This package turns provider-level connection options into a validated
connection descriptor and a datastore client handle.  The pieces are:

* :mod:`calico_provider.options` declaring the options with their
  ``CALICO_*`` environment fallbacks;
* :mod:`calico_provider.config` holding the typed settings and descriptor;
* :mod:`calico_provider.resolver` running validation, client construction
  and the load-and-validate check; and
* :mod:`calico_provider.resources` naming the resource types handed the
  resolved configuration.
"""

from .config import ConnectionDescriptor, DatastoreType, ResolvedConfiguration  # noqa: F401
from .errors import (  # noqa: F401
    ConfigurationError,
    DatastoreConnectionError,
    ProviderError,
    ValidationError,
)
from .provider import Provider, default_provider  # noqa: F401
from .resolver import resolve  # noqa: F401

__all__ = [
    "ConfigurationError",
    "ConnectionDescriptor",
    "DatastoreConnectionError",
    "DatastoreType",
    "Provider",
    "ProviderError",
    "ResolvedConfiguration",
    "ValidationError",
    "default_provider",
    "resolve",
]

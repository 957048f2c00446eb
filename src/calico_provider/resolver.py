"""Resolve provider options into a ready-to-use datastore configuration.

Resolution is a straight line: read options, validate the datastore type,
build the connection descriptor, construct the client, load-and-validate it.
Any failure stops the chain and nothing partial is returned.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional

from .client import DatastoreClient, new_client
from .config import ConnectionDescriptor, ProviderSettings, ResolvedConfiguration
from .errors import ConfigurationError, DatastoreConnectionError
from .options import check_option, read_options

LOG = logging.getLogger(__name__)

ClientFactory = Callable[[ConnectionDescriptor], DatastoreClient]


def build_descriptor(
    options: Optional[Mapping[str, Optional[str]]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ConnectionDescriptor:
    """Validate ``options`` and return the descriptor for the selected datastore."""

    values = read_options(options, environ)
    check_option("datastore_type", values["datastore_type"])
    settings = ProviderSettings.from_options(values)
    return ConnectionDescriptor.from_settings(settings)


def resolve(
    options: Optional[Mapping[str, Optional[str]]] = None,
    environ: Optional[Mapping[str, str]] = None,
    client_factory: Optional[ClientFactory] = None,
) -> ResolvedConfiguration:
    """Return a :class:`ResolvedConfiguration` or raise a ``ProviderError``.

    ``options`` holds the values the caller set explicitly; anything missing
    falls back to its ``CALICO_*`` environment variable and then to the
    literal default.  ``client_factory`` defaults to
    :func:`calico_provider.client.new_client`.
    """

    factory = client_factory or new_client

    descriptor = build_descriptor(options, environ)
    LOG.debug("Calico datastore descriptor: %s", descriptor.redacted())

    try:
        client = factory(descriptor)
    except Exception as exc:
        LOG.debug(
            "Failed to create %s datastore client: %s",
            descriptor.datastore_type.value,
            exc,
        )
        raise DatastoreConnectionError(
            exc, context={"datastore_type": descriptor.datastore_type.value}
        ) from exc

    try:
        client.load_and_validate()
    except Exception as exc:
        LOG.debug("Datastore client failed validation: %s", exc)
        raise ConfigurationError(
            str(exc),
            cause=exc,
            context={"datastore_type": descriptor.datastore_type.value},
        ) from exc

    config = ResolvedConfiguration(descriptor=descriptor, client=client)
    LOG.info("Configured Calico provider: %r", config)
    return config

"""Entry point for checking a Calico provider configuration."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from calico_provider import ProviderError, default_provider

from .config import load_options

LOG = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Resolve and validate a Calico provider configuration"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file holding provider options (environment only if omitted)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    options = {}
    if args.config is not None:
        try:
            options = load_options(args.config)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            LOG.error("cannot read provider configuration %s: %s", args.config, exc)
            return 2

    provider = default_provider()
    try:
        resolved = provider.configure(options)
    except ProviderError as exc:
        LOG.error("provider configuration failed: %s", exc)
        return 1

    print(yaml.safe_dump(
        {
            "datastore": resolved.descriptor.redacted(),
            "resources": provider.resources.names(),
        },
        sort_keys=False,
    ), end="")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

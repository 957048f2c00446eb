"""Provider option declarations for the Calico datastore connection.

The options are declared with oslo.config so they carry their help text,
allowed values and secrecy flag in one place and can be rendered by
``oslo-config-generator``.  Terraform-style environment fallbacks are applied
by :func:`read_options` because each option maps to a fixed, historical
``CALICO_*`` variable name rather than oslo's generated ones.
"""

from __future__ import annotations

import os
from typing import Dict, List, Mapping, Optional, Tuple

from oslo_config import cfg

from .errors import ValidationError

OPT_GROUP = "calico"

DATASTORE_TYPES = ("etcdv2", "kubernetes")

provider_opts = [
    cfg.StrOpt('datastore_type',
               default='etcdv2',
               choices=DATASTORE_TYPES,
               help='Indicates the datastore to use (required for Kubernetes '
                    'as the default is etcdv2).'),
    cfg.StrOpt('etcd_endpoints',
               default='',
               help='Multiple etcd endpoints separated by comma.'),
    cfg.StrOpt('etcd_username',
               default='',
               help='Etcd username.'),
    cfg.StrOpt('etcd_password',
               default='',
               secret=True,
               help='Etcd password.'),
    cfg.StrOpt('etcd_key_file',
               default='',
               help='File location of the etcd client key.'),
    cfg.StrOpt('etcd_cert_file',
               default='',
               help='File location of the etcd client certificate.'),
    cfg.StrOpt('etcd_ca_cert_file',
               default='',
               help='File location of the etcd CA certificate.'),
    cfg.StrOpt('kubeconfig',
               default='',
               help='Path to a kubeconfig file.'),
    cfg.StrOpt('k8s_api_endpoint',
               default='',
               help='Kubernetes API server URL.'),
    cfg.StrOpt('k8s_cert_file',
               default='',
               help='Kubernetes client certificate file.'),
    cfg.StrOpt('k8s_key_file',
               default='',
               help='Kubernetes client key file.'),
    cfg.StrOpt('k8s_ca_file',
               default='',
               help='Kubernetes certificate authority file.'),
    cfg.StrOpt('k8s_token',
               default='',
               secret=True,
               help='Kubernetes bearer token.'),
]

ENV_DEFAULTS: Dict[str, str] = {
    'datastore_type': 'CALICO_DATASTORE_TYPE',
    'etcd_endpoints': 'CALICO_BACKEND_ETCD_ENDPOINTS',
    'etcd_username': 'CALICO_BACKEND_ETCD_USERNAME',
    'etcd_password': 'CALICO_BACKEND_ETCD_PASSWORD',
    'etcd_key_file': 'CALICO_BACKEND_ETCD_ETCD_KEY_FILE',
    'etcd_cert_file': 'CALICO_BACKEND_ETCD_ETCD_CERT_FILE',
    'etcd_ca_cert_file': 'CALICO_BACKEND_ETCD_ETCD_CA_CERT_FILE',
    'kubeconfig': 'CALICO_KUBECONFIG',
    'k8s_api_endpoint': 'CALICO_K8S_API_ENDPOINT',
    'k8s_cert_file': 'CALICO_K8S_CERT_FILE',
    'k8s_key_file': 'CALICO_K8S_KEY_FILE',
    'k8s_ca_file': 'CALICO_K8S_CA_FILE',
    'k8s_token': 'CALICO_K8S_TOKEN',
}

SECRET_OPTIONS = frozenset(opt.dest for opt in provider_opts if opt.secret)

_OPTS_BY_NAME = {opt.dest: opt for opt in provider_opts}


def register_provider_opts(conf: cfg.ConfigOpts, group: str = OPT_GROUP) -> None:
    """Register the provider options on ``conf`` under ``group``."""

    conf.register_opts(provider_opts, group=group)


def list_opts() -> List[Tuple[str, List[cfg.Opt]]]:
    """Entry point for ``oslo-config-generator``."""

    return [(OPT_GROUP, list(provider_opts))]


def env_default(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the fallback value for option ``name``.

    The environment variable wins when it is set to a non-empty string,
    otherwise the option's literal default is used.
    """

    environ = os.environ if environ is None else environ
    value = environ.get(ENV_DEFAULTS[name], "")
    if value:
        return value
    return _OPTS_BY_NAME[name].default


def read_options(
    supplied: Optional[Mapping[str, Optional[str]]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Return every provider option with environment fallbacks applied.

    A value counts as supplied when its key is present and not ``None``; an
    explicit empty string is kept as-is.
    """

    supplied = supplied or {}
    unknown = sorted(set(supplied) - set(_OPTS_BY_NAME))
    if unknown:
        raise ValidationError(
            unknown[0],
            "unknown provider option",
            context={"known": ", ".join(_OPTS_BY_NAME)},
        )

    values: Dict[str, str] = {}
    for opt in provider_opts:
        raw = supplied.get(opt.dest)
        values[opt.dest] = env_default(opt.dest, environ) if raw is None else str(raw)
    return values


def check_option(name: str, value: str) -> str:
    """Validate ``value`` against the declared type of option ``name``."""

    opt = _OPTS_BY_NAME[name]
    try:
        return opt.type(value)
    except ValueError as exc:
        if name == "datastore_type":
            message = "etcdv2 and kubernetes are the only supported values"
        else:
            message = str(exc)
        raise ValidationError(
            name, message, context={"value": value}
        ) from exc

from pathlib import Path

import pytest
import yaml

from calico_provider_cli.config import load_options
from calico_provider_cli.main import main


def test_load_options_from_provider_section(tmp_path: Path):
    path = tmp_path / "provider.yaml"
    path.write_text(
        """
provider:
  datastore_type: etcdv2
  etcd_endpoints: http://10.0.0.1:2379
  etcd_username: null
"""
    )

    options = load_options(path)

    assert options == {
        "datastore_type": "etcdv2",
        "etcd_endpoints": "http://10.0.0.1:2379",
        "etcd_username": None,
    }


def test_load_options_flat_mapping(tmp_path: Path):
    path = tmp_path / "provider.yaml"
    path.write_text("datastore_type: kubernetes\n")

    assert load_options(path) == {"datastore_type": "kubernetes"}


def test_load_options_rejects_non_mapping(tmp_path: Path):
    path = tmp_path / "provider.yaml"
    path.write_text("- etcdv2\n")

    with pytest.raises(ValueError):
        load_options(path)


def test_main_prints_redacted_configuration(fake_etcd, tmp_path: Path, capsys):
    path = tmp_path / "provider.yaml"
    path.write_text(
        """
provider:
  etcd_endpoints: http://10.0.0.1:2379
  etcd_username: calico
  etcd_password: s3cret
"""
    )

    assert main(["--config", str(path)]) == 0

    out = capsys.readouterr().out
    assert "s3cret" not in out
    summary = yaml.safe_load(out)
    assert summary["datastore"]["endpoints"] == "http://10.0.0.1:2379"
    assert summary["datastore"]["password"] == "****"
    assert "calico_hostendpoint" in summary["resources"]


def test_main_reports_validation_failure(tmp_path: Path):
    path = tmp_path / "provider.yaml"
    path.write_text("datastore_type: consul\n")

    assert main(["--config", str(path)]) == 1


def test_main_reports_unreadable_file(tmp_path: Path):
    assert main(["--config", str(tmp_path / "missing.yaml")]) == 2

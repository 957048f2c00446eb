from types import SimpleNamespace

import etcd
import pytest
from kubernetes import client as k8s_client

from calico_provider.options import ENV_DEFAULTS


@pytest.fixture(autouse=True)
def clean_calico_env(monkeypatch):
    for var in ENV_DEFAULTS.values():
        monkeypatch.delenv(var, raising=False)


class FakeEtcdClient:
    instances: list = []
    read_error = None

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.reads: list[str] = []
        FakeEtcdClient.instances.append(self)

    @property
    def machines(self):
        return ["http://127.0.0.1:2379"]

    def read(self, key):
        self.reads.append(key)
        if FakeEtcdClient.read_error is not None:
            raise FakeEtcdClient.read_error
        return SimpleNamespace(key=key, dir=True)


@pytest.fixture
def fake_etcd(monkeypatch):
    FakeEtcdClient.instances = []
    FakeEtcdClient.read_error = None
    monkeypatch.setattr(etcd, "Client", FakeEtcdClient)
    return FakeEtcdClient


class FakeKubernetesApis:
    def __init__(self):
        self.calls: list[str] = []
        self.resources_error = None

    def version_api(self, api_client):
        apis = self

        class VersionApi:
            def get_code(self, **kwargs):
                apis.calls.append("version")
                return SimpleNamespace(git_version="v1.29.0")

        return VersionApi()

    def core_v1_api(self, api_client):
        apis = self

        class CoreV1Api:
            def get_api_resources(self, **kwargs):
                apis.calls.append("resources")
                if apis.resources_error is not None:
                    raise apis.resources_error
                return SimpleNamespace(resources=[])

        return CoreV1Api()


@pytest.fixture
def fake_k8s(monkeypatch):
    apis = FakeKubernetesApis()
    monkeypatch.setattr(k8s_client, "VersionApi", apis.version_api)
    monkeypatch.setattr(k8s_client, "CoreV1Api", apis.core_v1_api)
    return apis

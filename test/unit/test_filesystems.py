# -*- coding: utf-8 -*-
"""Unit tests for the storage layer."""

import pytest

from schema_scout.data import filesystems
from schema_scout.data.filesystems import FileSystemHandler

URL = "abfss://landing@myaccount.dfs.core.windows.net/sales/orders.csv"


class FakeAzureFileSystem:
    def __init__(self, **kwargs):
        self.kwargs = kwargs


@pytest.fixture
def credentials(monkeypatch):
    """Fresh credential registry and a recording stand-in for adlfs."""
    creds = dict.fromkeys(FileSystemHandler._azure_credentials)
    monkeypatch.setattr(FileSystemHandler, "_azure_credentials", creds)
    monkeypatch.setattr(filesystems.adlfs, "AzureBlobFileSystem", FakeAzureFileSystem)
    return creds


@pytest.mark.parametrize("path, remote", [
    (URL, True),
    ("abfs://c@a.dfs.core.windows.net/x.csv", True),
    ("az://c/x.csv", True),
    ("/data/orders.csv", False),
    ("orders.csv", False),
])
def test_is_remote(path, remote):
    assert FileSystemHandler.is_remote(path) is remote


def test_local_path_uses_local_fs(credentials):
    fs, path = FileSystemHandler.get_fs_and_path("/data/orders.csv")
    assert not isinstance(fs, FakeAzureFileSystem)
    assert path == "/data/orders.csv"


def test_account_name_from_url(credentials):
    fs, path = FileSystemHandler.get_fs_and_path(URL)
    assert fs.kwargs == {"account_name": "myaccount"}
    assert path == URL


def test_prefixed_credentials_are_stripped(credentials):
    FileSystemHandler.set_azure_credentials({
        "azure_account_name": "other",
        "azure_account_key": "secret",
        "unknown_key": "ignored",
        "client_id": None,
    })
    assert credentials["account_name"] == "other"
    assert credentials["account_key"] == "secret"
    assert credentials["client_id"] is None
    assert "unknown_key" not in credentials

    fs, _ = FileSystemHandler.get_fs_and_path(URL)
    assert fs.kwargs == {"account_name": "other", "account_key": "secret"}


def test_connection_string_wins(credentials):
    FileSystemHandler.set_azure_credentials({
        "connection_string": "DefaultEndpointsProtocol=https;AccountName=myaccount",
        "account_key": "secret",
    })
    fs, _ = FileSystemHandler.get_fs_and_path(URL)
    assert fs.kwargs == {
        "account_name": "myaccount",
        "connection_string": "DefaultEndpointsProtocol=https;AccountName=myaccount",
    }


def test_service_principal(credentials):
    FileSystemHandler.set_azure_credentials({
        "azure_tenant_id": "t",
        "azure_client_id": "c",
        "azure_client_secret": "s",
    })
    fs, _ = FileSystemHandler.get_fs_and_path(URL)
    assert fs.kwargs == {
        "account_name": "myaccount",
        "tenant_id": "t",
        "client_id": "c",
        "client_secret": "s",
    }


def test_incomplete_service_principal_is_not_used(credentials):
    FileSystemHandler.set_azure_credentials({"tenant_id": "t", "client_id": "c"})
    fs, _ = FileSystemHandler.get_fs_and_path(URL)
    assert fs.kwargs == {"account_name": "myaccount"}


def test_isdir_and_size(tmp_path):
    path = tmp_path / "orders.csv"
    path.write_bytes(b"a;b\n")
    assert FileSystemHandler.isdir(str(tmp_path))
    assert not FileSystemHandler.isdir(str(path))
    assert FileSystemHandler.size(str(path)) == 4

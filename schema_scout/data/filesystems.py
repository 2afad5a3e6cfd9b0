"""
File system abstraction layer for schema_scout.
Supports local and cloud storage (Azure ADLS Gen2).
"""
from __future__ import annotations

import errno
import posixpath
import uuid
from typing import Any, BinaryIO, Dict, TextIO, Union

# For Azure ADLS Gen2 support
import adlfs
import fsspec


_AZURE_SCHEMES = ("abfss://", "abfs://", "az://")


class FileSystemHandler:
    """Abstract file system operations for different storage backends."""

    # Explicit Azure credentials; adlfs falls back to the AZURE_STORAGE_* environment
    _azure_credentials = {
        "connection_string": None,
        "account_key": None,
        "account_name": None,
        "tenant_id": None,
        "client_id": None,
        "client_secret": None,
    }

    @classmethod
    def set_azure_credentials(cls, credentials: dict) -> None:
        """
        Set Azure credentials for use with ADLS Gen2 storage.

        Args:
            credentials: Dictionary whose keys are the credential names, with or
                without an ``azure_`` prefix (``azure_account_key`` or ``account_key``).
        """
        for key, value in (credentials or {}).items():
            name = key[len("azure_"):] if key.startswith("azure_") else key
            if name in cls._azure_credentials and value is not None:
                cls._azure_credentials[name] = value

    @classmethod
    def is_remote(cls, path: str) -> bool:
        return str(path).startswith(_AZURE_SCHEMES)

    @classmethod
    def get_fs_and_path(cls, path: str) -> tuple[Any, str]:
        """
        Parse a path and return the appropriate filesystem and path.

        Supports:
        - Local paths: /path/to/file.csv
        - Azure ADLS Gen2: abfss://container@account.dfs.core.windows.net/path/to/file.csv
        """
        path = str(path)
        if not cls.is_remote(path):
            return fsspec.filesystem("file"), path

        creds = cls._azure_credentials
        account_name = creds.get("account_name")
        if account_name is None and "@" in path:
            account_name = path.split("@", 1)[1].split(".", 1)[0]

        kwargs: Dict[str, Any] = {"account_name": account_name}
        if creds.get("connection_string"):
            kwargs["connection_string"] = creds["connection_string"]
        elif creds.get("account_key"):
            kwargs["account_key"] = creds["account_key"]
        elif all(creds.get(k) for k in ("tenant_id", "client_id", "client_secret")):
            kwargs.update(
                tenant_id=creds["tenant_id"],
                client_id=creds["client_id"],
                client_secret=creds["client_secret"],
            )
        return adlfs.AzureBlobFileSystem(**kwargs), path

    @classmethod
    def open_file(cls, path: str, mode: str = "rb", **kwargs) -> Union[BinaryIO, TextIO]:
        """Open a file from any supported filesystem."""
        fs, path = cls.get_fs_and_path(path)
        return fs.open(path, mode, **kwargs)

    @classmethod
    def isdir(cls, path: str) -> bool:
        fs, path = cls.get_fs_and_path(path)
        return fs.isdir(path)

    @classmethod
    def size(cls, path: str) -> int:
        """Size of *path* in bytes."""
        fs, path = cls.get_fs_and_path(path)
        return int(fs.info(path).get("size") or 0)

    @classmethod
    def write_text_atomic(cls, path: str, text: str, encoding: str = "utf-8") -> None:
        """
        Write *text* to *path*, replacing any existing file only once the
        whole content is on storage.

        The content goes to a hidden sibling file first which is then moved
        over the target. The sibling is removed if anything fails.
        """
        fs, path = cls.get_fs_and_path(path)
        if fs.isdir(path):
            raise IsADirectoryError(errno.EISDIR, "Is a directory", path)
        parent, name = posixpath.split(path)
        tmp_path = posixpath.join(parent, f".{name}.{uuid.uuid4().hex}.tmp")
        try:
            with fs.open(tmp_path, "w", encoding=encoding) as fh:
                fh.write(text)
            fs.mv(tmp_path, path)
        except BaseException:
            if fs.exists(tmp_path):
                fs.rm(tmp_path)
            raise

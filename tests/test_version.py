"""
Tests for the version module of the ACTA SDK.
"""
import importlib
import re
from importlib import metadata as importlib_metadata
from unittest.mock import mock_open, patch

import pytest
import tomli

from acta_sdk import __version__
import acta_sdk.version as vmod


def _not_installed(name):
    raise importlib_metadata.PackageNotFoundError(name)


@pytest.fixture(autouse=True)
def _restore_version_module(monkeypatch):
    yield
    monkeypatch.undo()
    importlib.reload(vmod)


def test_version_format():
    """Test that the version string follows semantic versioning"""
    assert re.match(r'^\d+\.\d+\.\d+$', __version__), "Version should follow semantic versioning"


@patch('importlib.metadata.version')
def test_version_from_metadata(mock_metadata_version):
    """When metadata lookup succeeds, version comes from metadata"""
    mock_metadata_version.return_value = "2.3.4"
    importlib.reload(vmod)
    assert vmod.__version__ == "2.3.4"


@patch('importlib.metadata.version', side_effect=_not_installed)
@patch('pathlib.Path.open', new_callable=mock_open, read_data=b'[project]\nversion = "1.2.3"\n')
def test_version_from_pyproject(mock_open_file, mock_metadata_version):
    """When the package is not installed, pyproject.toml is read"""
    importlib.reload(vmod)
    assert vmod.__version__ == "1.2.3"


def test_version_file_not_found(monkeypatch):
    """If pyproject.toml is missing, fall back to the default"""
    monkeypatch.setattr(importlib_metadata, 'version', _not_installed)

    def missing(*args, **kwargs):
        raise FileNotFoundError()

    monkeypatch.setattr('pathlib.Path.open', missing)
    importlib.reload(vmod)
    assert vmod.__version__ == "0.1.0"


def test_version_key_error(monkeypatch):
    """If the TOML has no version key, fall back to the default"""
    monkeypatch.setattr(importlib_metadata, 'version', _not_installed)
    monkeypatch.setattr('pathlib.Path.open', mock_open(read_data=b'[project]\nname = "acta-sdk"\n'))
    importlib.reload(vmod)
    assert vmod.__version__ == "0.1.0"


def test_version_toml_decode_error(monkeypatch):
    """If the TOML cannot be parsed, fall back to the default"""
    monkeypatch.setattr(importlib_metadata, 'version', _not_installed)
    monkeypatch.setattr('pathlib.Path.open', mock_open(read_data=b'not [valid toml'))
    importlib.reload(vmod)
    assert vmod.__version__ == "0.1.0"

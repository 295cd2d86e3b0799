"""Shared pytest fixtures for the gelf-pretty test suite."""

import json

import pytest


@pytest.fixture()
def gelf_dict() -> dict:
    """A minimal valid GELF payload."""
    return {
        "version": "1.1",
        "host": "example.org",
        "short_message": "foo",
        "timestamp": 1385053862.3072,
        "level": 6,
    }


@pytest.fixture()
def gelf_line(gelf_dict) -> bytes:
    return json.dumps(gelf_dict).encode("utf-8")

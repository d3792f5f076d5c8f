"""Shared pytest configuration and fixtures for the osm-services test suite.

This module provides:
- An isolated log directory for every test session
- A fake transport that records requested URLs
- A builder for capabilities documents
"""
import os
import sys
import tempfile
from pathlib import Path

import pytest


# Add src/ to path so test modules can import osm_services package
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from osm_services.transport.base import Response, Transport  # noqa: E402


CAPABILITIES_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="OpenStreetMap server">
  <api>
    <version minimum="{minimum}" maximum="{maximum}"/>
    <area maximum="0.25"/>
    <tracepoints per_page="5000"/>
    <waynodes maximum="2000"/>
    <changesets maximum_elements="10000"/>
    <timeout seconds="300"/>
  </api>
</osm>
"""


class FakeTransport(Transport):
    """Transport returning a canned response, or raising a canned error."""

    def __init__(self, body="", status_code=200, error=None):
        self.body = body
        self.status_code = status_code
        self.error = error
        self.urls = []

    def get_response(self, url):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return Response(status_code=self.status_code, body=self.body)


def pytest_configure(config):
    """Keep log files out of the user's home directory and register markers."""
    os.environ["XDG_DATA_HOME"] = tempfile.mkdtemp(prefix="osm-services-logs-")
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (fast, isolated)"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on their location."""
    for item in items:
        if "integration" not in item.nodeid:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def capabilities_xml():
    """Build a capabilities document advertising the given version range."""
    def build(minimum="0.5", maximum="0.7"):
        return CAPABILITIES_TEMPLATE.format(minimum=minimum, maximum=maximum)
    return build


@pytest.fixture
def fake_transport(capabilities_xml):
    """A FakeTransport serving a 0.5-0.7 capabilities document."""
    return FakeTransport(body=capabilities_xml())


@pytest.fixture
def make_transport():
    """Factory for FakeTransport instances."""
    return FakeTransport


@pytest.fixture
def password_file(tmp_path):
    """Write a password file with the given lines and return its path."""
    def write(*lines, name="osm-password"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)
    return write

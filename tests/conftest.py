"""Shared pytest fixtures for the drawiogen test suite."""
import sys
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parent.parent
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

FIXED_TIMESTAMP = "2024-01-01T00:00:00.000Z"


def _cells(xml_text):
    root = ET.fromstring(xml_text)
    return root.findall("./diagram/mxGraphModel/root/mxCell")


@pytest.fixture
def modified():
    return FIXED_TIMESTAMP


@pytest.fixture
def parse_cells():
    """Return all mxCell elements of a document, reserved cells included."""
    return _cells


@pytest.fixture
def element_cells():
    """Return generated mxCell elements (ids 0 and 1 stripped)."""
    def _elements(xml_text):
        return [c for c in _cells(xml_text) if c.get("id") not in ("0", "1")]
    return _elements

"""
drawiogen package – structured diagram requests → draw.io (.drawio) XML.

Responsibilities:
 - Typed request inputs and generated cells in models.py
 - Shape style table and XML helpers in utils.py
 - Per-document cell factory / serializer in renderer.py
 - Flowchart BFS leveling and coordinates in layout.py
 - Diagram-type-specific building in handlers/*
 - Registry/decorator for handler lookup in handler_registry.py
 - Request dispatch + persistence in main.py, CLI wiring in cli.py
"""
from .config import Config
from .main import DiagramResult, build_xml, run
from .models import DiagramRequest, DiagramRequestError

__all__ = [
    "Config",
    "DiagramRequest",
    "DiagramRequestError",
    "DiagramResult",
    "build_xml",
    "run",
]

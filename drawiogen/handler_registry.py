from __future__ import annotations
from typing import Callable, Dict

from .models import DiagramRequestError

# Diagram type tag (lower-case) -> builder class. A builder exposes
#   render(data, out)
# and appends its cells to the per-request DrawioWriter `out`; it never
# serializes or writes files itself.

_REGISTRY: Dict[str, type] = {}


def register(diagram_type: str) -> Callable[[type], type]:
    def deco(cls: type) -> type:
        _REGISTRY[diagram_type.strip().lower()] = cls
        return cls
    return deco


def resolve(diagram_type: str) -> type:
    key = (diagram_type or "").strip().lower()
    try:
        return _REGISTRY[key]
    except KeyError:
        raise DiagramRequestError(
            "E_UNKNOWN_TYPE", f"Unknown diagram type: {diagram_type!r}"
        ) from None


def registered_types() -> Dict[str, type]:
    return dict(_REGISTRY)

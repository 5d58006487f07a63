from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from .utils import fmt_number, xml_escape

Id = str  # caller-supplied step/node/entity id, not a generated cell id

DEFAULT_WIDTH = 120
DEFAULT_HEIGHT = 60


class DiagramRequestError(ValueError):
    """Request-level failure with a stable code for the result object."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return self.message


# ---------- generated elements ----------

def _cell_xml(cell_id: str, value: str, style: str, kind: str,
              geometry: str, extra: str = "") -> str:
    attrs = f'id="{cell_id}" '
    if value:
        attrs += f'value="{xml_escape(value)}" '
    if style:
        attrs += f'style="{xml_escape(style)}" '
    attrs += f'{kind}="1" parent="1"{extra}'
    return (f"      <mxCell {attrs}>\n"
            f"        <mxGeometry {geometry} />\n"
            f"      </mxCell>")


@dataclass(frozen=True)
class Vertex:
    id: str
    value: str
    style: str
    x: float
    y: float
    width: float
    height: float

    def to_xml(self) -> str:
        geometry = (f'x="{fmt_number(self.x)}" y="{fmt_number(self.y)}" '
                    f'width="{fmt_number(self.width)}" height="{fmt_number(self.height)}" '
                    f'as="geometry"')
        return _cell_xml(self.id, self.value, self.style, "vertex", geometry)


@dataclass(frozen=True)
class Edge:
    id: str
    value: str
    style: str
    source: str
    target: str

    def to_xml(self) -> str:
        extra = ""
        if self.source:
            extra += f' source="{self.source}"'
        if self.target:
            extra += f' target="{self.target}"'
        return _cell_xml(self.id, self.value, self.style, "edge",
                         'relative="1" as="geometry"', extra)


Element = Union[Vertex, Edge]


# ---------- request parsing helpers ----------

def _mapping(raw: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise DiagramRequestError("E_INVALID_FIELD", f"{where} must be an object")
    return raw


def require(raw: Mapping[str, Any], key: str, where: str) -> Any:
    value = raw.get(key)
    if value is None:
        raise DiagramRequestError("E_MISSING_FIELD", f"{where} is missing '{key}'")
    return value


def list_field(data: Mapping[str, Any], key: str, where: str,
               required: bool = True) -> List[Any]:
    value = data.get(key)
    if value is None:
        if required:
            raise DiagramRequestError("E_MISSING_FIELD", f"{where} is missing '{key}'")
        return []
    if not isinstance(value, list):
        raise DiagramRequestError("E_INVALID_FIELD", f"{where} '{key}' must be a list")
    return value


def _number(raw: Mapping[str, Any], key: str, where: str,
            default: Optional[float]) -> Optional[float]:
    value = raw.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DiagramRequestError("E_INVALID_FIELD", f"{where} '{key}' must be a number")
    return value


def _flag(raw: Mapping[str, Any], key: str, where: str) -> bool:
    value = raw.get(key, False)
    if not isinstance(value, bool):
        raise DiagramRequestError("E_INVALID_FIELD", f"{where} '{key}' must be true or false")
    return value


def _text(value: Any) -> str:
    return "" if value is None else str(value)


# ---------- diagram inputs ----------

@dataclass
class Connection:
    source: Id
    target: Id
    label: str = ""

    @classmethod
    def from_dict(cls, raw: Any, where: str) -> "Connection":
        raw = _mapping(raw, where)
        return cls(
            source=_text(require(raw, "from", where)),
            target=_text(require(raw, "to", where)),
            label=_text(raw.get("label")),
        )


@dataclass
class Step:
    id: Id
    label: str
    kind: str = "process"
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    connector_label: str = ""
    # filled in by the flowchart layout
    level: Optional[int] = None
    x: Optional[float] = None
    y: Optional[float] = None

    @classmethod
    def from_dict(cls, raw: Any, index: int) -> "Step":
        where = f"steps[{index}]"
        raw = _mapping(raw, where)
        return cls(
            id=_text(raw.get("id")) or str(index + 1),
            label=_text(require(raw, "label", where)),
            kind=raw.get("type") or "process",
            width=_number(raw, "width", where, None) or DEFAULT_WIDTH,
            height=_number(raw, "height", where, None) or DEFAULT_HEIGHT,
            connector_label=_text(raw.get("connectorLabel")),
        )


@dataclass
class Interaction:
    source: str
    target: str
    message: str
    dashed: bool = False

    @classmethod
    def from_dict(cls, raw: Any, index: int) -> "Interaction":
        where = f"interactions[{index}]"
        raw = _mapping(raw, where)
        return cls(
            source=_text(require(raw, "from", where)),
            target=_text(require(raw, "to", where)),
            message=_text(require(raw, "message", where)),
            dashed=_flag(raw, "dashed", where),
        )


@dataclass
class Entity:
    id: Id
    name: str
    attributes: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any, index: int) -> "Entity":
        where = f"entities[{index}]"
        raw = _mapping(raw, where)
        attributes = list_field(raw, "attributes", where)
        return cls(
            id=_text(require(raw, "id", where)),
            name=_text(require(raw, "name", where)),
            attributes=[_text(a) for a in attributes],
        )


@dataclass
class Node:
    """A freely placed shape: network node or custom shape."""
    id: Id
    label: str
    kind: str = "rectangle"
    x: float = 100
    y: float = 100
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT

    @classmethod
    def from_dict(cls, raw: Any, where: str, strict: bool = False) -> "Node":
        raw = _mapping(raw, where)
        if strict:
            for key in ("label", "type", "x", "y"):
                require(raw, key, where)
        return cls(
            id=_text(require(raw, "id", where)),
            label=_text(raw.get("label")) if strict else (_text(raw.get("label")) or "Node"),
            kind=raw.get("type") or "rectangle",
            x=_number(raw, "x", where, 100),
            y=_number(raw, "y", where, 100),
            width=_number(raw, "width", where, None) or DEFAULT_WIDTH,
            height=_number(raw, "height", where, None) or DEFAULT_HEIGHT,
        )


@dataclass
class DiagramRequest:
    type: str
    data: Dict[str, Any]
    filename: str

    @classmethod
    def from_dict(cls, raw: Any) -> "DiagramRequest":
        raw = _mapping(raw, "request")
        data = _mapping(require(raw, "data", "request"), "request 'data'")
        filename = _text(require(raw, "filename", "request")).strip()
        if not filename:
            raise DiagramRequestError("E_MISSING_FIELD", "request 'filename' is empty")
        return cls(
            type=_text(require(raw, "type", "request")),
            data=dict(data),
            filename=filename,
        )

# drawiogen/main.py
from __future__ import annotations
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

from .config import Config
from .handler_registry import resolve
from .handlers import custom, erd, flowchart, network, sequence  # noqa: F401
from .models import DiagramRequest, DiagramRequestError
from .renderer import DrawioWriter

logger = logging.getLogger(__name__)


@dataclass
class DiagramResult:
    ok: bool
    message: str
    path: Optional[str] = None
    code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


def build(diagram_type: str, data: Mapping[str, Any], modified: Optional[str] = None) -> DrawioWriter:
    Handler = resolve(diagram_type)
    out = DrawioWriter(modified=modified)
    Handler.render(data, out)
    return out


def build_xml(diagram_type: str, data: Mapping[str, Any], modified: Optional[str] = None) -> str:
    return build(diagram_type, data, modified).text()


def _error_from_exception(exc: Exception) -> DiagramResult:
    if isinstance(exc, DiagramRequestError):
        return DiagramResult(ok=False, code=exc.code, message=exc.message)
    if isinstance(exc, OSError):
        return DiagramResult(ok=False, code="E_IO_WRITE",
                             message=f"Failed to save file: {exc.strerror or exc}")
    return DiagramResult(ok=False, code="E_INTERNAL",
                         message=str(exc) or exc.__class__.__name__)


def run(request: Any, cfg: Config) -> DiagramResult:
    """Build, persist and report one request. Never raises."""
    try:
        if not isinstance(request, DiagramRequest):
            request = DiagramRequest.from_dict(request)
        out = build(request.type, request.data, cfg.modified)
        path = out.save(cfg.outdir, request.filename)
    except Exception as exc:
        result = _error_from_exception(exc)
        logger.warning("Diagram request failed [%s]: %s", result.code, result.message,
                       exc_info=result.code == "E_INTERNAL")
        return result

    return DiagramResult(
        ok=True,
        path=str(path),
        message=f"Successfully created {request.type} diagram at {path}",
    )

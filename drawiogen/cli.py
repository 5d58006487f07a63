from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import Config
from .handler_registry import registered_types
from .main import DiagramResult, run


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="drawiogen",
        description="Generate draw.io diagrams from JSON requests.",
    )
    p.add_argument("request", nargs="?", default="-",
                   help="JSON request file ({type, data, filename}); '-' reads stdin.")
    p.add_argument("-o", "--outdir", type=Path, default=None,
                   help="Output directory (default: $DRAWIO_OUTPUT_DIR or the working directory).")
    p.add_argument("-t", "--type", dest="diagram_type", default=None,
                   help="Override the request's diagram type.")
    p.add_argument("-f", "--filename", default=None,
                   help="Override the request's output filename (.drawio is appended if missing).")
    p.add_argument("--list-types", action="store_true",
                   help="Print the supported diagram types and exit.")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Debug logging on stderr.")
    return p


def _load_request(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    with open(source, encoding="utf-8") as f:
        return json.load(f)


def _emit(result: DiagramResult) -> int:
    sys.stdout.write(json.dumps(result.to_dict()) + "\n")
    return 0 if result.ok else 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if ns.list_types:
        for name in sorted(registered_types()):
            print(name)
        return 0

    try:
        request = _load_request(ns.request)
    except (OSError, ValueError) as exc:
        return _emit(DiagramResult(ok=False, code="E_REQUEST",
                                   message=f"Could not read request {ns.request!r}: {exc}"))

    if isinstance(request, dict):
        overrides: Dict[str, Any] = {}
        if ns.diagram_type:
            overrides["type"] = ns.diagram_type
        if ns.filename:
            overrides["filename"] = ns.filename
        request = {**request, **overrides}

    cfg = Config.from_env(outdir=ns.outdir)
    return _emit(run(request, cfg))


if __name__ == "__main__":
    raise SystemExit(main())

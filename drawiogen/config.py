from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

OUTPUT_DIR_ENV = "DRAWIO_OUTPUT_DIR"


@dataclass(frozen=True)
class Config:
    outdir: Path                         # DRAWIO_OUTPUT_DIR or -o / --outdir
    modified: Optional[str] = None       # fixed document timestamp; None = now

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None,
                 outdir: Optional[Path] = None) -> "Config":
        env = os.environ if environ is None else environ
        if outdir is None:
            outdir = Path(env.get(OUTPUT_DIR_ENV) or Path.cwd())
        return cls(outdir=Path(outdir))

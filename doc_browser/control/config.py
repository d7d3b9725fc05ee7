from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class ControlConfig:
    docs_root: Path
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ControlConfig":
        return cls(
            docs_root=Path(os.getenv("DOCS_ROOT", "./docs")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

"""Runtime configuration helpers."""
from __future__ import annotations

import os
from dataclasses import dataclass

LOG_MODES = ("off", "normal", "detail")


@dataclass(slots=True)
class RuntimeSettings:
    """Settings bundle for the calculator engine and console session."""

    max_line_length: int = 256
    max_depth: int = 64
    precision: int = 2
    log_mode: str = "normal"

    def __post_init__(self) -> None:
        if self.max_line_length < 3:
            raise ValueError("max_line_length must be >= 3")
        if self.max_depth < 1:
            raise ValueError("max_depth must be >= 1")
        if self.precision < 0:
            raise ValueError("precision must be >= 0")
        self.log_mode = self.log_mode.strip().lower()
        if self.log_mode not in LOG_MODES:
            self.log_mode = "normal"

    @classmethod
    def from_env(cls) -> "RuntimeSettings":
        return cls(
            max_line_length=int(os.getenv("CALC_MAX_LINE_LENGTH", "256")),
            max_depth=int(os.getenv("CALC_MAX_DEPTH", "64")),
            precision=int(os.getenv("CALC_PRECISION", "2")),
            log_mode=os.getenv("CALC_LOG_MODE", "normal"),
        )

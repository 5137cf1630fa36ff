from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

# Records as emitted by a plugin codec; never inspected by the engine.
ObjectSet = List[Any]

PROGRESS_LOADED = 33.0
PROGRESS_DECODED = 66.0
PROGRESS_DONE = 100.0
PROGRESS_FAILED = -1.0


class ConversionDirection(Enum):
    TO_TEXT = "json"
    TO_BINARY = "esp"

    @property
    def output_suffix(self) -> str:
        return f".{self.value}"

    @classmethod
    def for_input(cls, input_path: str) -> "ConversionDirection":
        """Guess the direction from the input file: JSON goes back to a plugin."""
        if input_path.lower().endswith(".json"):
            return cls.TO_BINARY
        return cls.TO_TEXT


@dataclass
class ConversionRequest:
    """One user-initiated conversion."""
    input_path: str
    direction: ConversionDirection
    transcode: bool = True
    compact: bool = False
    overwrite: bool = False
    codec: str = "tes3conv"
    codec_options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ConversionOutcome:
    """Progress values received for a single conversion, in arrival order."""
    signals: List[float] = field(default_factory=list)

    @property
    def finished(self) -> bool:
        return bool(self.signals) and self.signals[-1] in (PROGRESS_DONE, PROGRESS_FAILED)

    @property
    def succeeded(self) -> bool:
        return bool(self.signals) and self.signals[-1] == PROGRESS_DONE

    @property
    def failed(self) -> bool:
        return bool(self.signals) and self.signals[-1] == PROGRESS_FAILED

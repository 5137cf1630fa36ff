import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(os.environ.get("TES3JSON_CONFIG", Path.home() / ".tes3json.json"))


@dataclass
class AppConfig:
    lang: str = "en-US"
    transcode: bool = True
    compact: bool = False
    overwrite: bool = False
    codec: str = "tes3conv"
    tes3conv_path: str = ""

    def save(self, path: Optional[Path] = None) -> Path:
        path = path or CONFIG_PATH
        path.write_text(json.dumps(asdict(self), ensure_ascii=False, indent=2), encoding="utf-8")
        return path

    @staticmethod
    def load(path: Optional[Path] = None) -> "AppConfig":
        path = path or CONFIG_PATH
        if not path.exists():
            return AppConfig()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable config %s: %s", path, e)
            return AppConfig()
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: expected a JSON object", path)
            return AppConfig()

        defaults = AppConfig()
        return AppConfig(
            lang=str(data.get("lang", defaults.lang)),
            transcode=bool(data.get("transcode", defaults.transcode)),
            compact=bool(data.get("compact", defaults.compact)),
            overwrite=bool(data.get("overwrite", defaults.overwrite)),
            codec=str(data.get("codec", defaults.codec)),
            tes3conv_path=str(data.get("tes3conv_path", defaults.tes3conv_path)),
        )

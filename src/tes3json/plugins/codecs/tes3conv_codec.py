"""Plugin codec backed by the external ``tes3conv`` executable.

tes3conv converts ``.esp``/``.esm`` files to JSON and back. We only ever hand it
file paths; the JSON it produces is read with the stdlib ``json`` module.
"""

import json
import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Dict, List

from tes3json.core.errors import CodecDecodeError, CodecEncodeError, CodecUnavailableError
from tes3json.core.models import ObjectSet
from tes3json.plugins.registry import PluginCodec, PluginRegistry

logger = logging.getLogger(__name__)

ENV_VAR = "TES3CONV"


def find_executable(options: Dict[str, Any]) -> str:
    """Explicit option first, then $TES3CONV, then whatever is on PATH."""
    candidate = options.get("tes3conv_path") or os.environ.get(ENV_VAR) or ""
    if candidate:
        if Path(candidate).is_file():
            return candidate
        found = shutil.which(candidate)
        if found:
            return found
        raise CodecUnavailableError(f"tes3conv executable not found at '{candidate}'")

    found = shutil.which("tes3conv")
    if not found:
        raise CodecUnavailableError(
            "tes3conv executable not found. Put it on PATH, set $TES3CONV, "
            "or pass --tes3conv."
        )
    return found


def _run(cmd: List[str]) -> subprocess.CompletedProcess:
    logger.debug("Running: %s", " ".join(cmd))
    try:
        return subprocess.run(cmd, capture_output=True, text=True, errors="replace", check=False)
    except OSError as exc:
        raise CodecUnavailableError(f"Cannot start '{cmd[0]}': {exc}") from exc


def _describe_failure(proc: subprocess.CompletedProcess) -> str:
    detail = (proc.stderr or proc.stdout or "").strip()
    return f"exit code {proc.returncode}" + (f": {detail}" if detail else "")


class Tes3ConvCodec(PluginCodec):
    @classmethod
    def get_name(cls) -> str:
        return "tes3conv"

    def load(self, path: str, options: Dict[str, Any]) -> ObjectSet:
        exe = find_executable(options)
        if not Path(path).is_file():
            raise CodecDecodeError(f"Plugin file not found: {path}")

        with tempfile.TemporaryDirectory(prefix="tes3json-") as tmp:
            tmp_json = Path(tmp) / f"{Path(path).stem}.json"
            proc = _run([exe, str(path), str(tmp_json)])
            if proc.returncode != 0 or not tmp_json.exists():
                raise CodecDecodeError(f"tes3conv could not read '{path}' ({_describe_failure(proc)})")

            try:
                objects = json.loads(tmp_json.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise CodecDecodeError(f"tes3conv produced unreadable output for '{path}': {exc}") from exc

        if not isinstance(objects, list):
            raise CodecDecodeError(f"tes3conv output for '{path}' is not a list of records")
        logger.debug("Loaded %d records from %s", len(objects), path)
        return objects

    def save(self, path: str, objects: ObjectSet, options: Dict[str, Any]) -> None:
        exe = find_executable(options)

        with tempfile.TemporaryDirectory(prefix="tes3json-") as tmp:
            tmp_json = Path(tmp) / f"{Path(path).stem}.json"
            try:
                tmp_json.write_text(json.dumps(objects, ensure_ascii=False), encoding="utf-8")
            except (TypeError, ValueError) as exc:
                raise CodecEncodeError(f"Cannot serialize records for '{path}': {exc}") from exc

            # The engine has already applied the overwrite policy.
            proc = _run([exe, "--overwrite", str(tmp_json), str(path)])
            if proc.returncode != 0:
                raise CodecEncodeError(f"tes3conv could not write '{path}' ({_describe_failure(proc)})")
        logger.debug("Saved %d records to %s", len(objects), path)


PluginRegistry.register_codec(Tes3ConvCodec)

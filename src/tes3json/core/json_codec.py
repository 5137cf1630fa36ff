import json

from tes3json.core.errors import CodecDecodeError, CodecEncodeError
from tes3json.core.models import ObjectSet


def serialize(objects: ObjectSet, pretty: bool = True) -> str:
    """Dump an object set to JSON text.

    Non-ASCII characters are written as-is so the 1C rewrite can see them.
    """
    try:
        if pretty:
            return json.dumps(objects, ensure_ascii=False, indent=2)
        return json.dumps(objects, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise CodecEncodeError(f"Cannot serialize object set: {e}") from e


def deserialize(text: str) -> ObjectSet:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CodecDecodeError(f"Malformed JSON at line {e.lineno}, column {e.colno}: {e.msg}") from e

    if not isinstance(data, list):
        raise CodecDecodeError(f"Expected a JSON array of records, got {type(data).__name__}")
    return data

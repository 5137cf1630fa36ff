from pathlib import Path

from tes3json.core.models import ConversionDirection


def derive_output_path(input_path: str, direction: ConversionDirection) -> Path:
    """Swap the input's extension for ``.json`` or ``.esp``.

    The original extension does not matter: an ``.esm`` master still comes
    back as ``.esp``.
    """
    return Path(input_path).with_suffix(direction.output_suffix)

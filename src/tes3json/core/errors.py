from pathlib import Path


class PluginConverterError(Exception):
    """Base exception for all converter errors."""
    pass

class OutputExistsError(PluginConverterError):
    """The output file is already there and overwriting was not allowed."""

    def __init__(self, path: Path):
        super().__init__(f"File exists: {path}")
        self.path = path

class ConversionIOError(PluginConverterError):
    pass

class CodecDecodeError(PluginConverterError):
    pass

class CodecEncodeError(PluginConverterError):
    pass

class CodecUnavailableError(PluginConverterError):
    pass

class UnsupportedCodecError(PluginConverterError):
    pass

class SinkError(PluginConverterError):
    pass

class ConversionFailedError(PluginConverterError):
    pass

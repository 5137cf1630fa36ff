import logging
from pathlib import Path
from typing import Optional

from tes3json.core import json_codec
from tes3json.core.errors import (
    CodecDecodeError,
    ConversionFailedError,
    ConversionIOError,
    OutputExistsError,
    PluginConverterError,
    SinkError,
    UnsupportedCodecError,
)
from tes3json.core.models import (
    PROGRESS_DECODED,
    PROGRESS_DONE,
    PROGRESS_FAILED,
    PROGRESS_LOADED,
    ConversionDirection,
    ConversionRequest,
)
from tes3json.core.progress import ProgressSink
from tes3json.core.transcoder import to_legacy, to_native
from tes3json.plugins.registry import PluginCodec, PluginRegistry
from tes3json.utils.paths import derive_output_path

logger = logging.getLogger(__name__)


class _ProgressReporter:
    """Wraps a sink so that only one terminal value is ever sent.

    A sink that stops accepting values is logged once and then ignored; the
    conversion itself carries on.
    """

    def __init__(self, sink: ProgressSink):
        self.sink = sink
        self.finished = False
        self._sink_broken = False

    def progress(self, value: float) -> None:
        if self.finished:
            return
        if value in (PROGRESS_DONE, PROGRESS_FAILED):
            self.finished = True
        if self._sink_broken:
            return
        try:
            self.sink.send(value)
        except SinkError as e:
            self._sink_broken = True
            logger.warning("Progress sink stopped accepting updates: %s", e)

    def fail(self) -> None:
        self.progress(PROGRESS_FAILED)


class CoreEngine:
    """
    Runs one plugin <-> JSON conversion and reports progress to a sink.
    Knows nothing about the binary format, only the order of the stages.
    """

    @staticmethod
    def resolve_codec(name: str) -> PluginCodec:
        CodecCls = PluginRegistry.get_codec(name)
        if not CodecCls:
            raise UnsupportedCodecError(f"No plugin codec registered as '{name}'")
        return CodecCls()

    @staticmethod
    def convert(request: ConversionRequest, sink: ProgressSink, codec: Optional[PluginCodec] = None) -> None:
        """
        Convert `request.input_path` in `request.direction`, next to the input file.
        Sends 33/66/100 to `sink` as stages complete, or -1 and re-raises on failure.
        """
        reporter = _ProgressReporter(sink)
        try:
            output_path = derive_output_path(request.input_path, request.direction)
            if output_path.exists() and not request.overwrite:
                raise OutputExistsError(output_path)

            if codec is None:
                codec = CoreEngine.resolve_codec(request.codec)

            logger.info("Converting %s -> %s", request.input_path, output_path)
            if request.direction is ConversionDirection.TO_TEXT:
                CoreEngine._to_text(request, output_path, codec, reporter)
            else:
                CoreEngine._to_binary(request, output_path, codec, reporter)
        except PluginConverterError as e:
            logger.error("Conversion of %s failed: %s", request.input_path, e)
            reporter.fail()
            raise
        except OSError as e:
            logger.error("Conversion of %s failed: %s", request.input_path, e)
            reporter.fail()
            raise ConversionIOError(str(e)) from e
        except Exception as e:
            logger.exception("Unexpected error while converting %s", request.input_path)
            reporter.fail()
            raise ConversionFailedError(f"Conversion failed: {e}") from e

    @staticmethod
    def _to_text(request: ConversionRequest, output_path: Path, codec: PluginCodec, reporter: _ProgressReporter) -> None:
        objects = codec.load(request.input_path, request.codec_options)
        reporter.progress(PROGRESS_LOADED)

        text = json_codec.serialize(objects, pretty=not request.compact)
        if request.transcode:
            text = to_legacy(text)

        output_path.write_text(text, encoding="utf-8", newline="\n")
        reporter.progress(PROGRESS_DONE)

    @staticmethod
    def _to_binary(request: ConversionRequest, output_path: Path, codec: PluginCodec, reporter: _ProgressReporter) -> None:
        try:
            text = Path(request.input_path).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CodecDecodeError(f"{request.input_path} is not UTF-8 text: {e}") from e
        reporter.progress(PROGRESS_LOADED)

        if request.transcode:
            text = to_native(text)

        objects = json_codec.deserialize(text)
        reporter.progress(PROGRESS_DECODED)

        codec.save(str(output_path), objects, request.codec_options)
        reporter.progress(PROGRESS_DONE)

import logging
import threading
from typing import Optional

from tes3json.core.engine import CoreEngine
from tes3json.core.errors import PluginConverterError
from tes3json.core.models import ConversionRequest
from tes3json.core.progress import ProgressSink
from tes3json.plugins.registry import PluginCodec

logger = logging.getLogger(__name__)


class ConversionJob:
    """A single conversion running on its own daemon thread.

    The caller keeps the sink's other end and reads progress from it; the
    error, if any, is kept on the job once the thread is done.
    """

    def __init__(self, request: ConversionRequest, sink: ProgressSink, codec: Optional[PluginCodec] = None):
        self.request = request
        self.sink = sink
        self.codec = codec
        self.error: Optional[PluginConverterError] = None
        self._thread = threading.Thread(target=self._run, daemon=True)

    def _run(self) -> None:
        try:
            CoreEngine.convert(self.request, self.sink, self.codec)
        except PluginConverterError as e:
            # Already reported to the sink as -1.
            self.error = e

    def start(self) -> "ConversionJob":
        self._thread.start()
        return self

    def join(self, timeout: Optional[float] = None) -> None:
        self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread.is_alive()


def start_conversion(request: ConversionRequest, sink: ProgressSink, codec: Optional[PluginCodec] = None) -> ConversionJob:
    logger.debug("Starting background conversion of %s", request.input_path)
    return ConversionJob(request, sink, codec).start()

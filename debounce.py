import logging
import time

from schema_errors import MalformedJsonError
from schema_io import parse_json

logger = logging.getLogger(__name__)


class Debouncer:
    """Coalesce rapid calls into one trailing call.

    The pending callback runs once ``wait`` seconds pass without a new call,
    or ``max_wait`` seconds after the first call that is still pending.
    Nothing runs on its own: the owner calls ``poll`` from its event loop.
    """

    def __init__(self, wait=0.3, max_wait=1.0, clock=time.monotonic):
        if max_wait < wait:
            raise ValueError("max_wait must not be shorter than wait.")
        self.wait = wait
        self.max_wait = max_wait
        self.clock = clock
        self._callback = None
        self._first_call = None
        self._last_call = None

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def call(self, callback):
        if not callable(callback):
            raise TypeError("Provided argument is not a function.")
        now = self.clock()
        if self._callback is None:
            self._first_call = now
        self._callback = callback
        self._last_call = now

    def due(self) -> bool:
        if self._callback is None:
            return False
        now = self.clock()
        return (now - self._last_call >= self.wait
                or now - self._first_call >= self.max_wait)

    def poll(self) -> bool:
        if not self.due():
            return False
        self.flush()
        return True

    def flush(self):
        callback = self._callback
        self.cancel()
        if callback is not None:
            callback()

    def cancel(self):
        self._callback = None
        self._first_call = None
        self._last_call = None


class JsonTextBuffer:
    """Free-form JSON text whose parsed value is published after typing settles."""

    def __init__(self, on_value, debouncer=None):
        self.on_value = on_value
        self.debouncer = debouncer if debouncer is not None else Debouncer()
        self.text = ""
        self.value = None
        self.has_value = False

    def feed(self, text):
        self.text = text
        self.debouncer.call(self._parse)

    def poll(self) -> bool:
        return self.debouncer.poll()

    def flush(self):
        self.debouncer.flush()

    def _parse(self):
        try:
            value = parse_json(self.text)
        except MalformedJsonError as e:
            # keep the last good value until the text parses again
            logger.debug("Discarded unparsable text: %s", e)
            return
        self.value = value
        self.has_value = True
        self.on_value(value)

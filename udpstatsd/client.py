import os
import socket

from numbers import Number
from threading import Lock, Thread

from .encoding import COUNTER, GAUGE, HISTOGRAM, SET, TIMING, encode
from .logging import get_logger
from .transport import UDPTransport


DEFAULT_HOST = os.getenv("STATSD_HOST", "localhost")
DEFAULT_PORT = int(os.getenv("STATSD_PORT", "8125"))

_global_client = None


def get_global_client():
    """Get the client that was most recently created with ``globalize=True``.

    Returns:
      Client or None
    """
    return _global_client


class Client:
    """A UDP client for StatsD.

    Every stat-sending method accepts either a single stat name or a
    list of names that all share the same value, sample rate and tags.
    The optional ``callback`` is called exactly once per call with
    ``(error, bytes_sent)``.

    Examples:

      >>> statsd = Client(prefix="myapp.", global_tags=["env:prod"])
      >>> statsd.increment("requests")
      >>> statsd.timing(["db.query", "db.any"], 12, 0.25, ["table:users"])
      >>> statsd.close()

    Parameters:
      host(str): The host the daemon listens on.
      port(int): The port the daemon listens on.
      prefix(str): Prepended to every stat name.
      suffix(str): Appended to every stat name.
      globalize(bool): Whether or not to expose this client via :func:`get_global_client`.
      cache_dns(bool): Whether or not to resolve ``host`` once, in the background.
      mock(bool): When true, nothing is ever sent.
      global_tags(list[str]): Tags added to every stat.
      transport(UDPTransport): An optional, already-started transport to send through.
    """

    def __init__(
            self, *, host=DEFAULT_HOST, port=DEFAULT_PORT, prefix="", suffix="",
            globalize=False, cache_dns=False, mock=False, global_tags=None, transport=None,
    ):
        self.logger = get_logger(__name__, type(self))
        self.host = host
        self.port = port
        self.prefix = prefix
        self.suffix = suffix
        self.mock = mock is True
        self.global_tags = global_tags

        if transport is None:
            transport = UDPTransport()
            transport.start()
        self.transport = transport

        self.dns_thread = None
        if cache_dns is True:
            self.dns_thread = Thread(target=self._cache_dns, daemon=True)
            self.dns_thread.start()

        if globalize:
            global _global_client
            _global_client = self

    def timing(self, stat, time, sample_rate=None, tags=None, callback=None):
        """Send a timing stat.

        Parameters:
          stat(str or list[str]): The stat(s) to send.
          time(int or float): The time in milliseconds.
          sample_rate(float): An optional rate in (0, 1].
          tags(list[str]): Optional tags.
          callback(callable): An optional ``(error, bytes_sent)`` handler.
        """
        self.send_all(stat, time, TIMING, sample_rate, tags, callback)

    def increment(self, stat, value=1, sample_rate=None, tags=None, callback=None):
        """Increment a counter by ``value``.
        """
        self.send_all(stat, value, COUNTER, sample_rate, tags, callback)

    def decrement(self, stat, value=1, sample_rate=None, tags=None, callback=None):
        """Decrement a counter by ``value``.

        Non-numeric values, like ``"5"``, are negated textually.
        """
        self.send_all(stat, negate(value), COUNTER, sample_rate, tags, callback)

    def histogram(self, stat, value, sample_rate=None, tags=None, callback=None):
        self.send_all(stat, value, HISTOGRAM, sample_rate, tags, callback)

    def gauge(self, stat, value, sample_rate=None, tags=None, callback=None):
        self.send_all(stat, value, GAUGE, sample_rate, tags, callback)

    def unique(self, stat, value, sample_rate=None, tags=None, callback=None):
        """Count unique occurrences of ``value``.
        """
        self.send_all(stat, value, SET, sample_rate, tags, callback)

    set = unique

    def send_all(self, stat, value, kind, sample_rate=None, tags=None, callback=None):
        """Send one or many stats, calling back once all of them have been sent.

        Trailing optional arguments may be passed positionally without
        the ones before them: a non-numeric ``sample_rate`` is treated
        as ``tags`` and anything other than a list in place of ``tags``
        is treated as the ``callback``.

        Parameters:
          stat(str or list[str]): The stat(s) to send.
          value(object): The value to send.
          kind(str): The type tag of the stat.
          sample_rate(float): An optional rate in (0, 1].
          tags(list[str]): Optional tags.
          callback(callable): An optional ``(error, bytes_sent)`` handler.
        """
        sample_rate, tags, callback = normalize_arguments(sample_rate, tags, callback)
        if not isinstance(stat, (list, tuple)):
            self.send(stat, value, kind, sample_rate, tags, callback)
            return

        fan_out = FanOut(len(stat), callback)
        for item in stat:
            if not self.send(item, value, kind, sample_rate, tags, fan_out.on_send):
                fan_out.on_send(None, 0)

    def send(self, stat, value, kind, sample_rate=None, tags=None, callback=None):
        """Send a single stat across the wire.

        Returns:
          bool: ``False`` if sampling dropped the stat, in which case
          ``callback`` is never called.
        """
        message = encode(
            stat, value, kind, sample_rate, tags,
            global_tags=self.global_tags, prefix=self.prefix, suffix=self.suffix,
        )
        if message is None:
            return False

        if self.mock:
            if callable(callback):
                callback(None, 0)
            return True

        if not callable(callback):
            callback = None
        self.transport.transmit(message.encode("utf-8", "surrogatepass"), self.host, self.port, callback)
        return True

    def close(self):
        """Close the underlying socket.  The client must not be used afterwards.
        """
        self.transport.close()

    def _cache_dns(self):
        try:
            self.host = socket.gethostbyname(self.host)
            self.logger.debug("Resolved stats host to %r.", self.host)
        except OSError as e:
            self.logger.warning("Failed to resolve stats host %r: %s", self.host, e)


#: An alias for compatibility with other StatsD clients.
StatsD = Client


class FanOut:
    """Aggregates the outcomes of sending ``legs`` stats into one callback.

    The first error wins.  Otherwise the callback receives the total
    number of bytes sent once every leg has completed.
    """

    def __init__(self, legs, callback):
        self.legs = legs
        self.callback = callback if callable(callback) else None
        self.completed = 0
        self.sent_bytes = 0
        self.called_back = False
        self.lock = Lock()

        if legs == 0 and self.callback is not None:
            self.called_back = True
            self.callback(None, 0)

    def on_send(self, error, sent):
        with self.lock:
            self.completed += 1
            if self.called_back or self.callback is None:
                return

            if error is None:
                self.sent_bytes += sent
                if self.completed < self.legs:
                    return

            self.called_back = True

        if error is not None:
            self.callback(error, None)
        else:
            self.callback(None, self.sent_bytes)


def normalize_arguments(sample_rate, tags, callback):
    """Re-home trailing optional arguments based on their types.

    Returns:
      tuple: ``(sample_rate, tags, callback)``
    """
    if sample_rate is not None and (isinstance(sample_rate, bool) or not isinstance(sample_rate, Number)):
        sample_rate, tags, callback = None, sample_rate, tags

    if tags is not None and not isinstance(tags, (list, tuple)):
        tags, callback = None, tags

    return sample_rate, tags, callback


def negate(value):
    """Negate a counter delta.

    Returns:
      The negated number or, for anything else, its string form with
      the leading minus sign flipped.
    """
    if isinstance(value, Number) and not isinstance(value, bool):
        return -value

    value = str(value)
    if value.startswith("-"):
        return value[1:]
    return "-" + value

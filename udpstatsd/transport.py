import socket

from queue import Empty, Queue
from threading import Thread

from .logging import get_logger


class UDPTransport:
    """Sends datagrams from a background thread.

    Every call to :meth:`transmit` is queued and its ``on_complete``
    handler is invoked exactly once, from the sender thread, with
    either ``(error, None)`` or ``(None, bytes_sent)``.  Handlers for
    separate datagrams may run in any order relative to the calls
    that queued them.
    """

    def __init__(self, family=socket.AF_INET):
        self.logger = get_logger(__name__, type(self))
        self.sock = socket.socket(family, socket.SOCK_DGRAM)

        self.queue = Queue()
        self.running = False
        self.thread = None

    def transmit(self, data, host, port, on_complete=None):
        """Queue a datagram for sending.

        Parameters:
          data(bytes)
          host(str)
          port(int)
          on_complete(callable): An optional ``(error, bytes_sent)`` handler.
        """
        self.queue.put((data, (host, port), on_complete))

    def start(self):
        self.logger.debug("Starting sender thread.")
        self.running = True
        self.thread = Thread(target=self._run, daemon=True)
        self.thread.start()

    def close(self, block=True):
        """Stop the sender thread and close the socket.

        Parameters:
          block(bool): Whether or not to wait for queued datagrams to go out first.
        """
        self.logger.debug("Stopping UDP transport...")
        if block and self.running:
            self.logger.debug("Waiting for send queue to be drained...")
            self.queue.join()

        self.running = False
        if self.thread is not None:
            self.thread.join()

        self.logger.debug("Closing client socket...")
        self.sock.close()
        self.logger.debug("UDP transport stopped.")

    def _run(self):
        while self.running:
            try:
                data, address, on_complete = self.queue.get(timeout=1)
            except Empty:
                continue

            try:
                self._send(data, address, on_complete)
            except Exception:
                self.logger.exception("Completion handler for datagram to %r failed.", address)
            finally:
                self.queue.task_done()

    def _send(self, data, address, on_complete):
        try:
            sent = self.sock.sendto(data, address)
        except OSError as e:
            if on_complete is not None:
                on_complete(e, None)
            return

        if on_complete is not None:
            on_complete(None, sent)

import socket

from threading import Event

import pytest

from udpstatsd import Client, client as client_module


class UDPServer:
    def __init__(self):
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.bind(("127.0.0.1", 0))
        self.sock.settimeout(2)
        self.host, self.port = self.sock.getsockname()

    def recv(self):
        data, _ = self.sock.recvfrom(65536)
        return data.decode("utf-8")

    def recv_many(self, n):
        return [self.recv() for _ in range(n)]

    def close(self):
        self.sock.close()


class Result:
    """Records the arguments of every call to a completion handler.
    """

    def __init__(self):
        self.calls = []
        self.done = Event()

    def __call__(self, error, sent):
        self.calls.append((error, sent))
        self.done.set()

    def wait(self, timeout=2):
        assert self.done.wait(timeout), "callback was never called"
        return self.calls[0]


@pytest.fixture
def server():
    server = UDPServer()
    yield server
    server.close()


@pytest.fixture
def make_client(server):
    clients = []

    def make_client(**options):
        options.setdefault("host", server.host)
        options.setdefault("port", server.port)
        client = Client(**options)
        clients.append(client)
        return client

    yield make_client
    for client in clients:
        client.close()


@pytest.fixture
def result():
    return Result()


@pytest.fixture(autouse=True)
def reset_global_client():
    yield
    client_module._global_client = None


@pytest.fixture
def fixed_random(monkeypatch):
    from udpstatsd import encoding

    monkeypatch.setattr(encoding, "random", lambda: 0.42)

from .client import Client, FanOut, StatsD, get_global_client, normalize_arguments
from .encoding import COUNTER, GAUGE, HISTOGRAM, SET, TIMING, encode
from .transport import UDPTransport

__all__ = [
    "Client", "StatsD", "FanOut", "UDPTransport",
    "encode", "normalize_arguments", "get_global_client",
    "TIMING", "COUNTER", "HISTOGRAM", "GAUGE", "SET",
]

__version__ = "0.1.0"

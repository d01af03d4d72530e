import logging
import random
import time

from threading import Event

from udpstatsd import Client


def main():
    logfmt = "[%(asctime)s] [PID %(process)d] [%(threadName)s] [%(name)s] [%(levelname)s] %(message)s"
    logging.basicConfig(level=logging.DEBUG, format=logfmt)

    statsd = Client(prefix="example.", global_tags=["env:dev"], cache_dns=True)

    # Given that I handle some requests
    for _ in range(100):
        started_at = time.monotonic()
        time.sleep(random.random() / 100)
        statsd.increment("requests_total", sample_rate=0.5)
        statsd.timing("request_duration", int((time.monotonic() - started_at) * 1000))

    # And I want to know when a batch of stats has gone out
    done = Event()

    def on_sent(error, sent):
        if error is not None:
            logging.error("Failed to send stats: %s", error)
        else:
            logging.info("Sent %d bytes.", sent)
        done.set()

    statsd.gauge(["workers.busy", "workers.total"], 4, tags=["pool:default"], callback=on_sent)
    done.wait(timeout=5)
    statsd.close()


if __name__ == "__main__":
    main()

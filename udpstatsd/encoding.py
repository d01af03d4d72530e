from random import random

#: The type tags understood by the daemon.
TIMING = "ms"
COUNTER = "c"
HISTOGRAM = "h"
GAUGE = "g"
SET = "s"


def encode(stat, value, kind, sample_rate=None, tags=None, *, global_tags=None, prefix="", suffix=""):
    """Encode a single stat so that it can be sent over the wire.

    Names, values and tags are not escaped.  Any ``:``, ``|`` or ``,``
    inside of them ends up in the datagram as-is.

    Examples:

      >>> encode("test", 42, "c", tags=["foo", "bar"], global_tags=["gtag"])
      'test:42|c|#foo,bar,gtag'

    Parameters:
      stat(str): The name of the stat.
      value(object): The value to send.  Stringified with ``str``.
      kind(str): One of the type tags (ms, c, h, g or s).
      sample_rate(float): An optional rate in (0, 1].
      tags(list[str]): Optional tags for this stat only.
      global_tags(list[str]): Optional tags to append after ``tags``.
      prefix(str)
      suffix(str)

    Returns:
      str: The encoded message or ``None`` if sampling dropped it.
    """
    message = f"{prefix}{stat}{suffix}:{value}|{kind}"
    if sample_rate and sample_rate < 1:
        if random() >= sample_rate:
            return None

        message = f"{message}|@{sample_rate}"

    merged_tags = []
    if isinstance(tags, (list, tuple)):
        merged_tags.extend(tags)
    if isinstance(global_tags, (list, tuple)):
        merged_tags.extend(global_tags)
    if merged_tags:
        message = f"{message}|#{','.join(map(str, merged_tags))}"

    return message

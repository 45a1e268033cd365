from types import SimpleNamespace

import numpy as np


def calc_duration(*args: SimpleNamespace) -> float:
    """
    Calculate the duration of an event or block.
    The duration of an event is the time taken by the actual event itself plus its delay.
    If multiple events are provided, the calculated duration is for a block
    comprised of these events, which is given by the maximum duration of the events.

    Parameters
    ----------
    args : SimpleNamespace
        Events. `None` entries are skipped.

    Returns
    -------
    duration : float
        Maximum duration of `args`.

    Raises
    ------
    TypeError
        If an input is not an event.
    """
    duration = 0
    for event in args:
        if event is None:
            continue

        if not isinstance(event, SimpleNamespace):
            raise TypeError("input(s) should be of type SimpleNamespace")

        if event.type == "delay":
            duration = max(duration, event.delay)
        elif event.type == "rf":
            duration = max(duration, event.delay + np.sum(event.duration))
        elif event.type == "grad":
            duration = max(
                duration,
                event.delay + event.rise_time + np.sum(event.duration) + event.fall_time,
            )
        elif event.type == "adc":
            duration = max(duration, event.delay + event.duration)

    return float(duration)

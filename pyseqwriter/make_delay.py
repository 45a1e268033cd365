from types import SimpleNamespace

from pyseqwriter.check_timings import check_timings


def make_delay(d: float) -> SimpleNamespace:
    """
    Creates a delay event. A delay occupies no channel; it only sets the minimum duration of the block it is added to.

    Parameters
    ----------
    d : float
        Delay time in seconds (s).

    Returns
    -------
    delay : SimpleNamespace
        Delay event.

    Raises
    ------
    ValueError
        If `d` is negative or not finite.
    """
    check_timings("Delay", d)

    delay = SimpleNamespace()
    delay.type = "delay"
    delay.delay = d

    return delay

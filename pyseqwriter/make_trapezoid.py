from types import SimpleNamespace

from pyseqwriter.check_timings import check_timings


def make_trapezoid(
    channel: str,
    amplitude: float,
    flat_time: float,
    rise_time: float,
    fall_time: float = None,
    delay: float = 0,
) -> SimpleNamespace:
    """
    Creates a trapezoidal gradient event.

    Parameters
    ----------
    channel : str
        Orientation of trapezoidal gradient event. Must be one of `x`, `y` or `z`.
    amplitude : float
        Flat-top amplitude in T/m.
    flat_time : float
        Flat-top time in seconds (s).
    rise_time : float
        Rise time in seconds (s).
    fall_time : float, default=None
        Fall time in seconds (s). Defaults to `rise_time`.
    delay : float, default=0
        Delay in seconds (s).

    Returns
    -------
    grad : SimpleNamespace
        Trapezoidal gradient event.

    Raises
    ------
    ValueError
        If invalid `channel` is passed. Must be one of x, y or z.
        If a timing is negative.
    """
    if channel not in ["x", "y", "z"]:
        raise ValueError(f"Invalid channel. Must be one of `x`, `y` or `z`. Passed: {channel}")

    if fall_time is None:
        fall_time = rise_time
    check_timings("Gradient", flat_time, rise_time, fall_time, delay)

    grad = SimpleNamespace()
    grad.type = "grad"
    grad.channel = channel
    grad.amplitude = float(amplitude)
    grad.duration = flat_time
    grad.rise_time = rise_time
    grad.fall_time = fall_time
    grad.delay = delay

    return grad

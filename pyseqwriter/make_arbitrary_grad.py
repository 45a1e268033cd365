from types import SimpleNamespace
from typing import Union

import numpy as np

from pyseqwriter.check_timings import check_timings


def make_arbitrary_grad(
    channel: str,
    waveform: np.ndarray,
    duration: Union[float, np.ndarray],
    delay: float = 0,
    rise_time: float = 0,
    fall_time: float = 0,
) -> SimpleNamespace:
    """
    Creates a gradient event from an arbitrary waveform.

    As for `make_arbitrary_rf`, `duration` is either the total duration of the waveform (samples on the gradient
    raster) or the array of intervals between consecutive samples.

    Parameters
    ----------
    channel : str
        Orientation of gradient event of arbitrary shape. Must be one of `x`, `y` or `z`.
    waveform : numpy.ndarray
        Arbitrary waveform in T/m.
    duration : float or numpy.ndarray
        Total duration or sample intervals in seconds (s).
    delay : float, default=0
        Delay in seconds (s).
    rise_time : float, default=0
        Ramp-up time before the first sample in seconds (s).
    fall_time : float, default=0
        Ramp-down time after the last sample in seconds (s).

    Returns
    -------
    grad : SimpleNamespace
        Gradient event with arbitrary waveform.

    Raises
    ------
    ValueError
        If invalid `channel` is passed. Must be one of x, y or z.
        If a timing is negative.
        If the sample intervals do not match the number of samples.
    """
    if channel not in ["x", "y", "z"]:
        raise ValueError(f"Invalid channel. Must be one of `x`, `y` or `z`. Passed: {channel}")

    waveform = np.atleast_1d(np.asarray(waveform, dtype=float))
    check_timings("Gradient", duration, delay, rise_time, fall_time)

    if np.ndim(duration) > 0:
        duration = np.asarray(duration, dtype=float)
        if len(duration) != len(waveform) - 1:
            raise ValueError(
                f"Expected {len(waveform) - 1} sample intervals for {len(waveform)} samples. Passed: {len(duration)}"
            )

    grad = SimpleNamespace()
    grad.type = "grad"
    grad.channel = channel
    grad.amplitude = waveform
    grad.duration = duration
    grad.rise_time = rise_time
    grad.fall_time = fall_time
    grad.delay = delay

    return grad

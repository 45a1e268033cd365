from types import SimpleNamespace

import numpy as np

from pyseqwriter.check_timings import check_timings


def make_block_pulse(
    amplitude: float,
    duration: float,
    delay: float = 0,
    freq_offset: float = 0,
    phase_offset: float = 0,
) -> SimpleNamespace:
    """
    Creates a radio-frequency block pulse event, a single complex sample held for `duration`.

    Parameters
    ----------
    amplitude : float
        B1 amplitude in Tesla (T).
    duration : float
        Duration in seconds (s).
    delay : float, default=0
        Delay in seconds (s).
    freq_offset : float, default=0
        Frequency offset in Hertz (Hz).
    phase_offset : float, default=0
        Phase offset in radians (rad), applied to the complex sample.

    Returns
    -------
    rf : SimpleNamespace
        Radio-frequency block pulse event.

    Raises
    ------
    ValueError
        If `duration` or `delay` is negative.
    """
    check_timings("RF", duration, delay)

    rf = SimpleNamespace()
    rf.type = "rf"
    rf.signal = complex(amplitude * np.exp(1j * phase_offset))
    rf.duration = duration
    rf.delay = delay
    rf.freq_offset = freq_offset

    return rf

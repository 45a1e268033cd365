from types import SimpleNamespace
from typing import Union

import numpy as np

from pyseqwriter.check_timings import check_timings


def make_arbitrary_rf(
    signal: np.ndarray,
    duration: Union[float, np.ndarray],
    delay: float = 0,
    freq_offset: float = 0,
    phase_offset: float = 0,
) -> SimpleNamespace:
    """
    Creates a radio-frequency pulse event with an arbitrary complex waveform.

    `duration` is either the total pulse duration, in which case the samples are played on the RF raster, or the
    array of intervals between consecutive samples (length `len(signal) - 1`), in which case the pulse carries an
    explicit time shape.

    Parameters
    ----------
    signal : numpy.ndarray
        Complex B1 waveform in Tesla (T).
    duration : float or numpy.ndarray
        Total duration or sample intervals in seconds (s).
    delay : float, default=0
        Delay in seconds (s).
    freq_offset : float, default=0
        Frequency offset in Hertz (Hz).
    phase_offset : float, default=0
        Phase offset in radians (rad), applied to every sample.

    Returns
    -------
    rf : SimpleNamespace
        Radio-frequency pulse event.

    Raises
    ------
    ValueError
        If a timing is negative.
        If the sample intervals do not match the number of samples.
    """
    signal = np.atleast_1d(np.asarray(signal, dtype=complex))
    check_timings("RF", duration, delay)

    if np.ndim(duration) > 0:
        duration = np.asarray(duration, dtype=float)
        if len(duration) != len(signal) - 1:
            raise ValueError(
                f"Expected {len(signal) - 1} sample intervals for {len(signal)} samples. Passed: {len(duration)}"
            )

    rf = SimpleNamespace()
    rf.type = "rf"
    rf.signal = signal * np.exp(1j * phase_offset)
    rf.duration = duration
    rf.delay = delay
    rf.freq_offset = freq_offset

    return rf

from types import SimpleNamespace

from pyseqwriter.check_timings import check_timings


def make_adc(
    num_samples: int,
    duration: float,
    delay: float = 0,
    freq_offset: float = 0,
    phase_offset: float = 0,
) -> SimpleNamespace:
    """
    Create an ADC readout event.

    Parameters
    ----------
    num_samples: int
        Number of readout samples.
    duration : float
        Time in seconds (s) from the first to the last sample.
    delay : float, default=0
        Delay in seconds (s) of the first sample.
    freq_offset : float, default=0
        Frequency offset of ADC readout event.
    phase_offset : float, default=0
        Phase offset of ADC readout event.

    Returns
    -------
    adc : SimpleNamespace
        ADC readout event.

    Raises
    ------
    ValueError
        If `num_samples` is negative or a timing is negative.
    """
    if num_samples < 0:
        raise ValueError(f"Number of samples must be non-negative. Passed: {num_samples}")
    check_timings("ADC", duration, delay)

    adc = SimpleNamespace()
    adc.type = "adc"
    adc.num_samples = int(num_samples)
    adc.duration = duration
    adc.delay = delay
    adc.freq_offset = freq_offset
    adc.phase_offset = phase_offset

    return adc

import numpy as np


def check_timings(name: str, *timings) -> None:
    """
    Raise if any of `timings` (scalars or arrays, in seconds) is negative or not finite.

    Parameters
    ----------
    name : str
        Event name used in the error message.
    timings : float or numpy.ndarray
        Durations and delays of the event.

    Raises
    ------
    ValueError
        If a timing is negative or not finite.
    """
    for t in timings:
        t = np.asarray(t, dtype=float)
        if np.any(~np.isfinite(t)) or np.any(t < 0):
            raise ValueError(f"{name} timings must be non-negative and finite.")

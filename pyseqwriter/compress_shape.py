from types import SimpleNamespace

import numpy as np

# Quantization step of the derivative; single precision floating point has ~7.25 decimal places
quant_factor = 1e-7


def compress_shape(samples: np.ndarray, force_compression: bool = False) -> SimpleNamespace:
    """
    Compress a gradient or pulse shape using a run-length encoding of its quantized derivative. Constant and linear
    segments collapse to three values: the derivative twice, then the number of further repetitions.

    The encoding is kept only if it stores fewer values than the shape itself; shapes of four samples or fewer are
    never compressed. `num_samples` is always the length of the uncompressed shape.

    See also `pyseqwriter.decompress_shape.py`.

    Parameters
    ----------
    samples : numpy.ndarray
        Uncompressed shape.
    force_compression: bool, default=False
        Keep the encoding even if it is not shorter than `samples`.

    Returns
    -------
    compressed_shape : SimpleNamespace
        A `SimpleNamespace` object with fields `num_samples` and `data`.

    Raises
    ------
    ValueError
        If `samples` contains infinite or NaN values.
    """
    samples = np.asarray(samples, dtype=float)
    if np.any(~np.isfinite(samples)):
        raise ValueError("compress_shape() received infinite samples.")

    compressed_shape = SimpleNamespace()
    compressed_shape.num_samples = len(samples)
    compressed_shape.data = samples

    if not force_compression and len(samples) <= 4:
        return compressed_shape

    # Quantized derivative, corrected so that its cumulative sum tracks the scaled shape
    scaled = samples / quant_factor
    derivative = np.round(np.concatenate((scaled[:1], np.diff(scaled))))
    residual = scaled - np.cumsum(derivative)
    derivative += np.concatenate(([0], np.diff(np.round(residual))))

    run_starts = np.concatenate(([0], np.flatnonzero(derivative[1:] != derivative[:-1]) + 1))
    run_lengths = np.diff(np.concatenate((run_starts, [len(derivative)])))
    run_values = derivative[run_starts] * quant_factor

    # Runs longer than one sample are stored as (value, value, length - 2)
    is_run = run_lengths > 1
    encoded = np.repeat(run_values, np.where(is_run, 3, 1))
    length_positions = np.cumsum(np.where(is_run, 3, 1)) - 1
    encoded[length_positions[is_run]] = run_lengths[is_run] - 2

    if force_compression or len(encoded) < len(samples):
        compressed_shape.data = encoded

    return compressed_shape

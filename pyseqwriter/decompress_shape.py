from types import SimpleNamespace

import numpy as np


def decompress_shape(compressed_shape: SimpleNamespace, force_decompression: bool = True) -> np.ndarray:
    """
    Decompresses a run-length encoded shape.

    A shape written without compression stores exactly `num_samples` values, but a forced compression can produce an
    encoding of the same length. The data is therefore decoded unless `force_decompression` is False, in which case
    data of length `num_samples` is returned as stored.

    Parameters
    ----------
    compressed_shape : SimpleNamespace
        Shape with fields `num_samples` and `data`, as returned by `compress_shape()`.
    force_decompression : bool, default=True
        Decode the data even if it has `num_samples` values.

    Returns
    -------
    decompressed_shape : numpy.ndarray
        Decompressed shape.
    """
    data_pack, num_samples = np.asarray(compressed_shape.data, dtype=float), int(compressed_shape.num_samples)
    if not force_decompression and len(data_pack) == num_samples:
        return data_pack

    derivative = np.zeros(num_samples)
    count_pack, count_unpack = 0, 0
    while count_pack < len(data_pack) - 1:
        if data_pack[count_pack] != data_pack[count_pack + 1]:
            derivative[count_unpack] = data_pack[count_pack]
            count_unpack += 1
            count_pack += 1
        else:
            rep = int(data_pack[count_pack + 2] + 2)
            derivative[count_unpack : count_unpack + rep] = data_pack[count_pack]
            count_pack += 3
            count_unpack += rep

    if count_pack == len(data_pack) - 1:
        derivative[count_unpack] = data_pack[count_pack]

    return np.cumsum(derivative)

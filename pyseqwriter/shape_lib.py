import math
from types import SimpleNamespace
from typing import Iterator, List, Tuple, Union

import numpy as np

from pyseqwriter.event_lib import rtol, safe_approx


def magnitude_shape(signal: np.ndarray) -> np.ndarray:
    """
    Magnitude of `signal` normalized to a maximum of 1.

    Raises
    ------
    ValueError
        If `signal` is zero everywhere.
    """
    magnitude = np.abs(np.atleast_1d(signal))
    max_magnitude = np.max(magnitude)
    if max_magnitude == 0:
        raise ValueError("Cannot normalize a shape whose amplitude is zero everywhere.")
    return magnitude / max_magnitude


def amplitude_shape(waveform: np.ndarray) -> np.ndarray:
    """
    Signed `waveform` normalized to a maximum absolute value of 1.

    Raises
    ------
    ValueError
        If `waveform` is zero everywhere.
    """
    waveform = np.atleast_1d(waveform)
    max_magnitude = np.max(np.abs(waveform))
    if max_magnitude == 0:
        raise ValueError("Cannot normalize a shape whose amplitude is zero everywhere.")
    return waveform / max_magnitude


def phase_shape(signal: np.ndarray) -> np.ndarray:
    """
    Phase of `signal` in full turns, wrapped to [0, 1).
    """
    return np.mod(np.angle(np.atleast_1d(signal)), 2 * np.pi) / (2 * np.pi)


def time_shape(duration: Union[float, np.ndarray], raster_time: float) -> Union[np.ndarray, None]:
    """
    Sample times in units of `raster_time`, starting at 0, from the intervals between samples. Returns `None` when
    `duration` is a scalar, i.e. the samples are played on the raster.
    """
    if np.ndim(duration) == 0:
        return None
    return np.cumsum(np.concatenate(([0], duration))) / raster_time


def isequal_angles(a: np.ndarray, b: np.ndarray) -> bool:
    """
    Returns whether two phase shapes (in full turns) differ by a constant at every sample.
    """
    if len(a) != len(b):
        return False
    r = np.abs(np.sum(np.exp(2j * np.pi * a) * np.exp(-2j * np.pi * b))) / len(a)
    return math.isclose(r, 1, rel_tol=rtol)


def angle_offset(a: np.ndarray, b: np.ndarray) -> float:
    """
    Phase (rad) that added to phase shape `b` gives phase shape `a`.
    """
    return float(np.angle(np.sum(np.exp(2j * np.pi * a) * np.exp(-2j * np.pi * b)) / len(a)))


class ShapeLibrary:
    """
    Append-only list of unique shapes. Shapes are compared with `safe_approx()`; IDs are taken from a counter that
    is owned by the caller and shared with other shape libraries.

    Attributes
    ----------
    keys : list[int]
        Shape IDs, in insertion order.
    data : list[numpy.ndarray]
        Unique shapes, aligned with `keys`.
    """

    def __init__(self):
        self.keys = []
        self.data = []

    def __len__(self) -> int:
        return len(self.keys)

    def __iter__(self) -> Iterator[Tuple[np.ndarray, int]]:
        return iter(zip(self.data, self.keys))

    def match(self, shape: np.ndarray, unique_shape: np.ndarray) -> bool:
        return safe_approx(shape, unique_shape)

    def find(self, shape: np.ndarray) -> int:
        """
        Returns the ID of the first shape in the library that matches `shape`, or 0.
        """
        for unique_shape, key_id in self:
            if self.match(shape, unique_shape):
                return key_id
        return 0

    def find_or_insert(self, shape: np.ndarray, id_shape_cnt: int) -> Tuple[int, int]:
        """
        Lookup `shape` and insert it with ID `id_shape_cnt` if it is not in the library yet.

        Parameters
        ----------
        shape : numpy.ndarray
            Canonical shape.
        id_shape_cnt : int
            Next free shape ID.

        Returns
        -------
        key_id : int
            ID of `shape`.
        id_shape_cnt : int
            Next free shape ID after the lookup.
        """
        key_id = self.find(shape)
        if key_id == 0:
            key_id = id_shape_cnt
            self.keys.append(key_id)
            self.data.append(shape)
            id_shape_cnt += 1
        return key_id, id_shape_cnt

    def get(self, shape: np.ndarray) -> int:
        """
        Returns the ID of `shape`.

        Raises
        ------
        RuntimeError
            If `shape` is not in the library.
        """
        key_id = self.find(shape)
        if key_id == 0:
            raise RuntimeError("Shape is not registered in the shape library.")
        return key_id


class PhaseShapeLibrary(ShapeLibrary):
    """
    Shape library for phase shapes. Two phase shapes match if they differ by a constant phase, so the stored shape
    of the first occurrence is reused and the difference is kept as a per-event phase offset.
    """

    def match(self, shape: np.ndarray, unique_shape: np.ndarray) -> bool:
        return isequal_angles(shape - shape[0], unique_shape - unique_shape[0])

    def get_with_offset(self, shape: np.ndarray) -> Tuple[int, float]:
        """
        Returns the ID of phase shape `shape` and the phase (rad) to add to the stored shape to recover `shape`.

        Raises
        ------
        RuntimeError
            If `shape` is not in the library.
        """
        for unique_shape, key_id in self:
            if self.match(shape, unique_shape):
                return key_id, angle_offset(shape, unique_shape)
        raise RuntimeError("Phase shape is not registered in the shape library.")


def get_rf_shapes(
    rf_obj_id: List[Tuple[SimpleNamespace, int]], id_shape_cnt: int, rf_raster_time: float
) -> Tuple[ShapeLibrary, PhaseShapeLibrary, ShapeLibrary, int]:
    """
    Register the magnitude, phase and time shapes of the unique RF events.

    Parameters
    ----------
    rf_obj_id : list[tuple[SimpleNamespace, int]]
        Unique RF events and their IDs.
    id_shape_cnt : int
        Next free shape ID.
    rf_raster_time : float
        RF raster time in seconds (s).

    Returns
    -------
    rf_abs_lib, rf_ang_lib, rf_tim_lib : ShapeLibrary
        Magnitude, phase and time shapes.
    id_shape_cnt : int
        Next free shape ID.
    """
    rf_abs_lib, rf_ang_lib, rf_tim_lib = ShapeLibrary(), PhaseShapeLibrary(), ShapeLibrary()
    for rf, _ in rf_obj_id:
        _, id_shape_cnt = rf_abs_lib.find_or_insert(magnitude_shape(rf.signal), id_shape_cnt)
        _, id_shape_cnt = rf_ang_lib.find_or_insert(phase_shape(rf.signal), id_shape_cnt)
        shape_tim = time_shape(rf.duration, rf_raster_time)
        if shape_tim is not None:
            _, id_shape_cnt = rf_tim_lib.find_or_insert(shape_tim, id_shape_cnt)
    return rf_abs_lib, rf_ang_lib, rf_tim_lib, id_shape_cnt


def get_grad_shapes(
    grad_obj_id: List[Tuple[SimpleNamespace, int]], id_shape_cnt: int, grad_raster_time: float
) -> Tuple[ShapeLibrary, ShapeLibrary, int]:
    """
    Register the amplitude and time shapes of the unique arbitrary gradient events.

    Parameters
    ----------
    grad_obj_id : list[tuple[SimpleNamespace, int]]
        Unique arbitrary gradient events and their IDs.
    id_shape_cnt : int
        Next free shape ID.
    grad_raster_time : float
        Gradient raster time in seconds (s).

    Returns
    -------
    grad_amp_lib, grad_tim_lib : ShapeLibrary
        Amplitude and time shapes.
    id_shape_cnt : int
        Next free shape ID.
    """
    grad_amp_lib, grad_tim_lib = ShapeLibrary(), ShapeLibrary()
    for grad, _ in grad_obj_id:
        _, id_shape_cnt = grad_amp_lib.find_or_insert(amplitude_shape(grad.amplitude), id_shape_cnt)
        shape_tim = time_shape(grad.duration, grad_raster_time)
        if shape_tim is not None:
            _, id_shape_cnt = grad_tim_lib.find_or_insert(shape_tim, id_shape_cnt)
    return grad_amp_lib, grad_tim_lib, id_shape_cnt

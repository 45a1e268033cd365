from types import SimpleNamespace
from typing import List, Tuple
from warnings import warn

import numpy as np

from pyseqwriter.compress_shape import compress_shape
from pyseqwriter.convert import convert
from pyseqwriter.event_lib import EventLibrary, get_events_on
from pyseqwriter.shape_lib import (
    PhaseShapeLibrary,
    ShapeLibrary,
    amplitude_shape,
    get_grad_shapes,
    get_rf_shapes,
    magnitude_shape,
    phase_shape,
    time_shape,
)

# Maximum deviation, in raster units, of a block duration from the block duration raster
block_duration_tolerance = 1e-6


def get_raster_time(definitions: dict, key: str) -> float:
    """
    Returns the raster time stored under `key` in the sequence definitions.

    Raises
    ------
    ValueError
        If the definition is missing or not a positive number.
    """
    if key not in definitions:
        raise ValueError(f"Sequence definitions must include '{key}'.")
    raster_time = definitions[key]
    if isinstance(raster_time, str) or np.ndim(raster_time) != 0 or not raster_time > 0:
        raise ValueError(f"Definition '{key}' must be a positive number. Passed: {raster_time}")
    return float(raster_time)


def is_trapezoid(grad: SimpleNamespace) -> bool:
    return np.size(grad.amplitude) == 1


def block_table(
    seq, rf_library: EventLibrary, grad_library: EventLibrary, adc_library: EventLibrary, block_duration_raster: float
) -> List[Tuple[int, ...]]:
    """
    Rows `(block, duration, rf, gx, gy, gz, adc, ext)` of the [BLOCKS] section. The duration is in units of
    `block_duration_raster`; absent events have ID 0 and extensions are always 0.
    """
    rf_ids = rf_library.resolve(seq.rf_events)
    gx_ids = grad_library.resolve(seq.gx_events)
    gy_ids = grad_library.resolve(seq.gy_events)
    gz_ids = grad_library.resolve(seq.gz_events)
    adc_ids = adc_library.resolve(seq.adc_events)

    table = []
    for block_counter, block_duration in enumerate(seq.block_durations, start=1):
        duration = block_duration / block_duration_raster
        duration_rounded = int(round(duration))
        if abs(duration_rounded - duration) > block_duration_tolerance:
            warn(
                f"Block {block_counter} duration {block_duration * 1e6:.3f} us is not on the block duration raster. "
                f"Rounded to {duration_rounded * block_duration_raster * 1e6:.3f} us.",
                stacklevel=5,
            )
        i = block_counter - 1
        table.append(
            (block_counter, duration_rounded, rf_ids[i], gx_ids[i], gy_ids[i], gz_ids[i], adc_ids[i], 0)
        )
    return table


def rf_table(
    rf_library: EventLibrary,
    rf_abs_lib: ShapeLibrary,
    rf_ang_lib: PhaseShapeLibrary,
    rf_tim_lib: ShapeLibrary,
    rf_raster_time: float,
    gamma: float,
) -> List[Tuple]:
    """
    Rows `(id, amplitude, mag_id, phase_id, time_shape_id, delay, freq, phase)` of the [RF] section, with amplitude
    in Hz, delay in us and phase in rad.
    """
    table = []
    for rf, key_id in rf_library:
        amplitude = convert(np.max(np.abs(rf.signal)), from_unit="T", to_unit="Hz", gamma=gamma)
        mag_id = rf_abs_lib.get(magnitude_shape(rf.signal))
        phase_id, phase = rf_ang_lib.get_with_offset(phase_shape(rf.signal))
        shape_tim = time_shape(rf.duration, rf_raster_time)
        time_id = 0 if shape_tim is None else rf_tim_lib.get(shape_tim)

        # Samples on the raster are played at the center of each raster interval
        delay_compensation = rf_raster_time / 2 if time_id == 0 else 0
        delay = round((rf.delay - delay_compensation) / rf_raster_time) * rf_raster_time * 1e6

        table.append((key_id, amplitude, mag_id, phase_id, time_id, delay, rf.freq_offset, phase))
    return table


def grad_table(
    grad_obj_id: List[Tuple[SimpleNamespace, int]],
    grad_amp_lib: ShapeLibrary,
    grad_tim_lib: ShapeLibrary,
    grad_raster_time: float,
    gamma: float,
) -> List[Tuple]:
    """
    Rows `(id, amplitude, amp_shape_id, time_shape_id, delay)` of the [GRADIENTS] section, with amplitude in Hz/m
    and delay in us. The amplitude is always positive; the sign is carried by the shape.
    """
    table = []
    for grad, key_id in grad_obj_id:
        amplitude = convert(np.max(np.abs(grad.amplitude)), from_unit="T/m", to_unit="Hz/m", gamma=gamma)
        amp_id = grad_amp_lib.get(amplitude_shape(grad.amplitude))
        shape_tim = time_shape(grad.duration, grad_raster_time)
        time_id = 0 if shape_tim is None else grad_tim_lib.get(shape_tim)
        table.append((key_id, amplitude, amp_id, time_id, int(round(1e6 * grad.delay))))
    return table


def trap_table(trap_obj_id: List[Tuple[SimpleNamespace, int]], gamma: float) -> List[Tuple]:
    """
    Rows `(id, amplitude, rise, flat, fall, delay)` of the [TRAP] section, with amplitude in Hz/m and times in us.
    """
    table = []
    for trap, key_id in trap_obj_id:
        amplitude = convert(float(np.ravel(trap.amplitude)[0]), from_unit="T/m", to_unit="Hz/m", gamma=gamma)
        table.append(
            (
                key_id,
                amplitude,
                int(round(1e6 * trap.rise_time)),
                int(round(1e6 * np.sum(trap.duration))),
                int(round(1e6 * trap.fall_time)),
                int(round(1e6 * trap.delay)),
            )
        )
    return table


def adc_table(adc_library: EventLibrary) -> List[Tuple]:
    """
    Rows `(id, num, dwell, delay, freq, phase)` of the [ADC] section, with dwell in ns and delay in us. The delay
    refers to the start of the first dwell interval, half a dwell before the first sample.

    Raises
    ------
    ValueError
        If an ADC has fewer than two samples.
    """
    table = []
    for adc, key_id in adc_library:
        if adc.num_samples < 2:
            raise ValueError(f"ADC event {key_id} must have at least two samples. Passed: {adc.num_samples}")
        dwell = adc.duration / (adc.num_samples - 1)
        table.append(
            (
                key_id,
                adc.num_samples,
                dwell * 1e9,
                (adc.delay - 0.5 * dwell) * 1e6,
                adc.freq_offset,
                adc.phase_offset,
            )
        )
    return table


def shape_table(*shape_libraries: ShapeLibrary) -> List[Tuple[np.ndarray, int, int]]:
    """
    Rows `(data, id, num_samples)` of the [SHAPES] section, one per unique shape, in library order. `data` is the
    compressed shape when compression makes it shorter; `num_samples` is always the uncompressed length.
    """
    table = []
    for shape_library in shape_libraries:
        for shape, key_id in shape_library:
            compressed = compress_shape(shape)
            table.append((compressed.data, key_id, compressed.num_samples))
    return table


def build_tables(seq) -> SimpleNamespace:
    """
    Build all tables of a sequence file. Unique events get IDs per event library in order of first occurrence;
    unique shapes get IDs from one counter shared by all shape libraries.

    Parameters
    ----------
    seq : Sequence
        Sequence to be written.

    Returns
    -------
    tables : SimpleNamespace
        Fields `blocks`, `rf`, `grad`, `trap`, `adc`, `shapes` and `num_shapes`.

    Raises
    ------
    ValueError
        If a raster definition is missing or an event cannot be encoded.
    """
    rf_raster_time = get_raster_time(seq.definitions, "RadiofrequencyRasterTime")
    grad_raster_time = get_raster_time(seq.definitions, "GradientRasterTime")
    block_duration_raster = get_raster_time(seq.definitions, "BlockDurationRaster")
    gamma = seq.system.gamma

    if any(len(block_extensions) > 0 for block_extensions in seq.extensions):
        warn("Sequence extensions are not supported and will not be written.", stacklevel=4)

    rf_library = EventLibrary()
    rf_obj_id = rf_library.register(get_events_on(seq.rf_events))

    # Gradients of all channels share one library, visited block by block in x, y, z order
    grad_library = EventLibrary()
    grad_events = [g for gxyz in zip(seq.gx_events, seq.gy_events, seq.gz_events) for g in gxyz]
    grad_obj_id = grad_library.register(get_events_on(grad_events))
    arb_obj_id = [(grad, key_id) for grad, key_id in grad_obj_id if not is_trapezoid(grad)]
    trap_obj_id = [(grad, key_id) for grad, key_id in grad_obj_id if is_trapezoid(grad)]

    adc_library = EventLibrary()
    adc_library.register(get_events_on(seq.adc_events))

    rf_abs_lib, rf_ang_lib, rf_tim_lib, id_shape_cnt = get_rf_shapes(rf_obj_id, 1, rf_raster_time)
    grad_amp_lib, grad_tim_lib, id_shape_cnt = get_grad_shapes(arb_obj_id, id_shape_cnt, grad_raster_time)

    tables = SimpleNamespace()
    tables.blocks = block_table(seq, rf_library, grad_library, adc_library, block_duration_raster)
    tables.rf = rf_table(rf_library, rf_abs_lib, rf_ang_lib, rf_tim_lib, rf_raster_time, gamma)
    tables.grad = grad_table(arb_obj_id, grad_amp_lib, grad_tim_lib, grad_raster_time, gamma)
    tables.trap = trap_table(trap_obj_id, gamma)
    tables.adc = adc_table(adc_library)
    tables.shapes = shape_table(rf_abs_lib, rf_ang_lib, rf_tim_lib, grad_amp_lib, grad_tim_lib)
    tables.num_shapes = id_shape_cnt - 1
    return tables

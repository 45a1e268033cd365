import numpy as np

import pyseqwriter as psw


def main(write_seq: bool = False, seq_filename: str = "fid_pyseqwriter.seq"):
    # ======
    # SETUP
    # ======
    n_reps = 4  # Number of repetitions
    TR = 12e-3  # Repetition time
    n_samples = 64  # Number of readout samples
    readout_duration = 6.3e-3  # First to last sample
    flip_angle = np.pi / 8

    system = psw.Opts(rf_raster_time=1e-6, grad_raster_time=10e-6, block_duration_raster=10e-6)
    seq = psw.Sequence(system)

    # ======
    # CREATE EVENTS
    # ======
    # Hard pulse: B1 amplitude for `flip_angle` over 1 ms
    rf_duration = 1e-3
    b1 = flip_angle / (2 * np.pi * system.gamma * rf_duration)
    rf = psw.make_block_pulse(amplitude=b1, duration=rf_duration, delay=100e-6)

    # Sinc pulse with a quadratic phase sweep on a non-uniform time grid
    t = np.linspace(-1, 1, 101)
    signal = b1 * np.sinc(3 * t) * np.exp(1j * 0.5 * np.pi * t**2)
    rf_sinc = psw.make_arbitrary_rf(signal=signal, duration=np.full(100, 20e-6), delay=100e-6)

    spoiler = psw.make_trapezoid(channel="z", amplitude=20e-3, flat_time=1e-3, rise_time=200e-6)
    adc = psw.make_adc(num_samples=n_samples, duration=readout_duration, delay=200e-6)

    # ======
    # CONSTRUCT SEQUENCE
    # ======
    for i in range(n_reps):
        excitation = rf if i % 2 == 0 else rf_sinc
        seq.add_block(excitation)
        seq.add_block(adc)
        seq.add_block(spoiler, duration=TR - psw.calc_duration(excitation) - psw.calc_duration(adc))

    seq.set_definition("Name", "fid")

    # =========
    # WRITE .SEQ
    # =========
    if write_seq:
        seq.write(seq_filename)

    return seq


if __name__ == "__main__":
    main(write_seq=True)

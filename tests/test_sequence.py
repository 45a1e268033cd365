import importlib
from pathlib import Path
from types import SimpleNamespace

import numpy as np
import pyseqwriter as psw
import pytest
from pyseqwriter import Sequence


def test_default_definitions():
    seq = Sequence()
    assert seq.definitions == {
        'AdcRasterTime': 100e-9,
        'BlockDurationRaster': 10e-6,
        'GradientRasterTime': 10e-6,
        'RadiofrequencyRasterTime': 1e-6,
    }
    assert len(seq) == 0
    assert seq.duration() == 0


def test_system_definitions():
    system = psw.Opts(grad_raster_time=20e-6, rf_raster_time=2e-6)
    seq = Sequence(system)
    assert seq.system is system
    assert seq.get_definition('GradientRasterTime') == 20e-6
    assert seq.get_definition('RadiofrequencyRasterTime') == 2e-6


@pytest.mark.parametrize('name', ['adc_raster_time', 'block_duration_raster', 'gamma', 'grad_raster_time'])
def test_invalid_opts(name):
    with pytest.raises(ValueError, match=f'Invalid {name}. Must be positive.'):
        psw.Opts(**{name: 0})


def test_add_block_channels():
    rf = psw.make_block_pulse(amplitude=1e-6, duration=1e-3)
    gx = psw.make_trapezoid('x', amplitude=1e-3, flat_time=1e-3, rise_time=1e-4)
    gz = psw.make_trapezoid('z', amplitude=1e-3, flat_time=1e-3, rise_time=1e-4)
    adc = psw.make_adc(num_samples=8, duration=1e-3)

    seq = Sequence()
    seq.add_block(gz, rf, None, adc, gx)

    block = seq.get_block(1)
    assert block.rf is rf
    assert block.gx is gx
    assert block.gy is None
    assert block.gz is gz
    assert block.adc is adc
    assert block.block_duration == pytest.approx(1.2e-3)
    assert block.extensions == []


def test_add_block_duration():
    seq = Sequence()
    seq.add_block(psw.make_delay(1e-3))
    seq.add_block(psw.make_adc(num_samples=8, duration=1e-3), duration=2e-3)
    seq.add_block(psw.make_delay(1e-3), psw.make_block_pulse(amplitude=1e-6, duration=5e-4))
    assert seq.block_durations == [1e-3, 2e-3, 1e-3]
    assert seq.duration() == pytest.approx(4e-3)
    assert seq.get_block(1).rf is None


def test_add_block_duration_too_short():
    seq = Sequence()
    with pytest.raises(ValueError, match='is shorter than its events'):
        seq.add_block(psw.make_adc(num_samples=8, duration=1e-3), duration=5e-4)
    assert len(seq) == 0


def test_add_block_duplicate_channel():
    seq = Sequence()
    seq.add_block(psw.make_delay(1e-3))
    with pytest.raises(ValueError, match="Block 2 has more than one event on channel 'gx'"):
        seq.add_block(
            psw.make_trapezoid('x', amplitude=1e-3, flat_time=1e-3, rise_time=1e-4),
            psw.make_trapezoid('x', amplitude=2e-3, flat_time=1e-3, rise_time=1e-4),
        )


def test_add_block_unknown_event():
    with pytest.raises(ValueError, match="Unknown event type 'spin'"):
        Sequence().add_block(SimpleNamespace(type='spin'))


def test_add_block_extensions():
    label = SimpleNamespace(type='labelset', label='SLC', value=1)
    seq = Sequence()
    seq.add_block(psw.make_delay(1e-3), label)
    assert seq.get_block(1).extensions == [label]


@pytest.mark.parametrize('block_index', [0, 2, -1])
def test_get_block_index_error(block_index):
    seq = Sequence()
    seq.add_block(psw.make_delay(1e-3))
    with pytest.raises(IndexError, match='out of range'):
        seq.get_block(block_index)


def test_definitions():
    seq = Sequence()
    assert seq.get_definition('Name') == ''
    seq.set_definition('Name', 'gre')
    seq.set_definition('FOV', np.array([0.25, 0.25, 0.01]))
    assert seq.get_definition('Name') == 'gre'
    np.testing.assert_array_equal(seq.get_definition('FOV'), [0.25, 0.25, 0.01])


def test_fov_in_millimeters_warning():
    seq = Sequence()
    with pytest.warns(UserWarning, match='Definition FOV uses values exceeding 1 m.'):
        seq.set_definition('FOV', [250, 250, 10])


def test_str():
    seq = Sequence()
    seq.add_block(psw.make_delay(1e-3))
    assert 'blocks: 1' in str(seq)
    assert 'gamma: 42577468.8' in str(seq.system)


# List of example sequences in examples/scripts/ to add as sequence tests.
seq_examples = ['write_fid']

examples_dir = Path(__file__).resolve().parents[1] / 'examples' / 'scripts'


def load_example(example):
    spec = importlib.util.spec_from_file_location(f'examples.{example}', examples_dir / f'{example}.py')
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.mark.parametrize('example', seq_examples)
def test_example_writes_signed_file(example, tmp_path, read_sections):
    module = load_example(example)
    seq_filename = tmp_path / f'{example}.seq'
    seq = module.main(write_seq=True, seq_filename=str(seq_filename))

    assert len(seq) > 0
    assert psw.verify_signature(seq_filename)
    sections = read_sections(seq_filename)
    assert len(sections['BLOCKS']) == len(seq)


def test_write_fid_tables(tmp_path, read_sections, read_shapes):
    seq = load_example('write_fid').main()
    seq_filename = tmp_path / 'fid.seq'
    seq.write(seq_filename)
    sections = read_sections(seq_filename)

    # Two distinct excitations, one spoiler and one readout, reused by every repetition
    assert len(sections['RF']) == 2
    assert len(sections['TRAP']) == 1
    assert len(sections['ADC']) == 1
    assert [line.split()[2] for line in sections['BLOCKS']] == ['1', '0', '0', '2', '0', '0'] * 2

    # Block pulse: magnitude and phase. Sinc pulse: magnitude, phase and time shapes
    shapes = read_shapes(seq_filename)
    assert list(shapes) == [1, 2, 3, 4, 5]
    assert shapes[5][0] == 101

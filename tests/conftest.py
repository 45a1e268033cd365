from pathlib import Path

import numpy as np
import pytest

import pyseqwriter as psw


@pytest.fixture
def read_sections():
    def read(file_name):
        """
        Split a sequence file into its sections, dropping comments and blank lines
        """
        sections = {}
        current = None
        for line in Path(file_name).read_text().splitlines():
            if line.startswith('[') and line.endswith(']'):
                current = line[1:-1]
                sections[current] = []
            elif current is not None and line.strip() != '' and not line.startswith('#'):
                sections[current].append(line)
        return sections

    return read


@pytest.fixture
def read_shapes(read_sections):
    def read(file_name):
        """
        Map shape IDs of the [SHAPES] section to `(num_samples, data)`
        """
        lines = read_sections(file_name).get('SHAPES', [])
        shapes = {}
        i = 0
        while i < len(lines):
            shape_id = int(lines[i].split()[1])
            num_samples = int(lines[i + 1].split()[1])
            i += 2
            data = []
            while i < len(lines) and not lines[i].startswith('shape_id'):
                data.append(float(lines[i]))
                i += 1
            shapes[shape_id] = (num_samples, np.array(data))
        return shapes

    return read


@pytest.fixture
def rf_adc_seq():
    """
    One block pulse block followed by one ADC block
    """
    seq = psw.Sequence()
    seq.add_block(psw.make_block_pulse(amplitude=1, duration=1e-3))
    seq.add_block(psw.make_adc(num_samples=4, duration=30e-6))
    return seq


@pytest.fixture
def gauss_signal():
    t = np.linspace(-1, 1, 50)
    return 1e-6 * np.exp(-4 * t**2) * np.exp(1j * np.pi * t)

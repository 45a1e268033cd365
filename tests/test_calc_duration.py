from itertools import combinations_with_replacement
from types import SimpleNamespace

import numpy as np
import pyseqwriter as psw
import pytest

"""
Tests calc_duration by feeding it some sample events with known durations.
Additionally, tests the combination of any 2 and 3 of those events.
"""


def test_no_event():
    assert psw.calc_duration() == 0


known_duration_event_zoo = [
    ('trapz_flat1', psw.make_trapezoid('x', amplitude=1, flat_time=1, rise_time=0), 1),
    ('trapz_flat1_ramps1', psw.make_trapezoid('y', amplitude=1, flat_time=1, rise_time=1), 3),
    ('trapz_flat1_delayed1', psw.make_trapezoid('z', amplitude=1, flat_time=1, rise_time=0, delay=1), 2),
    ('arb_grad4', psw.make_arbitrary_grad('x', waveform=[0, 1, 0], duration=4), 4),
    ('arb_grad_intervals6', psw.make_arbitrary_grad('x', waveform=[0, 1, 0], duration=[2, 3], fall_time=1), 6),
    ('delay1', psw.make_delay(1), 1),
    ('delay0', psw.make_delay(0), 0),
    ('rf0_block1', psw.make_block_pulse(amplitude=0, duration=1), 1),
    ('rf_block1_delay1', psw.make_block_pulse(amplitude=1, duration=1, delay=1), 2),
    ('rf_arb_intervals5', psw.make_arbitrary_rf(signal=[1, 1, 1], duration=[2, 3]), 5),
    ('adc3', psw.make_adc(duration=3, num_samples=1), 3),
    ('adc3_delayed', psw.make_adc(duration=3, delay=1, num_samples=1), 4),
    ('trigger', SimpleNamespace(type='trigger', channel='physio1', duration=59, delay=0), 0),
    ('none', None, 0),
]


@pytest.mark.parametrize('name,event,expected_dur', known_duration_event_zoo)
def test_single_events(name, event, expected_dur):
    assert psw.calc_duration(event) == expected_dur


def known_duration_event_zoo_combos(num_to_combine):
    for combo in combinations_with_replacement(known_duration_event_zoo, num_to_combine):
        name = ','.join(event[0] for event in combo)
        expected_dur = max(event[2] for event in combo)
        events = (event[1] for event in combo)
        yield name, tuple(events), expected_dur


@pytest.mark.parametrize('name,events,expected_total_dur', known_duration_event_zoo_combos(2))
def test_event_combinations2(name, events, expected_total_dur):
    assert psw.calc_duration(*events) == expected_total_dur


@pytest.mark.parametrize('name,events,expected_total_dur', known_duration_event_zoo_combos(3))
def test_event_combinations3(name, events, expected_total_dur):
    assert psw.calc_duration(*events) == expected_total_dur


def test_returns_float():
    assert isinstance(psw.calc_duration(psw.make_arbitrary_rf(signal=np.ones(3), duration=np.ones(2))), float)


def test_invalid_input():
    with pytest.raises(TypeError, match='input\\(s\\) should be of type SimpleNamespace'):
        psw.calc_duration({'type': 'delay', 'delay': 1})

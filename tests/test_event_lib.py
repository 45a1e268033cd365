"""Tests for the event_lib module"""

from types import SimpleNamespace

import numpy as np
import pytest

import pyseqwriter as psw
from pyseqwriter.event_lib import EventLibrary, events_approx, get_events_on, is_event_on, safe_approx


def test_safe_approx_length_mismatch():
    assert not safe_approx(np.ones(3), np.ones(4))


def test_safe_approx_tolerance():
    a = np.linspace(1, 2, 10)
    assert safe_approx(a, a * (1 + 1e-12))
    assert not safe_approx(a, a * (1 + 1e-6))


def test_safe_approx_scalars_and_complex():
    assert safe_approx(0, 0)
    assert not safe_approx(0, 1e-20)
    assert safe_approx(np.array([1 + 1j, 2]), np.array([1 + 1j, 2]))
    assert not safe_approx(np.array([1 + 1j, 2]), np.array([1 - 1j, 2]))


def test_is_event_on():
    assert not is_event_on(None)
    assert not is_event_on(psw.make_block_pulse(amplitude=0, duration=0))
    assert not is_event_on(psw.make_trapezoid('x', amplitude=0, flat_time=0, rise_time=0))
    assert is_event_on(psw.make_block_pulse(amplitude=1e-6, duration=1e-3))
    assert is_event_on(psw.make_adc(num_samples=4, duration=30e-6))
    # Any non-zero field turns an event on, not only its amplitude
    assert is_event_on(psw.make_block_pulse(amplitude=0, duration=1e-3))


def test_is_event_on_delay_event():
    assert not is_event_on(psw.make_delay(1e-3))


def test_get_events_on_keeps_order():
    rf1 = psw.make_block_pulse(amplitude=1e-6, duration=1e-3)
    rf2 = psw.make_block_pulse(amplitude=2e-6, duration=1e-3)
    events = [None, rf2, psw.make_block_pulse(amplitude=0, duration=0), rf1, None]
    assert get_events_on(events) == [rf2, rf1]


def test_events_approx_type_mismatch():
    rf = psw.make_block_pulse(amplitude=1e-6, duration=1e-3)
    adc = psw.make_adc(num_samples=4, duration=1e-3)
    assert not events_approx(rf, adc)


def test_events_approx_ignores_channel():
    gx = psw.make_trapezoid('x', amplitude=1e-3, flat_time=1e-3, rise_time=1e-4)
    gy = psw.make_trapezoid('y', amplitude=1e-3, flat_time=1e-3, rise_time=1e-4)
    assert events_approx(gx, gy)


def test_events_approx_scalar_vs_sequence_duration():
    rf1 = psw.make_arbitrary_rf(signal=np.ones(3), duration=2e-6)
    rf2 = psw.make_arbitrary_rf(signal=np.ones(3), duration=[1e-6, 1e-6])
    assert not events_approx(rf1, rf2)


def test_register_first_seen_ids():
    rf1 = psw.make_block_pulse(amplitude=1e-6, duration=1e-3)
    rf2 = psw.make_block_pulse(amplitude=2e-6, duration=1e-3)
    rf1_copy = psw.make_block_pulse(amplitude=1e-6 * (1 + 1e-12), duration=1e-3)

    library = EventLibrary()
    obj_id = library.register([rf2, rf1, rf1_copy, rf2])

    assert [key_id for _, key_id in obj_id] == [1, 2]
    assert obj_id[0][0] is rf2
    assert obj_id[1][0] is rf1
    assert len(library) == 2
    assert library.next_free_ID == 3
    assert str(library) == 'EventLibrary:\nkeys: 2'


def test_register_distinct_beyond_tolerance():
    events = [psw.make_block_pulse(amplitude=1e-6 * (1 + k * 1e-6), duration=1e-3) for k in range(5)]
    library = EventLibrary()
    assert [key_id for _, key_id in library.register(events)] == [1, 2, 3, 4, 5]


def test_find_or_insert():
    adc = psw.make_adc(num_samples=4, duration=30e-6)
    library = EventLibrary()
    assert library.find(adc) == (1, False)
    assert library.find_or_insert(adc) == (1, False)
    assert library.find_or_insert(psw.make_adc(num_samples=4, duration=30e-6)) == (1, True)


def test_resolve():
    rf1 = psw.make_block_pulse(amplitude=1e-6, duration=1e-3)
    rf2 = psw.make_block_pulse(amplitude=2e-6, duration=1e-3)
    block_events = [rf1, None, rf2, psw.make_block_pulse(amplitude=0, duration=0), rf1]

    library = EventLibrary()
    library.register(get_events_on(block_events))
    assert library.resolve(block_events) == [1, 0, 2, 0, 1]


def test_resolve_unregistered_event():
    library = EventLibrary()
    library.register([psw.make_block_pulse(amplitude=1e-6, duration=1e-3)])
    with pytest.raises(RuntimeError, match='block 2 is not registered'):
        library.resolve([None, psw.make_block_pulse(amplitude=3e-6, duration=1e-3)])


def test_resolve_accepts_plain_namespaces():
    adc = SimpleNamespace(type='adc', num_samples=8, duration=1e-3, delay=0, freq_offset=0, phase_offset=0)
    library = EventLibrary()
    library.register([adc])
    assert library.resolve([adc]) == [1]

from types import SimpleNamespace
from typing import Union
from warnings import warn

import numpy as np

from pyseqwriter import eps, version
from pyseqwriter.calc_duration import calc_duration
from pyseqwriter.opts import Opts
from pyseqwriter.Sequence.write_seq import write as write_seq

# Event types that are accepted in a block but not encoded by the writer
extension_types = ["labelset", "labelinc", "trigger", "output", "rf_shim", "soft_delay"]


class Sequence:
    """
    Ordered list of blocks to be written in the open file format for MR sequences defined by the Pulseq project. See
    http://pulseq.github.io/.

    Each block holds at most one RF event, one gradient event per channel and one ADC event, plus a duration. Events
    are kept as they are passed in; writing never modifies them.
    """

    version_major = version.major
    version_minor = version.minor
    version_revision = version.revision

    def __init__(self, system: Union[Opts, None] = None):
        if system is None:
            system = Opts()

        self.system = system

        self.rf_events = []
        self.gx_events = []
        self.gy_events = []
        self.gz_events = []
        self.adc_events = []
        self.block_durations = []
        self.extensions = []
        self.definitions = {}

        self.rf_raster_time = self.system.rf_raster_time
        self.grad_raster_time = self.system.grad_raster_time
        self.adc_raster_time = self.system.adc_raster_time
        self.block_duration_raster = self.system.block_duration_raster
        self.set_definition("AdcRasterTime", self.adc_raster_time)
        self.set_definition("BlockDurationRaster", self.block_duration_raster)
        self.set_definition("GradientRasterTime", self.grad_raster_time)
        self.set_definition("RadiofrequencyRasterTime", self.rf_raster_time)

    def __str__(self) -> str:
        s = "Sequence:"
        s += "\nblocks: " + str(len(self))
        s += "\nduration: " + str(self.duration())
        s += "\nrf_raster_time: " + str(self.rf_raster_time)
        s += "\ngrad_raster_time: " + str(self.grad_raster_time)
        s += "\nblock_duration_raster: " + str(self.block_duration_raster)
        return s

    def __len__(self) -> int:
        return len(self.block_durations)

    def add_block(self, *args: SimpleNamespace, duration: Union[float, None] = None) -> None:
        """
        Add a new block made of the events `args` to the sequence.

        See Also
        --------
        - `pyseqwriter.make_adc.make_adc()`
        - `pyseqwriter.make_trapezoid.make_trapezoid()`
        - `pyseqwriter.make_arbitrary_rf.make_arbitrary_rf()`

        Parameters
        ----------
        args : SimpleNamespace
            Events of the block. `None` entries are skipped.
        duration : float, default=None
            Block duration in seconds (s). Defaults to the duration of the longest event.

        Raises
        ------
        ValueError
            If two events share a channel.
            If an event type is unknown.
            If `duration` is shorter than the events of the block.
        """
        block = SimpleNamespace(rf=None, gx=None, gy=None, gz=None, adc=None)
        block_extensions = []
        for event in args:
            if event is None:
                continue
            if event.type == "rf":
                channel = "rf"
            elif event.type == "grad":
                channel = "g" + event.channel
            elif event.type == "adc":
                channel = "adc"
            elif event.type == "delay":
                continue
            elif event.type in extension_types:
                block_extensions.append(event)
                continue
            else:
                raise ValueError(f"Unknown event type '{event.type}'.")

            if getattr(block, channel) is not None:
                raise ValueError(f"Block {len(self) + 1} has more than one event on channel '{channel}'.")
            setattr(block, channel, event)

        min_duration = calc_duration(*args)
        if duration is None:
            duration = min_duration
        elif duration < min_duration - eps:
            raise ValueError(
                f"Block duration {duration * 1e6:.2f} us is shorter than its events ({min_duration * 1e6:.2f} us)."
            )

        self.rf_events.append(block.rf)
        self.gx_events.append(block.gx)
        self.gy_events.append(block.gy)
        self.gz_events.append(block.gz)
        self.adc_events.append(block.adc)
        self.block_durations.append(duration)
        self.extensions.append(block_extensions)

    def duration(self) -> float:
        """
        Returns the total duration of the sequence in seconds (s).
        """
        return float(np.sum(self.block_durations))

    def get_block(self, block_index: int) -> SimpleNamespace:
        """
        Return the block at the 1-based `block_index`.

        Returns
        -------
        SimpleNamespace
            Block with fields `rf`, `gx`, `gy`, `gz`, `adc`, `block_duration` and `extensions`.

        Raises
        ------
        IndexError
            If `block_index` is out of range.
        """
        if block_index < 1 or block_index > len(self):
            raise IndexError(f"Block index {block_index} out of range 1..{len(self)}.")
        i = block_index - 1
        return SimpleNamespace(
            rf=self.rf_events[i],
            gx=self.gx_events[i],
            gy=self.gy_events[i],
            gz=self.gz_events[i],
            adc=self.adc_events[i],
            block_duration=self.block_durations[i],
            extensions=self.extensions[i],
        )

    def get_definition(self, key: str) -> Union[float, int, list, np.ndarray, str, tuple]:
        """
        Return value of the definition specified by the key. An empty string is returned if the key is not defined.

        See also `pyseqwriter.Sequence.sequence.Sequence.set_definition()`.
        """
        if key in self.definitions:
            return self.definitions[key]
        else:
            return ""

    def set_definition(self, key: str, value: Union[float, int, list, np.ndarray, str, tuple]) -> None:
        """
        Modify a custom definition of the sequence. Set the user definition 'key' to value 'value'. If the definition
        does not exist it will be created.

        See also `pyseqwriter.Sequence.sequence.Sequence.get_definition()`.

        Parameters
        ----------
        key : str
            Definition key.
        value : int, list, np.ndarray, str or tuple
            Definition value.
        """
        if key == "FOV" and np.max(value) > 1:
            text = "Definition FOV uses values exceeding 1 m. "
            text += "New Pulseq interpreters expect values in units of meters."
            warn(text, stacklevel=2)

        self.definitions[key] = value

    def write(self, name: str, create_signature: bool = True, signature_type: str = "md5") -> Union[str, None]:
        """
        Write the sequence data to the given filename using the open file format for MR sequences.

        Parameters
        ----------
        name : str
            Filename of `.seq` file to be written to disk. The `.seq` suffix is added if missing.
        create_signature : bool, default=True
            Boolean flag to indicate if the file has to be signed.
        signature_type : str, default='md5'
            Digest used for the signature.

        Returns
        -------
        signature or None : If create_signature is True, it returns the written .seq file's signature as a string,
        otherwise it returns None.
        """
        return write_seq(self, name, create_signature, signature_type)

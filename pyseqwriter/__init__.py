import numpy as np

from pyseqwriter.version import __version__

# =========
# NP.FLOAT EPSILON
# =========
eps = np.finfo(np.float64).eps

# =========
# PACKAGE-LEVEL IMPORTS
# =========
from pyseqwriter.Sequence.sequence import Sequence
from pyseqwriter.calc_duration import calc_duration
from pyseqwriter.compress_shape import compress_shape
from pyseqwriter.convert import convert
from pyseqwriter.decompress_shape import decompress_shape
from pyseqwriter.make_adc import make_adc
from pyseqwriter.make_arbitrary_grad import make_arbitrary_grad
from pyseqwriter.make_arbitrary_rf import make_arbitrary_rf
from pyseqwriter.make_block_pulse import make_block_pulse
from pyseqwriter.make_delay import make_delay
from pyseqwriter.make_trapezoid import make_trapezoid
from pyseqwriter.opts import Opts
from pyseqwriter.signature import add_signature, verify_signature

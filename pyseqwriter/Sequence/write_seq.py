from typing import Union

import numpy as np

from pyseqwriter import __version__
from pyseqwriter.Sequence.tables import build_tables
from pyseqwriter.signature import add_signature, check_signature_type


def write_definitions(output_file, definitions: dict) -> None:
    """
    Write the [DEFINITIONS] section, keys sorted, numbers with 9 significant digits.

    Raises
    ------
    RuntimeError
        If an unsupported definition is encountered.
    """
    output_file.write("[DEFINITIONS]\n")
    for key in sorted(definitions.keys()):
        value = definitions[key]
        output_file.write(f"{key} ")
        if isinstance(value, str):
            output_file.write(value + " ")
        elif isinstance(value, (int, float, np.number)):
            output_file.write(f"{value:0.9g} ")
        elif isinstance(value, (list, tuple, np.ndarray)):  # For example, [FOVx, FOVy, FOVz]
            for v in value:
                if isinstance(v, (int, float, np.number)):
                    output_file.write(f"{v:0.9g} ")
                else:
                    output_file.write(f"{v} ")
        else:
            raise RuntimeError(f"Unsupported definition {key}: {type(value).__name__}")
        output_file.write("\n")
    output_file.write("\n")


def write(self, file_name: str, create_signature: bool = True, signature_type: str = "md5") -> Union[str, None]:
    """
    Write the sequence data to the given filename using the open file format for MR sequences.

    Parameters
    ----------
    file_name : str
        File name of `.seq` file to be written to disk.
    create_signature : bool, default=True
        Append a [SIGNATURE] section.
    signature_type : str, default='md5'
        Digest used for the signature.

    Returns
    -------
    signature or None
        Hex digest of the file if `create_signature` is True, otherwise None.

    Raises
    ------
    RuntimeError
        If an unsupported definition is encountered.
    ValueError
        If the sequence cannot be encoded or `signature_type` is unknown.
    """
    if create_signature:
        check_signature_type(signature_type)
    file_name = str(file_name)
    if not file_name.endswith(".seq"):
        file_name += ".seq"

    tables = build_tables(self)

    with open(file_name, "w", encoding="utf-8") as output_file:
        output_file.write("# Pulseq sequence file\n")
        output_file.write(f"# Created by pyseqwriter {__version__}\n\n")

        output_file.write("[VERSION]\n")
        output_file.write(f"major {self.version_major}\n")
        output_file.write(f"minor {self.version_minor}\n")
        output_file.write(f"revision {self.version_revision}\n")
        output_file.write("\n")

        if len(self.definitions) != 0:
            write_definitions(output_file, self.definitions)

        if len(tables.blocks) != 0:
            output_file.write("# Format of blocks:\n")
            output_file.write("# NUM DUR RF  GX  GY  GZ  ADC  EXT\n")
            output_file.write("[BLOCKS]\n")
            id_format_width = "{:" + str(len(str(len(tables.blocks)))) + "d}"
            id_format_str = id_format_width + " {:3d} {:3d} {:3d} {:3d} {:3d} {:2d} {:2d}\n"
            for row in tables.blocks:
                output_file.write(id_format_str.format(*row))
            output_file.write("\n")

        if len(tables.rf) != 0:
            output_file.write("# Format of RF events:\n")
            output_file.write("# id amplitude mag_id phase_id time_shape_id delay freq phase\n")
            output_file.write("# ..        Hz   ....     ....          ....    us   Hz   rad\n")
            output_file.write("[RF]\n")
            id_format_str = "{:d} {:12g} {:d} {:d} {:d} {:g} {:g} {:g}\n"
            for row in tables.rf:
                output_file.write(id_format_str.format(*row))
            output_file.write("\n")

        if len(tables.grad) != 0:
            output_file.write("# Format of arbitrary gradients:\n")
            output_file.write(
                "#   time_shape_id of 0 means default timing (stepping with grad_raster starting at 1/2 of grad_raster)\n"
            )
            output_file.write("# id amplitude amp_shape_id time_shape_id delay\n")
            output_file.write("# ..      Hz/m       ..         ..          us\n")
            output_file.write("[GRADIENTS]\n")
            id_format_str = "{:d} {:12g} {:d} {:d} {:d}\n"
            for row in tables.grad:
                output_file.write(id_format_str.format(*row))
            output_file.write("\n")

        if len(tables.trap) != 0:
            output_file.write("# Format of trapezoid gradients:\n")
            output_file.write("# id amplitude rise flat fall delay\n")
            output_file.write("# ..      Hz/m   us   us   us    us\n")
            output_file.write("[TRAP]\n")
            id_format_str = "{:2d} {:12g} {:3d} {:4d} {:3d} {:3d}\n"
            for row in tables.trap:
                output_file.write(id_format_str.format(*row))
            output_file.write("\n")

        if len(tables.adc) != 0:
            output_file.write("# Format of ADC events:\n")
            output_file.write("# id num dwell delay freq phase\n")
            output_file.write("# ..  ..    ns    us   Hz   rad\n")
            output_file.write("[ADC]\n")
            id_format_str = "{:d} {:d} {:.0f} {:.0f} {:g} {:g}\n"
            for row in tables.adc:
                output_file.write(id_format_str.format(*row))
            output_file.write("\n")

        if len(tables.shapes) != 0:
            output_file.write("# Sequence Shapes\n")
            output_file.write("[SHAPES]\n\n")
            for data, key_id, num_samples in tables.shapes:
                output_file.write(f"shape_id {key_id:d}\n")
                output_file.write(f"num_samples {num_samples:d}\n")
                output_file.write(("{:.9g}\n" * len(data)).format(*data))
                output_file.write("\n")

    if create_signature:  # Sign the file
        return add_signature(file_name, signature_type)
    return None

from math import pi

valid_rf_units = ["Hz", "T", "uT"]
valid_grad_units = ["Hz/m", "T/m", "mT/m", "rad/ms/mm"]


def convert(
    from_value: float, from_unit: str, to_unit: str = None, gamma: float = 42.5774688e6
) -> float:
    """
    Converts RF or gradient amplitude from unit `from_unit` to unit `to_unit` with gyromagnetic ratio `gamma`.

    Parameters
    ----------
    from_value : float or numpy.ndarray
        RF or gradient amplitude to convert from.
    from_unit : str
        Unit to convert from. Must be one of 'Hz', 'T', 'uT' (RF) or 'Hz/m', 'T/m', 'mT/m', 'rad/ms/mm' (gradient).
    to_unit : str, optional
        Unit to convert to. Defaults to 'Hz' for RF units and 'Hz/m' for gradient units.
    gamma : float, optional
        Gyromagnetic ratio in Hz/T. Default is 42.5774688e6, for Hydrogen.

    Returns
    -------
    out : float or numpy.ndarray
        Converted amplitude.

    Raises
    ------
    ValueError
        If `from_unit` or `to_unit` is unknown, or if they belong to different families.
    """
    if from_unit in valid_rf_units:
        family = valid_rf_units
    elif from_unit in valid_grad_units:
        family = valid_grad_units
    else:
        raise ValueError(
            f"Invalid unit. Must be one of {valid_rf_units + valid_grad_units}. Passed: {from_unit}"
        )

    if to_unit is None:
        to_unit = family[0]
    elif to_unit not in family:
        raise ValueError(f"Cannot convert from {from_unit} to {to_unit}.")

    # Convert to standard units (Hz or Hz/m)
    if from_unit in ("Hz", "Hz/m"):
        standard = from_value
    elif from_unit in ("T", "T/m"):
        standard = from_value * gamma
    elif from_unit == "uT":
        standard = from_value * 1e-6 * gamma
    elif from_unit == "mT/m":
        standard = from_value * 1e-3 * gamma
    else:  # rad/ms/mm
        standard = from_value * 1e6 / (2 * pi)

    # Convert from standard units
    if to_unit in ("Hz", "Hz/m"):
        out = standard
    elif to_unit in ("T", "T/m"):
        out = standard / gamma
    elif to_unit == "uT":
        out = 1e6 * standard / gamma
    elif to_unit == "mT/m":
        out = 1e3 * standard / gamma
    else:  # rad/ms/mm
        out = standard * 2 * pi * 1e-6

    return out

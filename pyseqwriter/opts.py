class Opts:
    """
    System raster times and gyromagnetic ratio used when writing a sequence.

    Attributes
    ----------
    adc_raster_time : float, default=100e-9
        Raster time for ADC sampling.
    block_duration_raster : float, default=10e-6
        Raster time for block durations.
    gamma : float, default=42.5774688e6
        Gyromagnetic ratio in Hz/T. Default gamma is specified for Hydrogen.
    grad_raster_time : float, default=10e-6
        Raster time for gradient waveforms.
    rf_raster_time : float, default=1e-6
        Raster time for radio-frequency pulses.

    Raises
    ------
    ValueError
        If a raster time or `gamma` is not positive.
    """

    def __init__(
        self,
        adc_raster_time: float = 100e-9,
        block_duration_raster: float = 10e-6,
        gamma: float = 42.5774688e6,
        grad_raster_time: float = 10e-6,
        rf_raster_time: float = 1e-6,
    ):
        for name, value in (
            ("adc_raster_time", adc_raster_time),
            ("block_duration_raster", block_duration_raster),
            ("gamma", gamma),
            ("grad_raster_time", grad_raster_time),
            ("rf_raster_time", rf_raster_time),
        ):
            if value <= 0:
                raise ValueError(f"Invalid {name}. Must be positive. Passed: {value}")

        self.adc_raster_time = adc_raster_time
        self.block_duration_raster = block_duration_raster
        self.gamma = gamma
        self.grad_raster_time = grad_raster_time
        self.rf_raster_time = rf_raster_time

    def __str__(self) -> str:
        """
        Print a string representation of the system limits objects.
        """
        variables = vars(self)
        s = [f"{key}: {value}" for key, value in variables.items()]
        s = "\n".join(s)
        s = "System limits:\n" + s
        return s

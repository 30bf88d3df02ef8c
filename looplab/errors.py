# errors.py
# Exception taxonomy shared by tracer, fitter and the batch layer.


class LoopLabError(Exception):
    """Base exception for looplab operations."""

    pass


class InvalidInputError(LoopLabError, ValueError):
    """Raised when a mask or point sequence cannot be processed at all."""

    pass


class FittingError(LoopLabError):
    """Raised when a spline stage fails; ``stage`` names the failing step."""

    def __init__(self, stage: str, message: str):
        super().__init__(f"{stage}: {message}")
        self.stage = stage

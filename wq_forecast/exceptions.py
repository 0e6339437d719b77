"""
Error taxonomy for the water-quality forecasting pipeline
"""


class WaterQualityError(Exception):
    pass


class InvalidInput(WaterQualityError, ValueError):
    """A manual entry or import row has a missing or non-numeric field"""

    def __init__(self, message: str, fields=None):
        super().__init__(message)
        self.fields = list(fields) if fields else []


class InsufficientData(WaterQualityError):
    pass


class DegenerateRegression(WaterQualityError):
    """All time values are identical, so the slope is undefined"""

    pass


class EmptyImport(WaterQualityError):
    pass

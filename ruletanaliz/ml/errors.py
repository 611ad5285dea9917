"""
Domain errors raised by the ledger and the prediction engine.
"""


class PredictionError(Exception):
    """Base class for errors the transport layer turns into client responses."""

    code = 'prediction_error'


class InvalidOutcome(PredictionError, ValueError):
    """A value outside 0-36 was offered as a spin result."""

    code = 'invalid_number'

    def __init__(self, value):
        self.value = value
        super().__init__(f'Invalid number {value!r} (must be 0-36)')


class InsufficientHistory(PredictionError):
    """Fewer than two spins have been observed, so there is no query context."""

    code = 'insufficient_history'

    def __init__(self, observed, required=2):
        self.observed = observed
        self.required = required
        super().__init__(
            f'At least {required} numbers are required for prediction '
            f'({observed} observed)'
        )

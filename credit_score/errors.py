
# credit_score/errors.py


class CreditScoreError(Exception):
    """Base class for failures surfaced to the request layer."""


class MissingInput(CreditScoreError):
    """No request record was supplied."""


class ModelUnavailable(CreditScoreError):
    """The scoring model could not be loaded or failed to run."""


class InvalidModelOutput(CreditScoreError):
    """The model returned scores of the wrong arity or non-finite values."""

"""Exceptions raised by the payments components."""


class PaymentsBaseException(Exception):
    """Base exception for the payments service."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class PaymentValidationError(PaymentsBaseException):
    """A submitted payment breaks one of the required-field rules."""


class PaymentNotFoundError(PaymentsBaseException):
    """No live payment exists with the requested id."""


class StoreError(PaymentsBaseException):
    """The payments store failed to carry out an operation."""


class InvalidPaymentIdError(StoreError):
    """The supplied id is not a syntactically valid payment id."""

    def __init__(self, payment_id: str) -> None:
        self.payment_id = payment_id
        super().__init__(f'"{payment_id}" is not a valid payment ID')

"""Required-field rules for payments submitted through the API."""

from datetime import datetime, timezone

from components.core.exceptions import PaymentValidationError
from components.payment import schemas

# The zero value a JSON client sends for an unset timestamp.
ZERO_DATE = datetime(1, 1, 1, tzinfo=timezone.utc)


def validate_entity(role: str, entity: schemas.Entity) -> None:
    """Check the fields of the party playing ``role`` in a payment."""
    if not entity.account_number:
        raise PaymentValidationError(f"{role}: the entity's account number must not be empty")
    if not entity.bank_id:
        raise PaymentValidationError(f"{role}: the entity's bank id must not be empty")
    if not entity.name:
        raise PaymentValidationError(f"{role}: the entity's name must not be empty")


def validate(payment: schemas.PaymentBase) -> None:
    """
    Validate a payment, stopping at the first rule it breaks.

    The rules are checked in this order and each raises
    ``PaymentValidationError`` with a message naming the offending field:
    - beneficiary account number, bank id and name
    - debtor account number, bank id and name
    - amount (strictly positive)
    - currency
    - date
    - description
    """
    validate_entity("beneficiary", payment.beneficiary)
    validate_entity("debtor", payment.debtor)
    if not payment.amount > 0:
        raise PaymentValidationError("the amount must be positive")
    if not payment.currency:
        raise PaymentValidationError("the currency must not be empty")
    if payment.date is None or payment.date == ZERO_DATE:
        raise PaymentValidationError("the date must not be empty")
    if not payment.description:
        raise PaymentValidationError("the description must not be empty")

"""Payment model for the database."""

from sqlalchemy import Column, String, DateTime, Double, JSON
from sqlalchemy.dialects import mysql

from components.core.database import Base

# MySQL drops fractional seconds unless asked to keep them.
Timestamp = DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql")


class Payment(Base):
    """Payment model storing a payment made by a debtor to a beneficiary.

    The parties are kept as JSON documents so that each row mirrors the
    shape of the resource served by the API.
    """
    __tablename__ = "payments"

    id = Column(String(32), primary_key=True, index=True)
    created_at = Column(Timestamp, nullable=False)
    updated_at = Column(Timestamp, nullable=False)
    deleted_at = Column(Timestamp, nullable=True, index=True)  # NULL while the payment is live

    beneficiary = Column(JSON, nullable=False)
    debtor = Column(JSON, nullable=False)

    amount = Column(Double, nullable=False)
    currency = Column(String(16), nullable=False)
    date = Column(Timestamp, nullable=False)
    description = Column(String(1024), nullable=False)

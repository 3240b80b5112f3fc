"""Shared fixtures: in-memory storage, a mocked audit logger, sample data."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from src.audit import AuditLogger
from src.models.transaction import Transaction, TransactionType
from src.models.user import Session
from src.services.auth import CredentialStore
from src.services.storage import InMemoryStorage
from src.services.transactions import TransactionStore


def make_tx(
    tx_type="Expense",
    amount="100",
    tx_date=date(2024, 1, 15),
    category=None,
    description="",
    tx_id=None,
) -> Transaction:
    """Build a Transaction with sensible defaults."""
    if category is None:
        category = "Salary" if tx_type == "Income" else "Food"
    return Transaction(
        id=tx_id or str(uuid4()),
        type=TransactionType(tx_type),
        category=category,
        amount=Decimal(amount),
        date=tx_date,
        description=description,
    )


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def log_sink():
    """The structlog-style logger behind the audit logger."""
    return MagicMock()


@pytest.fixture
def audit_logger(log_sink):
    return AuditLogger(logger=log_sink)


@pytest.fixture
def credential_store(storage, audit_logger):
    return CredentialStore(storage, audit_logger=audit_logger)


@pytest.fixture
def transaction_store(storage, audit_logger):
    return TransactionStore(storage, audit_logger=audit_logger)


@pytest.fixture
def session():
    return Session(name="Asha", email="asha@example.com")


@pytest.fixture
def other_session():
    return Session(name="Ravi", email="ravi@example.com")


@pytest.fixture
def sample_transactions():
    """Three transactions over two months: 3000 income, 300 expense."""
    return [
        make_tx("Income", "1000", date(2024, 1, 15), tx_id="t1"),
        make_tx("Expense", "300", date(2024, 1, 20), category="Rent", tx_id="t2"),
        make_tx("Income", "2000", date(2024, 2, 10), tx_id="t3"),
    ]

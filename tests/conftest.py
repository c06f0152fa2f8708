"""Shared fixtures for olist_analytics tests."""

import logging
from datetime import datetime
from decimal import Decimal

import pytest
import structlog

from olist_analytics.foundation.records import (
    CustomerRecord,
    OrderRecord,
    PaymentRecord,
)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo CLI logging configuration so later tests do not write to closed streams."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)


@pytest.fixture
def olist_records():
    """Small Olist-shaped dataset.

    - U1: two accounts, three delivered orders, one paid in two lines
    - U2: one delivered order, one canceled order
    - U3: one delivered order paid with a zero-value voucher
    - U4: only a shipped order (never scored)
    - orphan payment line for an unknown order
    """
    customers = [
        CustomerRecord("acc-1a", "U1"),
        CustomerRecord("acc-1b", "U1"),
        CustomerRecord("acc-2", "U2"),
        CustomerRecord("acc-3", "U3"),
        CustomerRecord("acc-4", "U4"),
    ]
    orders = [
        OrderRecord("O1", "acc-1a", "delivered", datetime(2017, 3, 1, 10, 0)),
        OrderRecord("O2", "acc-1b", "delivered", datetime(2018, 5, 20, 12, 30)),
        OrderRecord("O3", "acc-1b", "delivered", datetime(2018, 1, 2, 9, 0)),
        OrderRecord("O4", "acc-2", "delivered", datetime(2017, 11, 11, 11, 0)),
        OrderRecord("O5", "acc-2", "canceled", datetime(2018, 8, 1, 8, 0)),
        OrderRecord("O6", "acc-3", "delivered", datetime(2018, 7, 7, 7, 0)),
        OrderRecord("O7", "acc-4", "shipped", datetime(2018, 8, 20, 15, 0)),
    ]
    payments = [
        PaymentRecord("O1", Decimal("100.00")),
        PaymentRecord("O2", Decimal("40.00")),
        PaymentRecord("O2", Decimal("10.50")),
        PaymentRecord("O3", Decimal("25.25")),
        PaymentRecord("O4", Decimal("80.00")),
        PaymentRecord("O5", Decimal("999.00")),
        PaymentRecord("O6", Decimal("0.00")),
        PaymentRecord("O7", Decimal("60.00")),
        PaymentRecord("O-missing", Decimal("12.00")),
    ]
    return customers, orders, payments

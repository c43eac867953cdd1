"""Tests for the Invoice entity.

Tests cover:
- Amount validation (amount > 0, numeric only)
- Details lookup, absence as "not provided", read-only view
- Write-once transaction id
- Restoring a caller-persisted invoice
"""

from decimal import Decimal

import pytest

from gateway_core.domain.entities import Invoice
from gateway_core.domain.exceptions import (
    InvalidAmountError,
    InvalidInvoiceIdError,
    InvalidStateTransitionError,
    InvalidTransactionIdError,
)
from gateway_core.domain.value_objects import InvoiceId

# =============================================================================
# Creation
# =============================================================================


class TestInvoiceCreation:
    def test_new_invoice_has_generated_id(self) -> None:
        invoice = Invoice(amount=1000)

        assert isinstance(invoice.id, InvoiceId)

    def test_each_invoice_gets_unique_id(self) -> None:
        assert Invoice(amount=1000).id != Invoice(amount=1000).id

    def test_new_invoice_has_no_transaction_id(self) -> None:
        assert Invoice(amount=1000).transaction_id is None

    @pytest.mark.parametrize("amount", [1, 100000, Decimal("25000.5"), 0.5])
    def test_accepts_positive_amounts(self, amount) -> None:
        assert Invoice(amount=amount).amount == amount

    @pytest.mark.parametrize("amount", [0, -1, Decimal("-10"), 0.0])
    def test_rejects_non_positive_amounts(self, amount) -> None:
        with pytest.raises(InvalidAmountError, match="greater than 0"):
            Invoice(amount=amount)

    @pytest.mark.parametrize(
        "amount",
        [float("inf"), float("-inf"), float("nan"), Decimal("Infinity"), Decimal("NaN")],
    )
    def test_rejects_non_finite_amounts(self, amount) -> None:
        with pytest.raises(InvalidAmountError, match="must be finite"):
            Invoice(amount=amount)

    @pytest.mark.parametrize("amount", ["1000", None, True, [1000]])
    def test_rejects_non_numeric_amounts(self, amount) -> None:
        with pytest.raises(InvalidAmountError, match="must be a number"):
            Invoice(amount=amount)

    def test_driver_defaults_to_none(self) -> None:
        assert Invoice(amount=1000).driver is None


# =============================================================================
# Details
# =============================================================================


class TestInvoiceDetails:
    def test_detail_returns_value(self) -> None:
        invoice = Invoice(amount=1000, details={"mobile": "09120000000"})

        assert invoice.detail("mobile") == "09120000000"

    def test_missing_detail_is_none(self) -> None:
        assert Invoice(amount=1000).detail("mobile") is None

    def test_details_view_is_read_only(self) -> None:
        invoice = Invoice(amount=1000, details={"mobile": "09120000000"})

        with pytest.raises(TypeError):
            invoice.details["mobile"] = "other"  # type: ignore[index]

    def test_constructor_copies_caller_mapping(self) -> None:
        details = {"mobile": "09120000000"}
        invoice = Invoice(amount=1000, details=details)

        details["mobile"] = "changed"

        assert invoice.detail("mobile") == "09120000000"

    def test_set_detail_is_chainable(self) -> None:
        invoice = Invoice(amount=1000).set_detail("mobile", "0912").set_detail("email", "a@b.c")

        assert dict(invoice.details) == {"mobile": "0912", "email": "a@b.c"}

    def test_set_details_merges(self) -> None:
        invoice = Invoice(amount=1000, details={"mobile": "0912"})

        invoice.set_details({"description": "Order #1"})

        assert dict(invoice.details) == {"mobile": "0912", "description": "Order #1"}

    def test_via_records_driver(self) -> None:
        assert Invoice(amount=1000).via("vandar").driver == "vandar"


# =============================================================================
# Transaction id
# =============================================================================


class TestInvoiceTransactionId:
    def test_assign_sets_transaction_id(self) -> None:
        invoice = Invoice(amount=1000)

        result = invoice.assign_transaction_id("abc123")

        assert result == "abc123"
        assert invoice.transaction_id == "abc123"

    def test_assign_twice_raises(self) -> None:
        invoice = Invoice(amount=1000)
        invoice.assign_transaction_id("abc123")

        with pytest.raises(InvalidStateTransitionError, match="already has transaction id"):
            invoice.assign_transaction_id("def456")

        assert invoice.transaction_id == "abc123"

    def test_assign_empty_token_raises(self) -> None:
        invoice = Invoice(amount=1000)

        with pytest.raises(InvalidTransactionIdError):
            invoice.assign_transaction_id("")

        assert invoice.transaction_id is None

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda invoice: invoice.set_detail("mobile", "0912"),
            lambda invoice: invoice.set_details({"mobile": "0912"}),
            lambda invoice: invoice.via("vandar"),
        ],
    )
    def test_invoice_is_read_only_after_assignment(self, mutate) -> None:
        invoice = Invoice(amount=1000)
        invoice.assign_transaction_id("abc123")

        with pytest.raises(InvalidStateTransitionError, match="cannot be changed"):
            mutate(invoice)


# =============================================================================
# Restore
# =============================================================================


class TestInvoiceRestore:
    def test_restore_keeps_identity_and_transaction(self) -> None:
        original = Invoice(amount=5000, details={"mobile": "0912"}, driver="vandar")
        original.assign_transaction_id("abc123")

        restored = Invoice.restore(
            invoice_id=str(original.id),
            amount=original.amount,
            transaction_id=original.transaction_id,
            details=original.details,
            driver=original.driver,
        )

        assert restored.id == original.id
        assert restored.amount == 5000
        assert restored.transaction_id == "abc123"
        assert restored.detail("mobile") == "0912"
        assert restored.driver == "vandar"

    def test_restore_accepts_invoice_id_object(self) -> None:
        invoice_id = InvoiceId.generate()

        assert Invoice.restore(invoice_id, amount=10).id == invoice_id

    def test_restore_without_transaction_id(self) -> None:
        assert Invoice.restore(InvoiceId.generate(), amount=10).transaction_id is None

    def test_restore_rejects_malformed_id(self) -> None:
        with pytest.raises(InvalidInvoiceIdError):
            Invoice.restore("nope", amount=10)

    def test_restore_rejects_blank_transaction_id(self) -> None:
        with pytest.raises(InvalidTransactionIdError):
            Invoice.restore(InvoiceId.generate(), amount=10, transaction_id="  ")

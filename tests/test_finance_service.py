import pytest

from myfinance.finance_service import (
    FinanceService,
    StorageSaveError,
    TransactionNotFoundError,
)
from myfinance.models import Transaction, parse_date


class MockStorage:
    def __init__(self, transactions=None, fail_save=False, fail_load=False):
        self.transactions = list(transactions) if transactions is not None else []
        self.save_called = False
        self.load_called = False
        self.fail_save = fail_save
        self.fail_load = fail_load

    def save(self, transactions):
        self.save_called = True
        if self.fail_save:
            raise OSError("failed to save")
        self.transactions = list(transactions)

    def load(self):
        self.load_called = True
        if self.fail_load:
            raise OSError("failed to load")
        return list(self.transactions)


def test_add_transaction():
    storage = MockStorage([])
    service = FinanceService(storage)
    initial_next_id = service.next_id
    initial_count = len(service.transactions)
    when = parse_date('"2023-06-15"')
    new = Transaction(description="Test transaction", amount=100.0, type="income", category="Test", date=when)

    result = service.add_transaction(new)

    assert result.id == initial_next_id
    assert service.next_id == initial_next_id + 1
    assert len(service.transactions) == initial_count + 1
    assert storage.save_called
    last = service.transactions[-1]
    assert (last.description, last.amount, last.type, last.category, last.date) == (
        new.description,
        new.amount,
        new.type,
        new.category,
        new.date,
    )


def test_load_transactions():
    storage = MockStorage(
        [
            Transaction(id=1, description="Test 1", amount=100, type="income"),
            Transaction(id=2, description="Test 2", amount=200, type="expense"),
        ]
    )
    service = FinanceService(storage)
    service.load_transactions()
    assert len(service.transactions) == 2
    assert service.next_id == 3
    assert storage.load_called


def test_load_transactions_with_failure():
    storage = MockStorage()
    service = FinanceService(storage)
    service.transactions = [Transaction(id=1)]
    service.next_id = 5
    storage.fail_load = True
    storage.load_called = False

    service.load_transactions()

    assert service.transactions == []
    assert service.next_id == 1
    assert storage.load_called


def test_constructor_with_failing_load_starts_empty():
    service = FinanceService(MockStorage(fail_load=True))
    assert service.transactions == []
    assert service.next_id == 1


def test_transactions_for_user():
    storage = MockStorage(
        [
            Transaction(id=1, user_id=1, description="Salary", amount=3000, type="income"),
            Transaction(id=2, user_id=1, description="Rent", amount=1000, type="expense"),
            Transaction(id=3, user_id=1, description="Groceries", amount=200, type="expense"),
            Transaction(id=4, user_id=2, description="Bonus", amount=500, type="income"),
        ]
    )
    service = FinanceService(storage)
    result = service.transactions_for_user(1)
    assert {t.id: t.description for t in result} == {1: "Salary", 2: "Rent", 3: "Groceries"}
    assert len(result) == 3


def test_balance_for_user():
    storage = MockStorage(
        [
            Transaction(id=1, user_id=1, description="Salary", amount=3000, type="income"),
            Transaction(id=2, user_id=1, description="Rent", amount=1000, type="expense"),
            Transaction(id=3, user_id=1, description="Freelance", amount=500, type="income"),
            Transaction(id=4, user_id=1, description="Groceries", amount=200, type="expense"),
            Transaction(id=5, user_id=2, description="Bonus", amount=1000, type="income"),
        ]
    )
    service = FinanceService(storage)
    assert service.balance_for_user(1) == 2300.0
    assert service.balance_for_user(2) == 1000.0
    assert service.balance_for_user(3) == 0.0


def test_delete_transaction():
    storage = MockStorage(
        [
            Transaction(id=1, description="Test 1", amount=100, type="income"),
            Transaction(id=2, description="Test 2", amount=200, type="expense"),
            Transaction(id=3, description="Test 3", amount=300, type="income"),
        ]
    )
    service = FinanceService(storage)
    service.delete_transaction("2")
    assert len(service.transactions) == 2
    assert all(t.id != 2 for t in service.transactions)
    assert storage.save_called
    assert len(storage.transactions) == 2


def test_delete_non_existent_transaction():
    storage = MockStorage(
        [
            Transaction(id=1, description="Test 1", amount=100, type="income"),
            Transaction(id=2, description="Test 2", amount=200, type="expense"),
        ]
    )
    service = FinanceService(storage)
    with pytest.raises(TransactionNotFoundError, match="transaction not found"):
        service.delete_transaction("3")
    assert len(service.transactions) == 2
    assert not storage.save_called


def test_delete_with_non_numeric_id_finds_nothing():
    storage = MockStorage([Transaction(id=1)])
    service = FinanceService(storage)
    with pytest.raises(TransactionNotFoundError):
        service.delete_transaction("abc")
    assert len(service.transactions) == 1


def test_update_transaction():
    storage = MockStorage(
        [
            Transaction(id=1, description="Test 1", amount=100, type="income"),
            Transaction(id=2, description="Test 2", amount=200, type="expense"),
        ]
    )
    when = parse_date('"2023-06-15"')
    service = FinanceService(storage)
    updated = Transaction(
        description="Updated Test 2", amount=250, type="expense", category="Updated Category", date=when
    )

    service.update_transaction("2", updated)

    assert service.transactions[1] == Transaction(
        id=2,
        description="Updated Test 2",
        amount=250,
        type="expense",
        category="Updated Category",
        date=when,
    )
    assert storage.save_called
    assert len(storage.transactions) == 2


def test_update_non_existent_transaction():
    storage = MockStorage(
        [
            Transaction(id=1, description="Test 1", amount=100, type="income"),
            Transaction(id=2, description="Test 2", amount=200, type="expense"),
        ]
    )
    service = FinanceService(storage)
    updated = Transaction(
        description="Updated Non-existent",
        amount=300,
        type="income",
        category="Test",
        date=parse_date('"2023-06-15"'),
    )
    with pytest.raises(TransactionNotFoundError, match="transaction not found"):
        service.update_transaction("3", updated)
    assert len(service.transactions) == 2
    assert not storage.save_called


def test_save_transactions_with_failure():
    storage = MockStorage()
    service = FinanceService(storage)
    service.transactions = [Transaction(id=1, description="Test", amount=100, type="income")]
    storage.fail_save = True

    with pytest.raises(StorageSaveError, match="Error saving finance transactions"):
        service.save_transactions()
    assert storage.save_called


def test_add_transaction_reports_save_failure():
    storage = MockStorage(fail_save=True)
    service = FinanceService(storage)
    with pytest.raises(StorageSaveError):
        service.add_transaction(Transaction(type="income", amount=10))
    assert storage.save_called
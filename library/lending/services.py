import logging
from contextlib import contextmanager
from datetime import timedelta

from django.db import OperationalError, transaction
from django.utils import timezone

from .conf import lending_setting
from .exceptions import (
    AlreadyBorrowedError,
    AlreadyCanceledError,
    AlreadyReturnedError,
    BookInactiveError,
    BorrowingConflictError,
    ConsistencyError,
    NoCopiesAvailableError,
    UserInactiveError,
)
from .ledger import InventoryLedger
from .models import Book, Loan
from .store import LoanStore

logger = logging.getLogger(__name__)


def require_active(instance, error_class):
    if not instance.is_active:
        raise error_class()


class BorrowingService:
    """Single entry point for every change to loans and copy counts.

    Each operation runs in one transaction: the loan row and the book's
    ``available_copies`` change together or not at all. Race losers and lock
    timeouts come back as ``BorrowingConflictError``.
    """

    def __init__(self, clock=timezone.now, ledger=None, store=None, loan_period=None):
        self.clock = clock
        self.ledger = ledger or InventoryLedger()
        self.store = store or LoanStore(clock=clock)
        self.loan_period = loan_period or timedelta(days=lending_setting('LOAN_PERIOD_DAYS'))

    def borrow(self, user, book):
        with self._atomic('borrow'):
            # Lock and re-read so the checks below see the committed count.
            book = Book.objects.select_for_update().get(pk=book.pk)
            self._check_eligibility(user, book)
            now = self.clock()
            loan = self.store.create(user, book, borrowed_at=now, due_date=now + self.loan_period)
            self.ledger.decrement_available(book)

        logger.info(
            f"Loan {loan.pk}: {user.username} borrowed book {book.pk}, "
            f"{book.available_copies} of {book.total_copies} left"
        )
        return loan

    def return_loan(self, loan):
        with self._atomic('return'):
            loan = self._lock_open_loan(loan)
            loan = self.store.mark_returned(loan, returned_at=self.clock())
            self.ledger.increment_available(loan.book)

        logger.info(f"Loan {loan.pk} returned")
        return loan

    def cancel(self, loan):
        with self._atomic('cancel'):
            loan = self._lock_open_loan(loan)
            loan = self.store.mark_canceled(loan)
            self.ledger.increment_available(loan.book)

        logger.info(f"Loan {loan.pk} canceled")
        return loan

    def _check_eligibility(self, user, book):
        require_active(book, BookInactiveError)
        require_active(user, UserInactiveError)
        if book.available_copies <= 0:
            raise NoCopiesAvailableError()
        if self.store.find_active_by_user_and_book(user, book) is not None:
            raise AlreadyBorrowedError()

    @staticmethod
    def _lock_open_loan(loan):
        loan = Loan.objects.select_for_update().get(pk=loan.pk)
        if loan.canceled:
            raise AlreadyCanceledError()
        if loan.returned_at is not None:
            raise AlreadyReturnedError()
        return loan

    @contextmanager
    def _atomic(self, action):
        try:
            with transaction.atomic():
                yield
        except ConsistencyError as exc:
            logger.warning(f"{action} rolled back after conflict: {exc.message}")
            raise BorrowingConflictError() from exc
        except OperationalError as exc:
            logger.warning(f"{action} rolled back, database busy: {exc}")
            raise BorrowingConflictError(
                'The library records are busy, please retry.'
            ) from exc

from django.db import IntegrityError, transaction
from django.utils import timezone

from .exceptions import (
    AlreadyCanceledError,
    AlreadyReturnedError,
    DuplicateActiveLoanError,
    InvalidDueDateError,
    LendingValidationError,
)
from .models import Loan


class LoanStore:
    """Reads and writes loan rows.

    State transitions are conditional updates on active rows only, so a loan
    can leave the active state exactly once.
    """

    def __init__(self, clock=timezone.now):
        self.clock = clock

    def create(self, user, book, borrowed_at, due_date):
        if borrowed_at is None:
            raise LendingValidationError("Borrowed at can't be blank.")
        if due_date is None or due_date < self.clock():
            raise InvalidDueDateError()
        if due_date < borrowed_at:
            raise InvalidDueDateError("Due date can't be before the borrow date.")
        if self.find_active_by_user_and_book(user, book) is not None:
            raise DuplicateActiveLoanError()

        try:
            # Savepoint keeps the caller's transaction usable after a unique violation.
            with transaction.atomic():
                return Loan.objects.create(
                    user=user,
                    book=book,
                    borrowed_at=borrowed_at,
                    due_date=due_date,
                )
        except IntegrityError as exc:
            if not Loan.objects.active().filter(user=user, book=book).exists():
                raise
            raise DuplicateActiveLoanError() from exc

    def mark_returned(self, loan, returned_at=None):
        returned_at = returned_at or self.clock()
        updated = Loan.objects.active().filter(pk=loan.pk).update(returned_at=returned_at)
        loan.refresh_from_db()
        if not updated:
            self._raise_terminal(loan)
        return loan

    def mark_canceled(self, loan):
        updated = Loan.objects.active().filter(pk=loan.pk).update(canceled=True)
        loan.refresh_from_db()
        if not updated:
            self._raise_terminal(loan)
        return loan

    def find_active_by_user_and_book(self, user, book):
        return Loan.objects.active().filter(user=user, book=book).first()

    def list_active(self):
        return self._with_relations(Loan.objects.active())

    def list_overdue(self, as_of):
        return self._with_relations(Loan.objects.overdue(as_of))

    def list_by_user(self, user):
        return self._with_relations(Loan.objects.filter(user=user))

    @staticmethod
    def _with_relations(queryset):
        return queryset.select_related('user', 'book', 'book__author').order_by('due_date', 'id')

    @staticmethod
    def _raise_terminal(loan):
        if loan.canceled:
            raise AlreadyCanceledError()
        raise AlreadyReturnedError()

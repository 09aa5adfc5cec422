from django.db.models import F

from .exceptions import CopyOverflowError, ExhaustedError
from .models import Book


class InventoryLedger:
    """Per-book copy counters.

    Both operations are a single conditional ``UPDATE`` so the check and the
    write cannot be split by another transaction, and the refreshed count is
    written back onto the instance that was passed in.
    """

    def decrement_available(self, book):
        updated = Book.objects.filter(pk=book.pk, available_copies__gt=0).update(
            available_copies=F('available_copies') - 1
        )
        if not updated:
            raise ExhaustedError(f"No copies of '{book.title}' left to lend.")
        book.refresh_from_db(fields=['available_copies'])
        return book

    def increment_available(self, book):
        updated = Book.objects.filter(
            pk=book.pk, available_copies__lt=F('total_copies')
        ).update(available_copies=F('available_copies') + 1)
        if not updated:
            raise CopyOverflowError(
                f"Available copies of '{book.title}' cannot exceed {book.total_copies}."
            )
        book.refresh_from_db(fields=['available_copies'])
        return book

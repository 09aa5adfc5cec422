from django.utils import timezone

from .conf import lending_setting
from .models import Book, Loan
from .store import LoanStore


def format_due_date(value):
    return timezone.localtime(value).strftime(lending_setting('DUE_DATE_FORMAT'))


class DashboardService:
    """Read-only summaries for the librarian and member dashboards."""

    def __init__(self, clock=timezone.now, store=None):
        self.clock = clock
        self.store = store or LoanStore(clock=clock)

    def librarian_summary(self, now=None):
        now = now or self.clock()
        overdue = self.store.list_overdue(now)
        return {
            'total_books': Book.objects.active().count(),
            'total_borrowed_books': Loan.objects.active().count(),
            'books_due_today': Loan.objects.due_on(timezone.localdate(now)).count(),
            'overdue_borrowings': [
                {
                    'user_name': loan.user.display_name,
                    'book_title': loan.book.title,
                    'due_date': format_due_date(loan.due_date),
                }
                for loan in overdue
            ],
        }

    def member_summary(self, user, now=None):
        now = now or self.clock()
        borrowed = list(self.store.list_active().filter(user=user))
        return {
            'borrowed_books': [self._member_entry(loan) for loan in borrowed],
            'overdue_books': [
                self._member_entry(loan) for loan in borrowed if loan.is_overdue(now)
            ],
        }

    @staticmethod
    def _member_entry(loan):
        return {
            'title': loan.book.title,
            'author': loan.book.author.name,
            'due_date': format_due_date(loan.due_date),
        }

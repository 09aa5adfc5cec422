from datetime import datetime, timedelta, timezone as dt_timezone

from lending.models import Author, Book, Genre, Loan, User

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=dt_timezone.utc)


def fixed_clock(now=NOW):
    return lambda: now


class LendingFixturesMixin:
    """Catalog and user factories shared by the lending tests."""

    def make_user(self, username, role=User.Role.MEMBER, is_active=True, name=''):
        return User.objects.create_user(
            username=username,
            email=f'{username}@example.com',
            password='testpass123',
            role=role,
            is_active=is_active,
            name=name,
        )

    def make_book(self, title='Test Book', total_copies=5, available_copies=None, is_active=True, author=None):
        if not hasattr(self, '_book_seq'):
            self._book_seq = 0
        self._book_seq += 1
        author = author or Author.objects.get_or_create(name='John Doe')[0]
        genre = Genre.objects.get_or_create(name='Fiction')[0]
        return Book.objects.create(
            title=title,
            isbn=f'978000000{self._book_seq:04d}',
            total_copies=total_copies,
            available_copies=available_copies,
            is_active=is_active,
            author=author,
            genre=genre,
        )

    def make_loan(self, user, book, borrowed_at=None, due_date=None, **extra):
        borrowed_at = borrowed_at or NOW - timedelta(days=1)
        due_date = due_date or borrowed_at + timedelta(days=14)
        return Loan.objects.create(user=user, book=book, borrowed_at=borrowed_at, due_date=due_date, **extra)

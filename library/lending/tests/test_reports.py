from datetime import timedelta

from django.test import TestCase

from lending.models import Author, User
from lending.reports import DashboardService, format_due_date

from .fixtures import NOW, LendingFixturesMixin, fixed_clock


class LibrarianSummaryTests(LendingFixturesMixin, TestCase):
    def setUp(self):
        self.reports = DashboardService(clock=fixed_clock())
        self.member = self.make_user('member', name='Mary Member')
        self.books = [self.make_book(title=f'Book {i}') for i in range(5)]
        self.make_book(title='Withdrawn', is_active=False)

        self.make_loan(self.member, self.books[0], borrowed_at=NOW - timedelta(days=10), due_date=NOW + timedelta(days=5))
        self.overdue_late = self.make_loan(
            self.member, self.books[1], borrowed_at=NOW - timedelta(days=15), due_date=NOW - timedelta(days=5)
        )
        self.overdue_early = self.make_loan(
            self.member, self.books[2], borrowed_at=NOW - timedelta(days=20), due_date=NOW - timedelta(days=10)
        )
        self.make_loan(self.member, self.books[3], borrowed_at=NOW - timedelta(days=10), due_date=NOW + timedelta(hours=6))
        # Closed loans past their due date stay out of every count.
        self.make_loan(
            self.member, self.books[4], borrowed_at=NOW - timedelta(days=30), due_date=NOW - timedelta(days=16),
            returned_at=NOW - timedelta(days=1),
        )
        self.make_loan(
            self.member, self.books[4], borrowed_at=NOW - timedelta(days=30), due_date=NOW - timedelta(days=16),
            canceled=True,
        )

    def test_counts_active_books(self):
        self.assertEqual(self.reports.librarian_summary()['total_books'], 5)

    def test_counts_active_loans(self):
        self.assertEqual(self.reports.librarian_summary()['total_borrowed_books'], 4)

    def test_counts_loans_due_today(self):
        self.assertEqual(self.reports.librarian_summary()['books_due_today'], 1)

    def test_lists_overdue_loans_oldest_due_first(self):
        overdue = self.reports.librarian_summary()['overdue_borrowings']
        self.assertEqual(overdue, [
            {'user_name': 'Mary Member', 'book_title': 'Book 2', 'due_date': 'Feb 28, 2026'},
            {'user_name': 'Mary Member', 'book_title': 'Book 1', 'due_date': 'Mar 05, 2026'},
        ])

    def test_explicit_evaluation_time(self):
        later = NOW + timedelta(days=6)
        overdue = self.reports.librarian_summary(now=later)['overdue_borrowings']
        self.assertEqual([row['book_title'] for row in overdue], ['Book 2', 'Book 1', 'Book 3', 'Book 0'])

    def test_user_without_name_falls_back_to_username(self):
        anonymous = User.objects.create_user(username='no_name', password='testpass123')
        book = self.make_book(title='Nameless')
        self.make_loan(anonymous, book, borrowed_at=NOW - timedelta(days=30), due_date=NOW - timedelta(days=20))
        overdue = self.reports.librarian_summary()['overdue_borrowings']
        self.assertEqual(overdue[0]['user_name'], 'no_name')


class MemberSummaryTests(LendingFixturesMixin, TestCase):
    def setUp(self):
        self.reports = DashboardService(clock=fixed_clock())
        self.member = self.make_user('reader')
        other = self.make_user('other')
        author = Author.objects.create(name='Jane Author')

        self.make_loan(self.member, self.make_book(title='Book 1', author=author), due_date=NOW + timedelta(weeks=1))
        self.make_loan(self.member, self.make_book(title='Book 2', author=author), due_date=NOW + timedelta(days=2))
        self.make_loan(
            self.member, self.make_book(title='Overdue Book', author=author),
            borrowed_at=NOW - timedelta(days=15), due_date=NOW - timedelta(days=1),
        )
        self.make_loan(self.member, self.make_book(title='Returned Book'), returned_at=NOW)
        self.make_loan(self.member, self.make_book(title='Canceled Book'), canceled=True)
        self.make_loan(other, self.make_book(title='Not Mine'))

    def test_lists_only_own_active_loans(self):
        data = self.reports.member_summary(self.member)
        titles = [entry['title'] for entry in data['borrowed_books']]
        self.assertEqual(titles, ['Overdue Book', 'Book 2', 'Book 1'])

    def test_lists_overdue_subset(self):
        data = self.reports.member_summary(self.member)
        self.assertEqual(data['overdue_books'], [
            {'title': 'Overdue Book', 'author': 'Jane Author', 'due_date': 'Mar 09, 2026'},
        ])

    def test_due_date_format(self):
        self.assertEqual(format_due_date(NOW), 'Mar 10, 2026')

from django.contrib.auth.models import AbstractUser
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q


class ActiveQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)


class Activatable(models.Model):
    """Soft-delete flag shared by catalog records."""

    is_active = models.BooleanField(default=True)

    objects = ActiveQuerySet.as_manager()

    class Meta:
        abstract = True

    def deactivate(self):
        self.is_active = False
        self.save(update_fields=['is_active'])

    def activate(self):
        self.is_active = True
        self.save(update_fields=['is_active'])


class User(AbstractUser):
    class Role(models.TextChoices):
        LIBRARIAN = 'librarian', 'Librarian'
        MEMBER = 'member', 'Member'

    name = models.CharField(max_length=150, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.MEMBER)

    @property
    def display_name(self):
        return self.name or self.username

    @property
    def is_librarian(self):
        return self.role == self.Role.LIBRARIAN

    @property
    def is_member(self):
        return self.role == self.Role.MEMBER

    def __str__(self):
        return self.username


class Author(Activatable):
    name = models.CharField(max_length=100, unique=True)
    bio = models.TextField(blank=True)

    def __str__(self):
        return self.name


class Genre(Activatable):
    name = models.CharField(max_length=50, unique=True)

    def __str__(self):
        return self.name


class Book(Activatable):
    title = models.CharField(max_length=200)
    isbn = models.CharField(max_length=20, unique=True)
    description = models.TextField(blank=True)
    total_copies = models.PositiveIntegerField()
    available_copies = models.PositiveIntegerField(blank=True)
    author = models.ForeignKey(Author, on_delete=models.PROTECT, related_name='books')
    genre = models.ForeignKey(Genre, on_delete=models.PROTECT, related_name='books')

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=Q(available_copies__lte=F('total_copies')),
                name='available_copies_within_total',
            ),
        ]

    def clean(self):
        if self.available_copies is not None and self.available_copies > self.total_copies:
            raise ValidationError("Available copies cannot exceed total copies.")

    def save(self, *args, **kwargs):
        if self._state.adding and self.available_copies is None:
            self.available_copies = self.total_copies
        super().save(*args, **kwargs)

    def __str__(self):
        return self.title


class LoanQuerySet(models.QuerySet):
    def active(self):
        return self.filter(returned_at__isnull=True, canceled=False)

    def returned(self):
        return self.filter(returned_at__isnull=False)

    def canceled(self):
        return self.filter(canceled=True)

    def overdue(self, as_of):
        return self.active().filter(due_date__lt=as_of)

    def due_on(self, day):
        return self.active().filter(due_date__date=day)


class Loan(models.Model):
    class Status(models.TextChoices):
        ACTIVE = 'active', 'Active'
        RETURNED = 'returned', 'Returned'
        CANCELED = 'canceled', 'Canceled'

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='loans')
    book = models.ForeignKey(Book, on_delete=models.CASCADE, related_name='loans')
    borrowed_at = models.DateTimeField()
    due_date = models.DateTimeField()
    returned_at = models.DateTimeField(null=True, blank=True)
    canceled = models.BooleanField(default=False)

    objects = LoanQuerySet.as_manager()

    class Meta:
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'book'],
                condition=Q(returned_at__isnull=True, canceled=False),
                name='unique_active_loan_per_user_book',
            ),
            models.CheckConstraint(
                condition=Q(due_date__gte=F('borrowed_at')),
                name='due_date_after_borrowed_at',
            ),
            models.CheckConstraint(
                condition=~Q(canceled=True, returned_at__isnull=False),
                name='loan_not_both_returned_and_canceled',
            ),
        ]

    @property
    def status(self):
        if self.canceled:
            return self.Status.CANCELED
        if self.returned_at is not None:
            return self.Status.RETURNED
        return self.Status.ACTIVE

    @property
    def is_active(self):
        return self.status == self.Status.ACTIVE

    def is_overdue(self, as_of):
        return self.is_active and self.due_date < as_of

    def __str__(self):
        return f"{self.user.username} borrowed {self.book.title}"

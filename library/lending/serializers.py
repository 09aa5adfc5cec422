from rest_framework import serializers

from .models import Author, Book, Genre, Loan
from .services import BorrowingService


class AuthorSerializer(serializers.ModelSerializer):
    class Meta:
        model = Author
        fields = ['id', 'name']


class GenreSerializer(serializers.ModelSerializer):
    class Meta:
        model = Genre
        fields = ['id', 'name']


class BookSerializer(serializers.ModelSerializer):
    author = AuthorSerializer(read_only=True)
    genre = GenreSerializer(read_only=True)

    class Meta:
        model = Book
        fields = ['id', 'title', 'isbn', 'total_copies', 'available_copies', 'is_active', 'author', 'genre']
        read_only_fields = ['title', 'isbn', 'total_copies', 'available_copies', 'is_active']


class LoanSerializer(serializers.ModelSerializer):
    user = serializers.StringRelatedField(read_only=True)
    book = BookSerializer(read_only=True)
    book_id = serializers.PrimaryKeyRelatedField(queryset=Book.objects.all(), source='book', write_only=True)
    status = serializers.CharField(read_only=True)

    class Meta:
        model = Loan
        fields = ['id', 'user', 'book', 'book_id', 'borrowed_at', 'due_date', 'returned_at', 'canceled', 'status']
        read_only_fields = ['borrowed_at', 'due_date', 'returned_at', 'canceled']

    def create(self, validated_data):
        if 'request' not in self.context:
            raise serializers.ValidationError("Request context is required.")
        service = self.context.get('service') or BorrowingService()
        return service.borrow(self.context['request'].user, validated_data['book'])


class LoanActionSerializer(serializers.Serializer):
    """Base for librarian actions addressed by ``loan_id``."""

    loan_id = serializers.IntegerField()

    def validate_loan_id(self, value):
        if not Loan.objects.filter(pk=value).exists():
            raise serializers.ValidationError("Invalid borrow record.")
        return value

    def perform(self, service, loan):
        """Apply the action through ``service``; subclasses must override."""
        raise NotImplementedError

    def save(self):
        service = self.context.get('service') or BorrowingService()
        loan = Loan.objects.get(pk=self.validated_data['loan_id'])
        self.instance = self.perform(service, loan)
        return self.instance

    def to_representation(self, instance):
        return LoanSerializer(instance, context=self.context).data


class ReturnSerializer(LoanActionSerializer):
    def perform(self, service, loan):
        return service.return_loan(loan)


class CancelSerializer(LoanActionSerializer):
    def perform(self, service, loan):
        return service.cancel(loan)


class OverdueBorrowingSerializer(serializers.Serializer):
    user_name = serializers.CharField()
    book_title = serializers.CharField()
    due_date = serializers.CharField()


class LibrarianDashboardSerializer(serializers.Serializer):
    total_books = serializers.IntegerField()
    total_borrowed_books = serializers.IntegerField()
    books_due_today = serializers.IntegerField()
    overdue_borrowings = OverdueBorrowingSerializer(many=True)


class MemberBookSerializer(serializers.Serializer):
    title = serializers.CharField()
    author = serializers.CharField()
    due_date = serializers.CharField()


class MemberDashboardSerializer(serializers.Serializer):
    borrowed_books = MemberBookSerializer(many=True)
    overdue_books = MemberBookSerializer(many=True)

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import Author, Book, Genre, Loan, User


@admin.register(User)
class LibraryUserAdmin(UserAdmin):
    fieldsets = UserAdmin.fieldsets + (("Library", {"fields": ("name", "role")}),)
    list_display = ("username", "name", "role", "is_active")


admin.site.register(Author)
admin.site.register(Genre)


@admin.register(Book)
class BookAdmin(admin.ModelAdmin):
    list_display = ("title", "isbn", "total_copies", "available_copies", "is_active")
    readonly_fields = ("available_copies",)


@admin.register(Loan)
class LoanAdmin(admin.ModelAdmin):
    list_display = ("user", "book", "borrowed_at", "due_date", "returned_at", "canceled")
    readonly_fields = ("user", "book", "borrowed_at", "due_date", "returned_at", "canceled")

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

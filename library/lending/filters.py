import django_filters

from .models import Loan


class LoanFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Loan.Status.choices, method='filter_status')

    class Meta:
        model = Loan
        fields = ['user', 'book']

    def filter_status(self, queryset, name, value):
        if value == Loan.Status.ACTIVE:
            return queryset.active()
        if value == Loan.Status.RETURNED:
            return queryset.returned()
        return queryset.canceled()

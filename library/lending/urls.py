from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from .views import CancelView, LibrarianDashboardView, LoanListCreateView, MemberDashboardView, MyLoanListView, ReturnView

urlpatterns = [
    path('login/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('loans/', LoanListCreateView.as_view(), name='loan_list'),
    path('loans/mine/', MyLoanListView.as_view(), name='my_loans'),
    path('loans/return/', ReturnView.as_view(), name='loan_return'),
    path('loans/cancel/', CancelView.as_view(), name='loan_cancel'),
    path('dashboards/librarian/', LibrarianDashboardView.as_view(), name='librarian_dashboard'),
    path('dashboards/member/', MemberDashboardView.as_view(), name='member_dashboard'),
]

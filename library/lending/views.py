from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg.utils import swagger_auto_schema
from rest_framework import generics
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .filters import LoanFilter
from .models import Loan
from .permissions import IsLibrarian, IsLibrarianForListMemberForCreate, IsMember
from .reports import DashboardService
from .serializers import (
    CancelSerializer,
    LibrarianDashboardSerializer,
    LoanSerializer,
    MemberDashboardSerializer,
    ReturnSerializer,
)


class LoanListCreateView(generics.ListCreateAPIView):
    queryset = Loan.objects.select_related('user', 'book', 'book__author', 'book__genre')
    serializer_class = LoanSerializer
    permission_classes = [IsLibrarianForListMemberForCreate]
    filter_backends = [DjangoFilterBackend]
    filterset_class = LoanFilter


class MyLoanListView(generics.ListAPIView):
    serializer_class = LoanSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        if getattr(self, 'swagger_fake_view', False):
            return Loan.objects.none()
        return Loan.objects.filter(user=self.request.user).select_related('book', 'book__author', 'book__genre')


class LoanActionView(generics.GenericAPIView):
    permission_classes = [IsLibrarian]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)


class ReturnView(LoanActionView):
    serializer_class = ReturnSerializer

    @swagger_auto_schema(request_body=ReturnSerializer, responses={200: LoanSerializer})
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class CancelView(LoanActionView):
    serializer_class = CancelSerializer

    @swagger_auto_schema(request_body=CancelSerializer, responses={200: LoanSerializer})
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class LibrarianDashboardView(APIView):
    permission_classes = [IsLibrarian]

    @swagger_auto_schema(responses={200: LibrarianDashboardSerializer})
    def get(self, request):
        data = DashboardService().librarian_summary()
        return Response(LibrarianDashboardSerializer(data).data)


class MemberDashboardView(APIView):
    permission_classes = [IsMember]

    @swagger_auto_schema(responses={200: MemberDashboardSerializer})
    def get(self, request):
        data = DashboardService().member_summary(request.user)
        return Response(MemberDashboardSerializer(data).data)

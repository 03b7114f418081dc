"""
Accounting views.

Transactions are readable by all staff and written by admins; payments and
payment plans are handled by any staff role; expenses and reports are
admin only.
"""
from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from utils.permissions import IsAdminOrReadOnly, IsSystemAdmin
from utils.response import success_response, paginated_response
from . import services
from .models import Expense, PatientPayment, PaymentPlan, Transaction
from .serializers import (
    DateRangeQuerySerializer,
    ExpenseSerializer,
    InstallmentSerializer,
    MonthQuerySerializer,
    PatientPaymentSerializer,
    PaymentPlanCreateSerializer,
    PaymentPlanSerializer,
    PaymentPlanUpdateSerializer,
    RecordPaymentSerializer,
    TransactionSerializer,
)


class TransactionViewSet(mixins.ListModelMixin,
                         mixins.RetrieveModelMixin,
                         mixins.CreateModelMixin,
                         mixins.DestroyModelMixin,
                         viewsets.GenericViewSet):
    queryset = Transaction.objects.alive()
    serializer_class = TransactionSerializer
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]

    def list(self, request, *args, **kwargs):
        return paginated_response(services.filter_transactions(request.query_params), TransactionSerializer, request)

    def retrieve(self, request, *args, **kwargs):
        return success_response(TransactionSerializer(services.get_transaction(kwargs['pk'])).data)

    def create(self, request, *args, **kwargs):
        serializer = TransactionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = services.create_transaction(dict(serializer.validated_data), created_by=request.user)
        return success_response(TransactionSerializer(entry).data, 'Transaction created', 201)

    def destroy(self, request, *args, **kwargs):
        services.delete_transaction(kwargs['pk'])
        return success_response(message='Transaction deleted')


class PatientPaymentViewSet(mixins.RetrieveModelMixin,
                            mixins.CreateModelMixin,
                            viewsets.GenericViewSet):
    queryset = PatientPayment.objects.all()
    serializer_class = PatientPaymentSerializer

    def retrieve(self, request, *args, **kwargs):
        return success_response(PatientPaymentSerializer(services.get_payment(kwargs['pk'])).data)

    def create(self, request, *args, **kwargs):
        serializer = PatientPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payment = services.create_patient_payment(dict(serializer.validated_data), created_by=request.user)
        return success_response(PatientPaymentSerializer(payment).data, 'Payment registered', 201)

    @action(detail=False, methods=['get'], url_path=r'patient/(?P<patient_id>\d+)')
    def by_patient(self, request, patient_id=None):
        return success_response(
            PatientPaymentSerializer(services.list_patient_payments(patient_id), many=True).data
        )


class PaymentPlanViewSet(mixins.RetrieveModelMixin,
                         mixins.CreateModelMixin,
                         mixins.UpdateModelMixin,
                         viewsets.GenericViewSet):
    queryset = PaymentPlan.objects.all()
    serializer_class = PaymentPlanSerializer

    def retrieve(self, request, *args, **kwargs):
        return success_response(PaymentPlanSerializer(services.get_payment_plan(kwargs['pk'])).data)

    def create(self, request, *args, **kwargs):
        serializer = PaymentPlanCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        plan = services.create_payment_plan(serializer.validated_data, created_by=request.user)
        return success_response(PaymentPlanSerializer(plan).data, 'Payment plan created', 201)

    def update(self, request, *args, **kwargs):
        serializer = PaymentPlanUpdateSerializer(data=request.data, partial=kwargs.pop('partial', False))
        serializer.is_valid(raise_exception=True)
        plan = services.update_payment_plan(kwargs['pk'], serializer.validated_data)
        return success_response(PaymentPlanSerializer(plan).data, 'Payment plan updated')

    @action(detail=False, methods=['get'], url_path=r'patient/(?P<patient_id>\d+)')
    def by_patient(self, request, patient_id=None):
        return success_response(PaymentPlanSerializer(services.list_payment_plans(patient_id), many=True).data)

    @action(detail=True, methods=['post'])
    def payments(self, request, pk=None):
        serializer = RecordPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.record_payment(pk, serializer.validated_data, created_by=request.user)
        return success_response({
            'payment': PatientPaymentSerializer(result['payment']).data,
            'installment': InstallmentSerializer(result['installment']).data,
            'updated_balance': result['updated_balance'],
            'plan_status': result['plan_status'],
        }, 'Payment recorded', 201)

    @action(detail=True, methods=['get'])
    def installments(self, request, pk=None):
        return success_response(InstallmentSerializer(services.list_installments(pk), many=True).data)

    @action(detail=False, methods=['get'], url_path='installments/overdue')
    def overdue_installments(self, request):
        return success_response(InstallmentSerializer(services.overdue_installments(), many=True).data)


class ExpenseViewSet(viewsets.ModelViewSet):
    queryset = Expense.objects.alive()
    serializer_class = ExpenseSerializer
    permission_classes = [IsAuthenticated, IsSystemAdmin]

    def list(self, request, *args, **kwargs):
        return paginated_response(services.filter_expenses(request.query_params), ExpenseSerializer, request)

    def retrieve(self, request, *args, **kwargs):
        return success_response(ExpenseSerializer(services.get_expense(kwargs['pk'])).data)

    def create(self, request, *args, **kwargs):
        serializer = ExpenseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        expense = services.create_expense(dict(serializer.validated_data), created_by=request.user)
        return success_response(ExpenseSerializer(expense).data, 'Expense created', 201)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = ExpenseSerializer(services.get_expense(kwargs['pk']), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        expense = services.update_expense(kwargs['pk'], serializer.validated_data)
        return success_response(ExpenseSerializer(expense).data, 'Expense updated')

    def destroy(self, request, *args, **kwargs):
        services.delete_expense(kwargs['pk'])
        return success_response(message='Expense deleted')

    @action(detail=False, methods=['get'], url_path=r'category/(?P<category>[a-z]+)')
    def by_category(self, request, category=None):
        return success_response(ExpenseSerializer(services.expenses_by_category(category), many=True).data)


class ReportAPIView(APIView):
    permission_classes = [IsAuthenticated, IsSystemAdmin]


class MonthlyBalanceView(ReportAPIView):
    """GET /accounting/reports/monthly-balance/?month=&year="""

    def get(self, request):
        query = MonthQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return success_response(services.monthly_balance(query.validated_data['month'],
                                                         query.validated_data['year']))


class CashFlowView(ReportAPIView):
    """GET /accounting/reports/cash-flow/?start_date=&end_date="""

    def get(self, request):
        query = DateRangeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return success_response(services.cash_flow(query.validated_data['start_date'],
                                                   query.validated_data['end_date']))


class AccountsReceivableView(ReportAPIView):

    def get(self, request):
        return success_response(services.accounts_receivable())


class IncomeByTreatmentView(ReportAPIView):

    def get(self, request):
        return success_response(services.income_by_treatment())


class FinancialReportView(ReportAPIView):
    """GET /accounting/reports/financial/?month=&year="""

    def get(self, request):
        query = MonthQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return success_response(services.financial_report(query.validated_data['month'],
                                                          query.validated_data['year']))

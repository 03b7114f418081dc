from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import (
    AccountsReceivableView,
    CashFlowView,
    ExpenseViewSet,
    FinancialReportView,
    IncomeByTreatmentView,
    MonthlyBalanceView,
    PatientPaymentViewSet,
    PaymentPlanViewSet,
    TransactionViewSet,
)

router = DefaultRouter()
router.register(r'transactions', TransactionViewSet, basename='transaction')
router.register(r'payments', PatientPaymentViewSet, basename='patient_payment')
router.register(r'payment-plans', PaymentPlanViewSet, basename='payment_plan')
router.register(r'expenses', ExpenseViewSet, basename='expense')

urlpatterns = [
    path('', include(router.urls)),
    path('reports/monthly-balance/', MonthlyBalanceView.as_view(), name='monthly_balance'),
    path('reports/cash-flow/', CashFlowView.as_view(), name='cash_flow'),
    path('reports/accounts-receivable/', AccountsReceivableView.as_view(), name='accounts_receivable'),
    path('reports/income-by-treatment/', IncomeByTreatmentView.as_view(), name='income_by_treatment'),
    path('reports/financial/', FinancialReportView.as_view(), name='financial_report'),
    # GET|POST /accounting/transactions/ ; GET|DELETE /accounting/transactions/{id}/
    # POST /accounting/payments/ ; GET /accounting/payments/{id}/ ; GET /accounting/payments/patient/{id}/
    # POST /accounting/payment-plans/ ; GET|PUT|PATCH /accounting/payment-plans/{id}/
    # GET /accounting/payment-plans/patient/{id}/ ; GET /accounting/payment-plans/installments/overdue/
    # POST /accounting/payment-plans/{id}/payments/ ; GET /accounting/payment-plans/{id}/installments/
    # /accounting/expenses/ CRUD ; GET /accounting/expenses/category/{category}/
]

from django.contrib import admin
from .models import Expense, Installment, PatientPayment, PaymentPlan, Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ['id', 'date', 'type', 'amount', 'category', 'patient', 'deleted_at']
    list_filter = ['type', 'category']
    search_fields = ['description', 'invoice_number']
    date_hierarchy = 'date'


@admin.register(PatientPayment)
class PatientPaymentAdmin(admin.ModelAdmin):
    list_display = ['id', 'date', 'patient', 'amount', 'payment_method', 'concept']
    list_filter = ['payment_method']


class InstallmentInline(admin.TabularInline):
    model = Installment
    extra = 0


@admin.register(PaymentPlan)
class PaymentPlanAdmin(admin.ModelAdmin):
    list_display = ['id', 'patient', 'total_amount', 'total_installments', 'balance', 'frequency', 'status']
    list_filter = ['status', 'frequency']
    inlines = [InstallmentInline]


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ['id', 'date', 'category', 'amount', 'supplier', 'recurring', 'deleted_at']
    list_filter = ['category', 'recurring']
    search_fields = ['description', 'supplier', 'invoice_number']

"""
Accounting business rules.

Every patient payment and every expense also writes a ledger Transaction, so
the reports read the ledger alone.
"""
import logging
from collections import OrderedDict
from datetime import date, timedelta
from decimal import Decimal, ROUND_DOWN

from django.conf import settings
from django.db import transaction as db_transaction
from django.db.models import Count, Min, Sum
from django.utils import timezone

from appointments.services import coerce_date
from medical.models import Treatment
from patients import services as patient_services
from utils.exceptions import BadRequest, NotFound
from .models import Expense, Installment, PatientPayment, PaymentPlan, Transaction

logger = logging.getLogger(__name__)
business_logger = logging.getLogger('business')

CENT = Decimal('0.01')
ZERO = Decimal('0.00')


def _money(value):
    return (value or ZERO).quantize(CENT)


def _check_positive(amount, message='Amount must be positive'):
    if amount is None or amount <= 0:
        raise BadRequest(message)


def _date_range(qs, params, field='date'):
    if params.get('start_date'):
        qs = qs.filter(**{f'{field}__gte': coerce_date(params['start_date'], 'start_date')})
    if params.get('end_date'):
        qs = qs.filter(**{f'{field}__lte': coerce_date(params['end_date'], 'end_date')})
    return qs


# transactions

def get_transaction(transaction_id):
    entry = Transaction.objects.alive().select_related('patient').filter(pk=transaction_id).first()
    if entry is None:
        raise NotFound('Transaction not found')
    return entry


def filter_transactions(params):
    """List filters: type, category, patient_id, start_date, end_date"""
    qs = Transaction.objects.alive().select_related('patient')
    if params.get('type'):
        qs = qs.filter(type=params['type'])
    if params.get('category'):
        qs = qs.filter(category__iexact=params['category'])
    if params.get('patient_id'):
        qs = qs.filter(patient_id=params['patient_id'])
    return _date_range(qs, params)


def create_transaction(data, created_by=None):
    _check_positive(data.get('amount'))
    patient_id = data.pop('patient_id', None)
    if patient_id is not None:
        data['patient'] = patient_services.get_patient(patient_id)
    data.setdefault('date', timezone.localdate())
    entry = Transaction.objects.create(created_by=created_by, **data)
    business_logger.info('transaction_created', extra={
        'transaction_id': entry.pk,
        'type': entry.type,
        'amount': str(entry.amount),
    })
    return entry


def delete_transaction(transaction_id):
    entry = get_transaction(transaction_id)
    entry.soft_delete()
    logger.info('Transaction %s deleted', transaction_id)


# patient payments

def get_payment(payment_id):
    payment = PatientPayment.objects.select_related('patient', 'treatment').filter(pk=payment_id).first()
    if payment is None:
        raise NotFound('Payment not found')
    return payment


def list_patient_payments(patient_id):
    patient_services.get_patient(patient_id)
    return PatientPayment.objects.select_related('treatment').filter(patient_id=patient_id)


def _apply_to_treatment(treatment, amount):
    treatment.paid = min(treatment.cost, treatment.paid + amount)
    treatment.save(update_fields=['paid', 'updated_at'])


def create_patient_payment(data, created_by=None):
    amount = data.get('amount')
    _check_positive(amount)
    patient = patient_services.get_patient(data.pop('patient_id'))

    treatment = None
    treatment_id = data.pop('treatment_id', None)
    if treatment_id is not None:
        treatment = Treatment.objects.filter(pk=treatment_id, patient=patient).first()
        if treatment is None:
            raise NotFound('Treatment not found')
        if amount > treatment.balance:
            raise BadRequest(f'Payment amount ({amount}) exceeds treatment balance ({treatment.balance})')

    data.setdefault('date', timezone.localdate())
    with db_transaction.atomic():
        payment = PatientPayment.objects.create(patient=patient, treatment=treatment, created_by=created_by, **data)
        if treatment is not None:
            _apply_to_treatment(treatment, amount)
        Transaction.objects.create(
            date=payment.date,
            type=Transaction.TYPE_INCOME,
            amount=amount,
            description=f'Payment: {payment.concept}',
            category='Patient Payment',
            payment_method=payment.payment_method,
            patient=patient,
            appointment_id=payment.appointment_id,
            created_by=created_by,
        )
    business_logger.info('payment_recorded', extra={
        'payment_id': payment.pk,
        'patient_id': patient.pk,
        'amount': str(amount),
    })
    return payment


# payment plans

def calculate_installments(total_amount, total_installments, first_due_date, frequency):
    """
    Split total_amount into equal installments floored to the cent; the last
    one takes whatever is left so the sum is exact.
    """
    total_amount = Decimal(total_amount)
    base = (total_amount / total_installments).quantize(CENT, rounding=ROUND_DOWN)
    interval = PaymentPlan.INTERVAL_DAYS[frequency]
    installments = []
    remaining = total_amount
    for number in range(1, total_installments + 1):
        amount = remaining if number == total_installments else base
        remaining -= amount
        installments.append({
            'number': number,
            'amount': amount.quantize(CENT),
            'due_date': first_due_date + timedelta(days=(number - 1) * interval),
        })
    return installments


def get_payment_plan(plan_id):
    plan = PaymentPlan.objects.select_related('patient', 'treatment').prefetch_related('installments') \
        .filter(pk=plan_id).first()
    if plan is None:
        raise NotFound('Payment plan not found')
    return plan


def list_payment_plans(patient_id):
    patient_services.get_patient(patient_id)
    return PaymentPlan.objects.prefetch_related('installments').filter(patient_id=patient_id)


def create_payment_plan(data, created_by=None):
    total = data['total_amount']
    count = data['total_installments']
    _check_positive(total, 'Total amount must be positive')
    max_installments = settings.CLINIC['MAX_INSTALLMENTS']
    if count < 1 or count > max_installments:
        raise BadRequest(f'Total installments must be between 1 and {max_installments}')

    patient = patient_services.get_patient(data['patient_id'])
    treatment = Treatment.objects.filter(pk=data['treatment_id'], patient=patient).first()
    if treatment is None:
        raise NotFound('Treatment not found')
    if data['start_date'] < timezone.localdate():
        raise BadRequest('First due date cannot be in the past')

    schedule = calculate_installments(total, count, data['start_date'], data['frequency'])
    if sum(item['amount'] for item in schedule) != total:
        raise BadRequest('Installment amounts do not add up to the total')

    with db_transaction.atomic():
        plan = PaymentPlan.objects.create(
            patient=patient,
            treatment=treatment,
            total_amount=total,
            total_installments=count,
            installment_amount=schedule[0]['amount'],
            balance=total,
            frequency=data['frequency'],
            start_date=data['start_date'],
            notes=data.get('notes'),
            created_by=created_by,
        )
        Installment.objects.bulk_create([Installment(payment_plan=plan, **item) for item in schedule])
    business_logger.info('payment_plan_created', extra={
        'payment_plan_id': plan.pk,
        'patient_id': patient.pk,
        'total_amount': str(total),
        'installments': count,
    })
    return get_payment_plan(plan.pk)


def update_payment_plan(plan_id, data):
    plan = get_payment_plan(plan_id)
    for name, value in data.items():
        setattr(plan, name, value)
    plan.save()
    return plan


def _settle_installments(plan, day):
    """Mark paid every installment the cumulative plan payments cover, in order"""
    running = ZERO
    for item in plan.installments.order_by('number'):
        running += item.amount
        if running > plan.paid_amount:
            break
        if item.status in Installment.UNPAID_STATUSES:
            item.status = Installment.STATUS_PAID
            item.paid_date = day
            item.save(update_fields=['status', 'paid_date'])


def record_payment(plan_id, data, created_by=None):
    """Record a payment against the next unpaid installment; any excess carries over to the following ones"""
    amount = data.get('amount')
    _check_positive(amount, 'Payment amount must be positive')

    with db_transaction.atomic():
        plan = PaymentPlan.objects.select_for_update().filter(pk=plan_id).first()
        if plan is None:
            raise NotFound('Payment plan not found')
        if plan.status != PaymentPlan.STATUS_ACTIVE:
            raise BadRequest(f'Payment plan is {plan.status}')
        if amount > plan.balance:
            raise BadRequest(f'Payment amount ({amount}) exceeds remaining balance ({plan.balance})')
        installment = plan.installments.filter(status__in=Installment.UNPAID_STATUSES).order_by('number').first()
        if installment is None:
            raise BadRequest('No pending installments found')

        day = data.get('date') or timezone.localdate()
        payment = PatientPayment.objects.create(
            patient_id=plan.patient_id,
            treatment_id=plan.treatment_id,
            installment=installment,
            amount=amount,
            payment_method=data['payment_method'],
            date=day,
            concept=f'Payment for installment #{installment.number}',
            notes=data.get('notes'),
            receipt_number=data.get('receipt_number'),
            created_by=created_by,
        )

        plan.paid_amount += amount
        plan.balance = max(ZERO, plan.balance - amount)
        if plan.balance == ZERO:
            plan.status = PaymentPlan.STATUS_COMPLETED
        plan.save(update_fields=['paid_amount', 'balance', 'status', 'updated_at'])

        _settle_installments(plan, day)
        installment.refresh_from_db()

        _apply_to_treatment(plan.treatment, amount)
        Transaction.objects.create(
            date=day,
            type=Transaction.TYPE_INCOME,
            amount=amount,
            description=f'Payment plan installment #{installment.number}',
            category='Payment Plan',
            payment_method=data['payment_method'],
            patient_id=plan.patient_id,
            created_by=created_by,
        )

    business_logger.info('payment_recorded', extra={
        'payment_plan_id': plan.pk,
        'installment_number': installment.number,
        'amount': str(amount),
    })
    return {
        'payment': payment,
        'installment': installment,
        'updated_balance': plan.balance,
        'plan_status': plan.status,
    }


def list_installments(plan_id):
    plan = get_payment_plan(plan_id)
    return plan.installments.order_by('number')


def overdue_installments():
    """Flag pending installments past their due date and return every overdue one"""
    today = timezone.localdate()
    flagged = Installment.objects.filter(status=Installment.STATUS_PENDING, due_date__lt=today,
                                         payment_plan__status=PaymentPlan.STATUS_ACTIVE) \
        .update(status=Installment.STATUS_OVERDUE)
    if flagged:
        logger.info('%s installments marked overdue', flagged)
    return Installment.objects.select_related('payment_plan__patient') \
        .filter(status=Installment.STATUS_OVERDUE).order_by('due_date')


# expenses

def get_expense(expense_id):
    expense = Expense.objects.alive().filter(pk=expense_id).first()
    if expense is None:
        raise NotFound('Expense not found')
    return expense


def filter_expenses(params):
    """List filters: category, start_date, end_date, recurring"""
    qs = Expense.objects.alive()
    if params.get('category'):
        qs = qs.filter(category=params['category'])
    if params.get('recurring') in ('true', 'false'):
        qs = qs.filter(recurring=params['recurring'] == 'true')
    return _date_range(qs, params)


def _expense_description(expense):
    return f'{expense.get_category_display()}: {expense.description}'


def create_expense(data, created_by=None):
    _check_positive(data.get('amount'))
    data.setdefault('date', timezone.localdate())
    with db_transaction.atomic():
        expense = Expense(created_by=created_by, **data)
        expense.transaction = Transaction.objects.create(
            date=expense.date,
            type=Transaction.TYPE_EXPENSE,
            amount=expense.amount,
            description=_expense_description(expense),
            category=expense.category,
            payment_method=expense.payment_method,
            invoice_number=expense.invoice_number,
            created_by=created_by,
        )
        expense.save()
    business_logger.info('expense_created', extra={
        'expense_id': expense.pk,
        'category': expense.category,
        'amount': str(expense.amount),
    })
    return expense


def update_expense(expense_id, data):
    expense = get_expense(expense_id)
    if 'amount' in data:
        _check_positive(data['amount'])
    for name, value in data.items():
        setattr(expense, name, value)
    with db_transaction.atomic():
        expense.save()
        if expense.transaction_id:
            Transaction.objects.filter(pk=expense.transaction_id).update(
                date=expense.date,
                amount=expense.amount,
                description=_expense_description(expense),
                category=expense.category,
                payment_method=expense.payment_method,
                invoice_number=expense.invoice_number,
            )
    return expense


def delete_expense(expense_id):
    expense = get_expense(expense_id)
    with db_transaction.atomic():
        expense.soft_delete()
        if expense.transaction_id:
            Transaction.objects.filter(pk=expense.transaction_id).update(deleted_at=expense.deleted_at)
    logger.info('Expense %s deleted', expense_id)


def expenses_by_category(category):
    if category not in dict(Expense.CATEGORY_CHOICES):
        raise BadRequest('Invalid expense category')
    return Expense.objects.alive().filter(category=category)


# reports

def _month_bounds(month, year):
    if month < 1 or month > 12:
        raise BadRequest('Month must be between 1 and 12')
    if year < 2000 or year > 2100:
        raise BadRequest('Year must be between 2000 and 2100')
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end - timedelta(days=1)


def monthly_balance(month, year):
    start, end = _month_bounds(month, year)
    ledger = Transaction.objects.alive().filter(date__gte=start, date__lte=end)
    totals = {row['type']: row['total'] for row in ledger.values('type').annotate(total=Sum('amount')).order_by()}
    income = _money(totals.get(Transaction.TYPE_INCOME))
    expenses = _money(totals.get(Transaction.TYPE_EXPENSE))

    breakdown = {Transaction.TYPE_INCOME: {}, Transaction.TYPE_EXPENSE: {}}
    for row in ledger.values('type', 'category').annotate(total=Sum('amount')).order_by('category'):
        breakdown[row['type']][row['category']] = _money(row['total'])

    return {
        'month': month,
        'year': year,
        'total_income': income,
        'total_expenses': expenses,
        'net_income': income - expenses,
        'transaction_count': ledger.count(),
        'income_by_category': breakdown[Transaction.TYPE_INCOME],
        'expenses_by_category': breakdown[Transaction.TYPE_EXPENSE],
    }


def cash_flow(start, end):
    """Daily income / expense series with a running balance"""
    if start > end:
        raise BadRequest('Start date must be before end date')
    ledger = Transaction.objects.alive().filter(date__gte=start, date__lte=end)
    per_day = {}
    for row in ledger.values('date', 'type').annotate(total=Sum('amount')).order_by():
        per_day.setdefault(row['date'], {})[row['type']] = row['total']

    series = []
    running = total_income = total_expenses = ZERO
    day = start
    while day <= end:
        income = _money(per_day.get(day, {}).get(Transaction.TYPE_INCOME))
        expense = _money(per_day.get(day, {}).get(Transaction.TYPE_EXPENSE))
        running += income - expense
        total_income += income
        total_expenses += expense
        series.append({'date': day, 'income': income, 'expenses': expense,
                       'net': income - expense, 'balance': running})
        day += timedelta(days=1)

    return {
        'start_date': start,
        'end_date': end,
        'total_income': total_income,
        'total_expenses': total_expenses,
        'net_cash_flow': total_income - total_expenses,
        'daily': series,
    }


def accounts_receivable():
    """Patients owing money on treatments, with their overdue installment totals"""
    overdue_installments()
    today = timezone.localdate()
    accounts = OrderedDict()

    owing = Treatment.objects.exclude(status=Treatment.STATUS_CANCELLED).filter(balance__gt=0) \
        .values('patient_id', 'patient__first_name', 'patient__last_name') \
        .annotate(total=Sum('balance'), treatments=Count('id')).order_by('-total')
    for row in owing:
        accounts[row['patient_id']] = {
            'patient_id': row['patient_id'],
            'patient_name': f"{row['patient__first_name']} {row['patient__last_name']}",
            'total_debt': _money(row['total']),
            'treatments': row['treatments'],
            'overdue_amount': ZERO,
            'overdue_installments': 0,
            'days_overdue': 0,
        }

    overdue = Installment.objects.filter(status=Installment.STATUS_OVERDUE,
                                         payment_plan__status=PaymentPlan.STATUS_ACTIVE) \
        .values('payment_plan__patient_id', 'payment_plan__patient__first_name', 'payment_plan__patient__last_name') \
        .annotate(total=Sum('amount'), count=Count('id'), oldest=Min('due_date')).order_by()
    for row in overdue:
        patient_id = row['payment_plan__patient_id']
        account = accounts.setdefault(patient_id, {
            'patient_id': patient_id,
            'patient_name': f"{row['payment_plan__patient__first_name']} {row['payment_plan__patient__last_name']}",
            'total_debt': ZERO,
            'treatments': 0,
        })
        account['overdue_amount'] = _money(row['total'])
        account['overdue_installments'] = row['count']
        account['days_overdue'] = (today - row['oldest']).days
    return list(accounts.values())


def income_by_treatment():
    """Payments grouped by catalog procedure"""
    rows = PatientPayment.objects.filter(treatment__isnull=False) \
        .values('treatment__catalog_id', 'treatment__catalog__code', 'treatment__catalog__name') \
        .annotate(total=Sum('amount'), treatments=Count('treatment', distinct=True)).order_by('-total')
    return [
        {
            'catalog_id': row['treatment__catalog_id'],
            'treatment_code': row['treatment__catalog__code'],
            'treatment_name': row['treatment__catalog__name'],
            'total_income': _money(row['total']),
            'number_of_treatments': row['treatments'],
            'average_income': _money(row['total'] / row['treatments']),
        }
        for row in rows
    ]


def financial_report(month, year):
    balance = monthly_balance(month, year)
    receivables = accounts_receivable()
    income = balance['total_income']
    margin = (balance['net_income'] / income * 100).quantize(CENT) if income > 0 else ZERO
    return {
        'period': {'month': month, 'year': year},
        'balance': balance,
        'receivables': {
            'total': sum((a['total_debt'] for a in receivables), ZERO),
            'overdue': sum((a['overdue_amount'] for a in receivables), ZERO),
            'accounts': len(receivables),
        },
        'summary': {
            'revenue': income,
            'expenses': balance['total_expenses'],
            'profit': balance['net_income'],
            'profit_margin': margin,
        },
    }

from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from accounting import services
from accounting.models import Expense, Installment, PaymentPlan, Transaction
from utils.exceptions import BadRequest
from .helpers import data_of

pytestmark = pytest.mark.django_db

PLANS = '/api/v1/accounting/payment-plans/'
PAYMENTS = '/api/v1/accounting/payments/'
EXPENSES = '/api/v1/accounting/expenses/'
REPORTS = '/api/v1/accounting/reports/'


def _plan_payload(patient, treatment, **overrides):
    payload = {
        'patient_id': patient.pk,
        'treatment_id': treatment.pk,
        'total_amount': '500.00',
        'total_installments': 5,
        'frequency': 'monthly',
        'start_date': (timezone.localdate() + timedelta(days=1)).isoformat(),
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def plan(reception_api, patient, treatment):
    response = reception_api.post(PLANS, _plan_payload(patient, treatment), format='json')
    assert response.status_code == 201
    return data_of(response)


def _pay(api, plan_id, amount):
    return api.post(f'{PLANS}{plan_id}/payments/', {'amount': amount, 'payment_method': 'cash'}, format='json')


def test_plan_creation(plan):
    assert plan['status'] == 'active'
    assert plan['balance'] == '500.00'
    assert plan['installment_amount'] == '100.00'
    assert [i['amount'] for i in plan['installments']] == ['100.00'] * 5
    assert all(i['status'] == 'pending' for i in plan['installments'])


@pytest.mark.parametrize('overrides, message', [
    ({'total_amount': '0.00'}, 'Total amount must be positive'),
    ({'total_installments': 0}, 'Total installments must be between 1 and 60'),
    ({'total_installments': 61}, 'Total installments must be between 1 and 60'),
    ({'start_date': '2020-01-01'}, 'First due date cannot be in the past'),
])
def test_plan_rules(reception_api, patient, treatment, overrides, message):
    response = reception_api.post(PLANS, _plan_payload(patient, treatment, **overrides), format='json')
    assert response.status_code == 400
    assert response.json()['message'] == message


def test_plan_needs_the_patients_treatment(reception_api, patient, treatment):
    payload = _plan_payload(patient, treatment, treatment_id=treatment.pk + 100)
    assert reception_api.post(PLANS, payload, format='json').status_code == 404


def test_record_payment(reception_api, plan, treatment):
    response = _pay(reception_api, plan['id'], '100.00')
    assert response.status_code == 201
    body = data_of(response)
    assert body['installment']['number'] == 1
    assert body['installment']['status'] == 'paid'
    assert Decimal(str(body['updated_balance'])) == Decimal('400.00')
    assert body['plan_status'] == 'active'

    treatment.refresh_from_db()
    assert treatment.paid == Decimal('100.00')
    assert treatment.balance == Decimal('400.00')

    entry = Transaction.objects.get(category='Payment Plan')
    assert entry.type == Transaction.TYPE_INCOME
    assert entry.amount == Decimal('100.00')


def test_partial_payments_accumulate_on_one_installment(reception_api, plan):
    _pay(reception_api, plan['id'], '60.00')
    first = Installment.objects.get(payment_plan_id=plan['id'], number=1)
    assert first.status == Installment.STATUS_PENDING

    body = data_of(_pay(reception_api, plan['id'], '40.00'))
    assert body['installment']['number'] == 1
    assert body['installment']['status'] == 'paid'


def test_plan_completes_at_zero_balance(reception_api, plan):
    for _ in range(5):
        response = _pay(reception_api, plan['id'], '100.00')
    assert data_of(response)['plan_status'] == 'completed'
    assert PaymentPlan.objects.get(pk=plan['id']).status == PaymentPlan.STATUS_COMPLETED

    again = _pay(reception_api, plan['id'], '10.00')
    assert again.status_code == 400
    assert again.json()['message'] == 'Payment plan is completed'


def test_excess_carries_over_to_next_installment(reception_api, plan):
    body = data_of(_pay(reception_api, plan['id'], '150.00'))
    assert body['installment']['number'] == 1
    assert body['installment']['status'] == 'paid'
    second = Installment.objects.get(payment_plan_id=plan['id'], number=2)
    assert second.status == Installment.STATUS_PENDING

    body = data_of(_pay(reception_api, plan['id'], '50.00'))
    assert body['installment']['number'] == 2
    assert body['installment']['status'] == 'paid'


def test_full_payment_settles_every_installment(reception_api, admin_api, plan, treatment):
    Installment.objects.filter(payment_plan_id=plan['id'], number__in=[1, 2]) \
        .update(due_date=timezone.localdate() - timedelta(days=3))
    services.overdue_installments()

    body = data_of(_pay(reception_api, plan['id'], '500.00'))
    assert body['plan_status'] == 'completed'
    statuses = list(Installment.objects.filter(payment_plan_id=plan['id'])
                    .order_by('number').values_list('status', flat=True))
    assert statuses == [Installment.STATUS_PAID] * 5

    accounts = data_of(admin_api.get(f'{REPORTS}accounts-receivable/'))
    assert all(a['patient_id'] != treatment.patient_id for a in accounts)


def test_receivables_skip_closed_plans(admin_api, plan, treatment):
    Installment.objects.filter(payment_plan_id=plan['id'], number=1) \
        .update(status=Installment.STATUS_OVERDUE, due_date=timezone.localdate() - timedelta(days=3))
    PaymentPlan.objects.filter(pk=plan['id']).update(status=PaymentPlan.STATUS_CANCELLED)

    account = data_of(admin_api.get(f'{REPORTS}accounts-receivable/'))[0]
    assert account['patient_id'] == treatment.patient_id
    assert account['overdue_installments'] == 0


def test_payment_cannot_exceed_balance(reception_api, plan):
    response = _pay(reception_api, plan['id'], '600.00')
    assert response.status_code == 400
    assert 'exceeds remaining balance' in response.json()['message']


def test_overdue_installments_are_flagged(plan):
    Installment.objects.filter(payment_plan_id=plan['id'], number=1) \
        .update(due_date=timezone.localdate() - timedelta(days=3))
    overdue = list(services.overdue_installments())
    assert [i.number for i in overdue] == [1]
    assert overdue[0].status == Installment.STATUS_OVERDUE


def test_patient_payment_updates_treatment(reception_api, patient, treatment):
    response = reception_api.post(PAYMENTS, {
        'patient_id': patient.pk,
        'treatment_id': treatment.pk,
        'amount': '150.00',
        'payment_method': 'card',
        'concept': 'Restoration deposit',
    }, format='json')
    assert response.status_code == 201

    treatment.refresh_from_db()
    assert treatment.paid == Decimal('150.00')
    entry = Transaction.objects.get(category='Patient Payment')
    assert entry.patient_id == patient.pk
    assert entry.description == 'Payment: Restoration deposit'


def test_patient_payment_above_balance(reception_api, patient, treatment):
    response = reception_api.post(PAYMENTS, {
        'patient_id': patient.pk,
        'treatment_id': treatment.pk,
        'amount': '900.00',
        'payment_method': 'cash',
        'concept': 'Full payment',
    }, format='json')
    assert response.status_code == 400
    assert not Transaction.objects.exists()


def test_expense_writes_ledger_entry(admin_api):
    response = admin_api.post(EXPENSES, {
        'category': 'supplies',
        'description': 'Composite resin kit',
        'amount': '80.00',
        'payment_method': 'transfer',
    }, format='json')
    assert response.status_code == 201
    expense = Expense.objects.get(pk=data_of(response)['id'])
    assert expense.transaction.type == Transaction.TYPE_EXPENSE
    assert expense.transaction.description == 'Supplies: Composite resin kit'

    admin_api.patch(f'{EXPENSES}{expense.pk}/', {'amount': '95.00'}, format='json')
    expense.transaction.refresh_from_db()
    assert expense.transaction.amount == Decimal('95.00')

    admin_api.delete(f'{EXPENSES}{expense.pk}/')
    assert not Transaction.objects.alive().exists()


def test_expenses_are_admin_only(reception_api):
    assert reception_api.get(EXPENSES).status_code == 403


def test_monthly_balance_reads_the_ledger():
    day = date(2026, 3, 10)
    services.create_transaction({'type': 'income', 'amount': Decimal('300.00'), 'description': 'Cleaning',
                                 'category': 'Patient Payment', 'date': day})
    services.create_transaction({'type': 'expense', 'amount': Decimal('120.00'), 'description': 'Gloves',
                                 'category': 'supplies', 'date': day})
    services.create_transaction({'type': 'income', 'amount': Decimal('999.00'), 'description': 'Next month',
                                 'category': 'Patient Payment', 'date': date(2026, 4, 1)})

    balance = services.monthly_balance(3, 2026)
    assert balance['total_income'] == Decimal('300.00')
    assert balance['total_expenses'] == Decimal('120.00')
    assert balance['net_income'] == Decimal('180.00')
    assert balance['transaction_count'] == 2
    assert balance['expenses_by_category'] == {'supplies': Decimal('120.00')}


def test_month_bounds_are_checked():
    with pytest.raises(BadRequest):
        services.monthly_balance(13, 2026)
    with pytest.raises(BadRequest):
        services.monthly_balance(1, 1999)


def test_cash_flow_running_balance():
    services.create_transaction({'type': 'income', 'amount': Decimal('100.00'), 'description': 'Exam',
                                 'category': 'Patient Payment', 'date': date(2026, 3, 1)})
    services.create_transaction({'type': 'expense', 'amount': Decimal('30.00'), 'description': 'Mail',
                                 'category': 'other', 'date': date(2026, 3, 3)})

    flow = services.cash_flow(date(2026, 3, 1), date(2026, 3, 3))
    assert [d['balance'] for d in flow['daily']] == [Decimal('100.00'), Decimal('100.00'), Decimal('70.00')]
    assert flow['net_cash_flow'] == Decimal('70.00')

    with pytest.raises(BadRequest):
        services.cash_flow(date(2026, 3, 3), date(2026, 3, 1))


def test_receivables_and_financial_report(admin_api, treatment):
    response = admin_api.get(f'{REPORTS}accounts-receivable/')
    accounts = data_of(response)
    assert accounts[0]['patient_id'] == treatment.patient_id
    assert accounts[0]['total_debt'] == 500.0

    report = data_of(admin_api.get(f'{REPORTS}financial/', {'month': 3, 'year': 2026}))
    assert report['receivables']['accounts'] == 1
    assert report['summary']['profit_margin'] == 0


def test_reports_are_admin_only(reception_api):
    response = reception_api.get(f'{REPORTS}monthly-balance/', {'month': 3, 'year': 2026})
    assert response.status_code == 403

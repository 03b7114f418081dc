from datetime import date, timedelta
from decimal import Decimal

from accounting.services import calculate_installments


def test_even_split():
    schedule = calculate_installments(Decimal('500.00'), 5, date(2027, 3, 1), 'monthly')
    assert [item['amount'] for item in schedule] == [Decimal('100.00')] * 5
    assert [item['number'] for item in schedule] == [1, 2, 3, 4, 5]


def test_last_installment_takes_the_remainder():
    schedule = calculate_installments(Decimal('100.00'), 3, date(2027, 3, 1), 'monthly')
    assert [item['amount'] for item in schedule] == [Decimal('33.33'), Decimal('33.33'), Decimal('33.34')]
    assert sum(item['amount'] for item in schedule) == Decimal('100.00')


def test_rounding_is_always_down():
    schedule = calculate_installments(Decimal('200.00'), 3, date(2027, 3, 1), 'monthly')
    assert [item['amount'] for item in schedule] == [Decimal('66.66'), Decimal('66.66'), Decimal('66.68')]


def test_due_dates_follow_the_frequency():
    first = date(2027, 3, 1)
    weekly = calculate_installments(Decimal('90.00'), 3, first, 'weekly')
    assert [item['due_date'] for item in weekly] == [first, first + timedelta(days=7), first + timedelta(days=14)]

    biweekly = calculate_installments(Decimal('90.00'), 2, first, 'biweekly')
    assert biweekly[1]['due_date'] == first + timedelta(days=14)

    monthly = calculate_installments(Decimal('90.00'), 2, first, 'monthly')
    assert monthly[1]['due_date'] == first + timedelta(days=30)


def test_single_installment():
    schedule = calculate_installments(Decimal('75.50'), 1, date(2027, 3, 1), 'weekly')
    assert schedule == [{'number': 1, 'amount': Decimal('75.50'), 'due_date': date(2027, 3, 1)}]

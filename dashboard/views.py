"""
Dashboard statistics view
"""
from datetime import timedelta

from django.db.models import Sum
from django.utils import timezone
from rest_framework.views import APIView

from accounting.models import Transaction
from appointments.models import Appointment
from followups.models import FollowUp
from patients.models import Patient
from utils.response import success_response


class DashboardStatisticsView(APIView):
    """Front page numbers for the back office"""

    def get(self, request):
        today = timezone.localdate()
        month_start = today.replace(day=1)

        # patients
        patients = Patient.objects.alive()
        total_patients = patients.count()
        active_patients = patients.filter(is_active=True).count()
        new_patients_this_month = patients.filter(created_at__date__gte=month_start).count()

        # today's agenda
        today_qs = Appointment.objects.filter(date=today)
        today_appointments = today_qs.exclude(status__in=Appointment.INACTIVE_STATUSES).count()
        today_completed = today_qs.filter(status=Appointment.STATUS_COMPLETED).count()
        completion_rate = round(today_completed / today_appointments * 100, 2) if today_appointments else 0

        upcoming_appointments = Appointment.objects.filter(
            date__gt=today,
            date__lte=today + timedelta(days=7),
            status__in=[Appointment.STATUS_SCHEDULED, Appointment.STATUS_CONFIRMED],
        ).count()

        # follow-ups
        open_follow_ups = FollowUp.objects.filter(status__in=FollowUp.OPEN_STATUSES)
        pending_follow_ups = open_follow_ups.count()
        overdue_follow_ups = open_follow_ups.filter(due_date__lt=today).count()

        # this month's ledger
        ledger = Transaction.objects.alive().filter(date__gte=month_start, date__lte=today)
        month_income = ledger.filter(type=Transaction.TYPE_INCOME).aggregate(total=Sum('amount'))['total'] or 0
        month_expenses = ledger.filter(type=Transaction.TYPE_EXPENSE).aggregate(total=Sum('amount'))['total'] or 0

        data = {
            'patients': {
                'total': total_patients,
                'active': active_patients,
                'new_this_month': new_patients_this_month,
            },
            'appointments': {
                'today': today_appointments,
                'today_completed': today_completed,
                'completion_rate': completion_rate,
                'upcoming_7_days': upcoming_appointments,
            },
            'follow_ups': {
                'pending': pending_follow_ups,
                'overdue': overdue_follow_ups,
            },
            'finance': {
                'month_income': month_income,
                'month_expenses': month_expenses,
                'month_net': month_income - month_expenses,
            },
        }
        return success_response(data)

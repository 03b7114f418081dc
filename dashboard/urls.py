"""
Dashboard URL configuration
"""
from django.urls import path
from .views import DashboardStatisticsView

urlpatterns = [
    path('stats/', DashboardStatisticsView.as_view(), name='dashboard_stats'),
]

"""
Endpoints:
1. GET /dashboard/stats/ - back office front page numbers

   Response data:
   {
       "patients": {"total": 120, "active": 115, "new_this_month": 8},
       "appointments": {"today": 14, "today_completed": 6, "completion_rate": 42.86, "upcoming_7_days": 51},
       "follow_ups": {"pending": 9, "overdue": 2},
       "finance": {"month_income": 4210.0, "month_expenses": 1830.5, "month_net": 2379.5}
   }
"""

"""
URL configuration for the dental_clinic project.
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from django.utils import timezone
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health(request):
    return Response({'status': 'ok', 'timestamp': timezone.now().isoformat()})


urlpatterns = [
    path('admin/', admin.site.urls),

    # API docs
    path('api/v1/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/v1/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/v1/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),

    path('api/v1/health', health, name='health'),

    # API
    path('api/v1/auth/', include('user.urls')),                 # login, tokens, staff accounts
    path('api/v1/patients/', include('patients.urls')),         # patient records
    path('api/v1/doctors/', include('doctors.urls')),           # schedules, blocked times
    path('api/v1/appointments/', include('appointments.urls')), # booking engine
    path('api/v1/odontograms/', include('odontograms.urls')),   # versioned dental charts
    path('api/v1/medical/', include('medical.urls')),           # history, diagnoses, treatments
    path('api/v1/followups/', include('followups.urls')),       # follow-ups, notes
    path('api/v1/accounting/', include('accounting.urls')),     # payments, expenses, reports
    path('api/v1/dashboard/', include('dashboard.urls')),       # front page numbers
]

if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)

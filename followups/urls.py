from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import FollowUpViewSet, NoteViewSet, PatientNoteView

router = DefaultRouter()
router.register(r'notes', NoteViewSet, basename='note')
router.register(r'', FollowUpViewSet, basename='followup')

urlpatterns = [
    path('patients/<int:patient_id>/notes/', PatientNoteView.as_view(), name='patient_notes'),
    path('', include(router.urls)),
    # GET /followups/ - list (patient_id, status, priority, search, due_date_from, due_date_to, ordering)
    # POST /followups/ - create
    # GET|PUT|PATCH|DELETE /followups/{id}/
    # POST /followups/{id}/complete|cancel/
    # GET /followups/overdue/ | upcoming/?days= | priority/{priority}/ | dashboard/
    # GET|POST /followups/patients/{patient_id}/notes/
    # GET|PUT|PATCH|DELETE /followups/notes/{id}/ ; POST /followups/notes/{id}/pin/
]

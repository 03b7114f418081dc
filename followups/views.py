"""
Follow-up and note views (all staff roles)
"""
from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.views import APIView

from utils.exceptions import BadRequest
from utils.response import success_response, paginated_response
from . import services
from .models import FollowUp, Note
from .serializers import FollowUpCreateSerializer, FollowUpSerializer, FollowUpUpdateSerializer, NoteSerializer


class FollowUpViewSet(viewsets.ModelViewSet):
    queryset = FollowUp.objects.select_related('patient', 'assigned_to')
    serializer_class = FollowUpSerializer

    def get_object(self):
        return services.get_follow_up(self.kwargs['pk'])

    def list(self, request, *args, **kwargs):
        return paginated_response(services.filter_follow_ups(request.query_params), FollowUpSerializer, request)

    def retrieve(self, request, *args, **kwargs):
        return success_response(FollowUpSerializer(self.get_object()).data)

    def create(self, request, *args, **kwargs):
        serializer = FollowUpCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        follow_up = services.create_follow_up(serializer.validated_data, created_by=request.user)
        return success_response(FollowUpSerializer(follow_up).data, 'Follow-up created', 201)

    def update(self, request, *args, **kwargs):
        serializer = FollowUpUpdateSerializer(data=request.data, partial=kwargs.pop('partial', False))
        serializer.is_valid(raise_exception=True)
        follow_up = services.update_follow_up(kwargs['pk'], dict(serializer.validated_data))
        return success_response(FollowUpSerializer(follow_up).data, 'Follow-up updated')

    def destroy(self, request, *args, **kwargs):
        services.delete_follow_up(kwargs['pk'])
        return success_response(message='Follow-up deleted')

    @action(detail=True, methods=['post'])
    def complete(self, request, pk=None):
        return success_response(FollowUpSerializer(services.mark_completed(pk)).data, 'Follow-up completed')

    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        return success_response(FollowUpSerializer(services.mark_cancelled(pk)).data, 'Follow-up cancelled')

    @action(detail=False, methods=['get'])
    def overdue(self, request):
        return success_response(FollowUpSerializer(services.overdue_follow_ups(), many=True).data)

    @action(detail=False, methods=['get'])
    def upcoming(self, request):
        try:
            days = int(request.query_params.get('days', 7))
        except (TypeError, ValueError):
            raise BadRequest('days must be an integer')
        return success_response(FollowUpSerializer(services.upcoming_follow_ups(days), many=True).data)

    @action(detail=False, methods=['get'], url_path=r'priority/(?P<priority>[a-z]+)')
    def by_priority(self, request, priority=None):
        return success_response(FollowUpSerializer(services.follow_ups_by_priority(priority), many=True).data)

    @action(detail=False, methods=['get'])
    def dashboard(self, request):
        return success_response(services.dashboard_stats())


class PatientNoteView(APIView):
    """GET / POST /followups/patients/{patient_id}/notes/"""

    def get(self, request, patient_id):
        return success_response(NoteSerializer(services.list_notes(patient_id), many=True).data)

    def post(self, request, patient_id):
        serializer = NoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        note = services.create_note(patient_id, serializer.validated_data, request.user)
        return success_response(NoteSerializer(note).data, 'Note created', 201)


class NoteViewSet(mixins.RetrieveModelMixin,
                  mixins.UpdateModelMixin,
                  mixins.DestroyModelMixin,
                  viewsets.GenericViewSet):
    queryset = Note.objects.select_related('author')
    serializer_class = NoteSerializer

    def get_object(self):
        return services.get_note(self.kwargs['pk'])

    def retrieve(self, request, *args, **kwargs):
        return success_response(NoteSerializer(self.get_object()).data)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = NoteSerializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        note = services.update_note(kwargs['pk'], serializer.validated_data)
        return success_response(NoteSerializer(note).data, 'Note updated')

    def destroy(self, request, *args, **kwargs):
        services.delete_note(kwargs['pk'])
        return success_response(message='Note deleted')

    @action(detail=True, methods=['post'])
    def pin(self, request, pk=None):
        note = services.toggle_pin(pk)
        return success_response(NoteSerializer(note).data, 'Note pinned' if note.is_pinned else 'Note unpinned')

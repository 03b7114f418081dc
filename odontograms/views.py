"""
Odontogram views (clinical staff write, everyone reads)
"""
from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from utils.exceptions import BadRequest
from utils.permissions import IsClinicalStaffOrReadOnly
from utils.response import success_response
from . import services
from .serializers import (
    NewVersionSerializer,
    OdontogramCreateSerializer,
    OdontogramSerializer,
    OdontogramSummarySerializer,
    OdontogramUpdateSerializer,
    ToothSerializer,
    ToothUpdateSerializer,
)


def _doctor_or_none(user):
    return user if getattr(user, 'role', None) == 'doctor' else None


class OdontogramViewSet(mixins.RetrieveModelMixin,
                        mixins.CreateModelMixin,
                        mixins.UpdateModelMixin,
                        viewsets.GenericViewSet):
    permission_classes = [IsAuthenticated, IsClinicalStaffOrReadOnly]
    serializer_class = OdontogramSerializer

    def retrieve(self, request, *args, **kwargs):
        return success_response(OdontogramSerializer(services.get_odontogram(kwargs['pk'])).data)

    def create(self, request, *args, **kwargs):
        serializer = OdontogramCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        odontogram = services.create_odontogram(serializer.validated_data, _doctor_or_none(request.user))
        return success_response(OdontogramSerializer(odontogram).data, 'Odontogram created', 201)

    def update(self, request, *args, **kwargs):
        """Writes a new version copying every tooth"""
        serializer = OdontogramUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        odontogram = services.update_odontogram(kwargs['pk'], serializer.validated_data,
                                                _doctor_or_none(request.user))
        return success_response(OdontogramSerializer(odontogram).data, 'New odontogram version created')

    @action(detail=False, methods=['get'], url_path=r'patient/(?P<patient_id>\d+)/current')
    def current(self, request, patient_id=None):
        return success_response(OdontogramSerializer(services.get_current(patient_id)).data)

    @action(detail=False, methods=['get'], url_path=r'patient/(?P<patient_id>\d+)/history')
    def history(self, request, patient_id=None):
        return success_response(OdontogramSummarySerializer(services.get_history(patient_id), many=True).data)

    @action(detail=False, methods=['post'], url_path=r'patient/(?P<patient_id>\d+)/new-version')
    def new_version(self, request, patient_id=None):
        serializer = NewVersionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        odontogram = services.create_new_version(patient_id, serializer.validated_data,
                                                 _doctor_or_none(request.user))
        return success_response(OdontogramSerializer(odontogram).data, 'New odontogram version created', 201)

    @action(detail=True, methods=['patch'], url_path=r'teeth/(?P<tooth_number>\d+)')
    def tooth(self, request, pk=None, tooth_number=None):
        serializer = ToothUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        tooth = services.update_tooth(pk, int(tooth_number), serializer.validated_data)
        return success_response(ToothSerializer(tooth).data, 'Tooth updated')

    @action(detail=False, methods=['get'])
    def compare(self, request):
        """GET /odontograms/compare/?version1=&version2="""
        first = request.query_params.get('version1')
        second = request.query_params.get('version2')
        if not (first and first.isdigit() and second and second.isdigit()):
            raise BadRequest('version1 and version2 odontogram ids are required')
        v1, v2, diff = services.compare_versions(int(first), int(second))
        diff['version1'] = OdontogramSummarySerializer(v1).data
        diff['version2'] = OdontogramSummarySerializer(v2).data
        return success_response(diff)

    @action(detail=True, methods=['get'])
    def statistics(self, request, pk=None):
        return success_response(services.statistics(pk))

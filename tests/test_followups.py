from datetime import timedelta

import pytest
from django.utils import timezone

from followups.models import FollowUp, Note
from .helpers import data_of

pytestmark = pytest.mark.django_db

URL = '/api/v1/followups/'


def _create(api, patient, days=3, **extra):
    payload = {
        'patient_id': patient.pk,
        'title': 'Post-extraction call',
        'description': 'Call the patient to check the healing of 38',
        'due_date': (timezone.localdate() + timedelta(days=days)).isoformat(),
    }
    payload.update(extra)
    return api.post(URL, payload, format='json')


@pytest.fixture
def follow_up(reception_api, patient):
    response = _create(reception_api, patient)
    assert response.status_code == 201
    return data_of(response)


def test_create_follow_up(follow_up, receptionist):
    assert follow_up['status'] == 'pending'
    assert follow_up['priority'] == 'medium'
    assert follow_up['created_by_id'] == receptionist.pk


def test_due_date_in_the_past(reception_api, patient):
    assert _create(reception_api, patient, days=-1).status_code == 422


def test_inactive_patient(reception_api, patient):
    patient.is_active = False
    patient.save()
    response = _create(reception_api, patient)
    assert response.status_code == 400
    assert response.json()['message'] == 'Cannot create follow-up for inactive patient'


def test_assignee_must_exist(reception_api, patient):
    assert _create(reception_api, patient, assigned_to_id=9999).status_code == 404


def test_complete_then_frozen(reception_api, follow_up):
    response = reception_api.post(f"{URL}{follow_up['id']}/complete/")
    body = data_of(response)
    assert body['status'] == 'completed'
    assert body['completed_at'] is not None

    assert reception_api.post(f"{URL}{follow_up['id']}/complete/").status_code == 400
    assert reception_api.post(f"{URL}{follow_up['id']}/cancel/").status_code == 400

    response = reception_api.patch(f"{URL}{follow_up['id']}/", {'title': 'Another call'}, format='json')
    assert response.status_code == 400
    assert response.json()['message'] == 'Cannot update a completed follow-up. Create a new one instead.'


def test_status_update_routes_to_mark_operation(reception_api, follow_up):
    response = reception_api.patch(f"{URL}{follow_up['id']}/", {'status': 'completed'}, format='json')
    assert data_of(response)['completed_at'] is not None


def test_in_progress_update(reception_api, follow_up):
    response = reception_api.patch(f"{URL}{follow_up['id']}/", {'status': 'in_progress', 'priority': 'high'},
                                   format='json')
    body = data_of(response)
    assert body['status'] == 'in_progress'
    assert body['priority'] == 'high'


def test_overdue_upcoming_and_priority(reception_api, patient, follow_up):
    late = FollowUp.objects.create(patient=patient, title='Send x-rays', priority='urgent',
                                   due_date=timezone.localdate() - timedelta(days=2))

    overdue = data_of(reception_api.get(f'{URL}overdue/'))
    assert [f['id'] for f in overdue] == [late.pk]

    upcoming = data_of(reception_api.get(f'{URL}upcoming/', {'days': 7}))
    assert [f['id'] for f in upcoming] == [follow_up['id']]
    assert reception_api.get(f'{URL}upcoming/', {'days': 400}).status_code == 400

    urgent = data_of(reception_api.get(f'{URL}priority/urgent/'))
    assert [f['id'] for f in urgent] == [late.pk]
    assert reception_api.get(f'{URL}priority/extreme/').status_code == 400


def test_dashboard(reception_api, patient, follow_up):
    FollowUp.objects.create(patient=patient, title='Old task', status='cancelled',
                            due_date=timezone.localdate() - timedelta(days=10))
    stats = data_of(reception_api.get(f'{URL}dashboard/'))
    assert stats['total'] == 2
    assert stats['pending'] == 1
    assert stats['cancelled'] == 1
    assert stats['overdue'] == 0
    assert stats['upcoming_this_week'] == 1
    assert stats['by_priority']['medium'] == 2


def test_notes_pinned_first(reception_api, patient):
    url = f'{URL}patients/{patient.pk}/notes/'
    first = data_of(reception_api.post(url, {'content': 'Prefers morning appointments'}, format='json'))
    second = data_of(reception_api.post(url, {'content': 'Anxious about needles'}, format='json'))

    pinned = reception_api.post(f"{URL}notes/{first['id']}/pin/")
    assert pinned.json()['message'] == 'Note pinned'

    notes = data_of(reception_api.get(url))
    assert [n['id'] for n in notes] == [first['id'], second['id']]

    unpinned = reception_api.post(f"{URL}notes/{first['id']}/pin/")
    assert data_of(unpinned)['is_pinned'] is False


def test_note_update_and_delete(reception_api, patient, receptionist):
    note = Note.objects.create(patient=patient, author=receptionist, content='Allergic to latex')
    response = reception_api.patch(f'{URL}notes/{note.pk}/', {'content': 'Allergic to latex gloves'},
                                   format='json')
    assert data_of(response)['content'] == 'Allergic to latex gloves'

    assert reception_api.delete(f'{URL}notes/{note.pk}/').status_code == 200
    assert not Note.objects.filter(pk=note.pk).exists()

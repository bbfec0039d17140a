from __future__ import annotations

from datetime import datetime

import pytest

from src.grease.grease.core.constants import PROCESS_GIG_REQUESTS
from src.grease.grease.core.enums import GigRequestStatus, Repeat
from src.grease.grease.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.grease.grease.events.model import NewEvent
from src.grease.grease.gig_requests.model import NewGigRequest

SUBMITTED = datetime(2026, 9, 2, 10, 0)


def _new_request() -> NewGigRequest:
    return NewGigRequest.from_json(
        {
            "name": "Homecoming",
            "organization": "Alumni Association",
            "contactName": "Buzz",
            "contactEmail": "buzz@example.com",
            "contactPhone": "4045550100",
            "startTime": "2026-10-10T17:00:00",
            "location": "Bobby Dodd Stadium",
        }
    )


def _form(**overrides) -> NewEvent:
    values = dict(
        name="Homecoming",
        semester="Fall 2026",
        event_type="Tutti Gig",
        call_time=datetime(2026, 10, 10, 16, 0),
        release_time=datetime(2026, 10, 10, 19, 0),
        points=10,
    )
    values.update(overrides)
    return NewEvent(**values)


@pytest.fixture
def pending(org):
    request_id = org.gig_request_service.submit(_new_request(), now=SUBMITTED)
    return org, request_id, org.members.principal("pres.ident@example.com")


def test_submission_is_public_and_pending(pending):
    org, request_id, president = pending

    request = org.gig_request_service.get(principal=president, request_id=request_id)

    assert request.status == GigRequestStatus.PENDING
    assert request.event is None
    assert request.organization == "Alumni Association"


def test_creating_event_accepts_request(pending):
    org, request_id, president = pending

    event_id = org.gig_request_service.create_event_from_gig_request(
        principal=president, request_id=request_id, form=_form()
    )

    request = org.gig_requests_repo.get(request_id)
    assert request.status == GigRequestStatus.ACCEPTED
    assert request.event == event_id
    assert org.events_repo.get_by_id(event_id).name == "Homecoming"


def test_second_conversion_is_rejected(pending):
    org, request_id, president = pending
    org.gig_request_service.create_event_from_gig_request(principal=president, request_id=request_id, form=_form())

    with pytest.raises(ValidationError, match="must be pending"):
        org.gig_request_service.create_event_from_gig_request(principal=president, request_id=request_id, form=_form())

    assert len(org.events_repo.events) == 1


def test_dismissed_request_cannot_be_converted_until_reopened(pending):
    org, request_id, president = pending
    org.gig_request_service.dismiss(principal=president, request_id=request_id)

    with pytest.raises(ValidationError, match="must be pending"):
        org.gig_request_service.create_event_from_gig_request(principal=president, request_id=request_id, form=_form())
    assert org.events_repo.events == {}

    org.gig_request_service.reopen(principal=president, request_id=request_id)
    org.gig_request_service.create_event_from_gig_request(principal=president, request_id=request_id, form=_form())
    assert org.gig_requests_repo.get(request_id).status == GigRequestStatus.ACCEPTED


def test_dismiss_and_reopen_only_from_the_right_state(pending):
    org, request_id, president = pending

    with pytest.raises(ValidationError):
        org.gig_request_service.reopen(principal=president, request_id=request_id)

    org.gig_request_service.dismiss(principal=president, request_id=request_id)
    with pytest.raises(ValidationError):
        org.gig_request_service.dismiss(principal=president, request_id=request_id)


def test_accepted_request_is_terminal(pending):
    org, request_id, president = pending
    org.gig_request_service.create_event_from_gig_request(principal=president, request_id=request_id, form=_form())

    with pytest.raises(ValidationError):
        org.gig_request_service.dismiss(principal=president, request_id=request_id)
    with pytest.raises(ValidationError):
        org.gig_request_service.reopen(principal=president, request_id=request_id)


def test_repeating_gig_creates_every_occurrence_and_returns_the_first(pending):
    org, request_id, president = pending

    first_id = org.gig_request_service.create_event_from_gig_request(
        principal=president,
        request_id=request_id,
        form=_form(repeat=Repeat.WEEKLY, repeat_until=datetime(2026, 10, 31, 23, 0)),
    )

    assert len(org.events_repo.events) == 4
    assert org.gig_requests_repo.get(request_id).event == first_id
    assert org.events_repo.get_by_id(first_id).call_time == datetime(2026, 10, 10, 16, 0)


def test_processing_needs_permission(pending):
    org, request_id, _ = pending
    ombudsman = org.members.principal("omb.uds@example.com")

    with pytest.raises(AuthorizationError) as exc:
        org.gig_request_service.dismiss(principal=ombudsman, request_id=request_id)
    assert exc.value.permission == PROCESS_GIG_REQUESTS
    with pytest.raises(AuthorizationError):
        org.gig_request_service.create_event_from_gig_request(principal=ombudsman, request_id=request_id, form=_form())


def test_missing_request_is_not_found(pending):
    org, _, president = pending

    with pytest.raises(NotFoundError):
        org.gig_request_service.dismiss(principal=president, request_id=999)


def test_listing_defaults_to_semester_and_pending(pending):
    org, request_id, president = pending
    old_pending = org.gig_request_service.submit(_new_request(), now=datetime(2026, 3, 1))
    old_dismissed = org.gig_request_service.submit(_new_request(), now=datetime(2026, 3, 2))
    org.gig_request_service.dismiss(principal=president, request_id=old_dismissed)

    listed = [r.request_id for r in org.gig_request_service.list(principal=president)]
    everything = [r.request_id for r in org.gig_request_service.list(principal=president, include_all=True)]

    assert listed == [old_pending, request_id]
    assert everything == [old_pending, old_dismissed, request_id]


def test_new_request_form_requires_contact_details():
    with pytest.raises(ValidationError):
        NewGigRequest.from_json({"name": "Gig", "organization": "Org", "startTime": "2026-10-10T17:00:00"})

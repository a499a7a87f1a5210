"""
Tests for Pydantic Schemas
Tests request validation, aliases and response serialization
"""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from pydantic import ValidationError

from sportnet.models.event import PriceType
from sportnet.schemas.branch import BranchDescriptor, BranchSubmission
from sportnet.schemas.common import PageRequest, paginate
from sportnet.schemas.event import EventCreate
from sportnet.schemas.reservation import EventIdRequest, ParticipantsFilter
from sportnet.schemas.user import RegisterRequest


def _certificate():
    return {"path": "/uploads/certificates/a.png", "originalName": "a.png", "mimeType": "image/png", "size": 10}


class TestRequestModels:
    """Test the shared request behavior"""

    def test_camel_and_snake_keys(self):
        """Test both key styles are accepted"""
        event_id = uuid4()

        assert EventIdRequest(**{"eventId": str(event_id)}).event_id == event_id
        assert EventIdRequest(event_id=event_id).event_id == event_id

    def test_unknown_field_rejected(self):
        """Test extra fields fail validation"""
        with pytest.raises(ValidationError):
            EventIdRequest(**{"eventId": str(uuid4()), "role": 0})

    def test_missing_field_rejected(self):
        """Test required fields"""
        with pytest.raises(ValidationError):
            EventIdRequest()


class TestPagination:
    """Test page arithmetic"""

    def test_defaults(self):
        page = PageRequest()

        assert page.per_page == 10
        assert page.page_number == 1
        assert page.skip == 0

    def test_skip_and_block(self):
        """Test offset and total pages"""
        page = PageRequest(perPage=20, pageNumber=3)

        assert page.skip == 40
        assert paginate(page, 41) == {"page": 3, "per_page": 20, "total": 41, "total_pages": 3}

    @pytest.mark.parametrize("values", [{"perPage": 0}, {"perPage": 101}, {"pageNumber": 0}])
    def test_bounds(self, values):
        """Test perPage 1-100 and pageNumber >= 1"""
        with pytest.raises(ValidationError):
            PageRequest(**values)

    def test_participant_filters_only_set_flags(self):
        """Test unset flags are not used as filters"""
        filters = ParticipantsFilter(isPaid=True, isWaitListed=False, perPage=5)

        assert filters.flag_filters() == {"is_paid": True, "is_wait_listed": False}


class TestBranchDescriptor:
    """Test branch descriptor rules"""

    def test_file_index_branch(self):
        descriptor = BranchDescriptor(sport=uuid4(), branchOrder=1, level=3, fileIndex=0)

        assert descriptor.certificate is None
        assert descriptor.file_index == 0

    def test_kept_certificate_branch(self):
        descriptor = BranchDescriptor(sport=uuid4(), branchOrder=2, level=3, certificate=_certificate())

        assert descriptor.certificate.original_name == "a.png"

    def test_needs_a_source(self):
        """Test a branch with neither certificate nor fileIndex"""
        with pytest.raises(ValidationError):
            BranchDescriptor(sport=uuid4(), branchOrder=1, level=3)

    def test_not_both_sources(self):
        """Test a branch with both certificate and fileIndex"""
        with pytest.raises(ValidationError):
            BranchDescriptor(sport=uuid4(), branchOrder=1, level=3, certificate=_certificate(), fileIndex=0)

    @pytest.mark.parametrize("level", [0, 11])
    def test_level_bounds(self, level):
        with pytest.raises(ValidationError):
            BranchDescriptor(sport=uuid4(), branchOrder=1, level=level, fileIndex=0)

    def test_submission_parses_json_array(self):
        """Test the multipart data field"""
        sport = uuid4()
        raw = f'[{{"sport": "{sport}", "branchOrder": 1, "level": 5, "fileIndex": 0}}]'

        descriptors = BranchSubmission.validate_json(raw)

        assert len(descriptors) == 1
        assert descriptors[0].sport == sport


class TestEventCreate:
    """Test event validation"""

    def _payload(self, **overrides):
        start = datetime(2030, 1, 1, 9, 0)
        payload = {
            "name": "Clinic",
            "startTime": start,
            "endTime": start + timedelta(hours=1),
            "capacity": 4,
            "level": 5,
            "eventType": "Indoor",
            "styleId": uuid4(),
            "sportGroupId": uuid4(),
            "sportId": uuid4(),
            "priceType": "Stable",
            "participationFee": 15,
            "salonId": uuid4(),
            "equipment": "None",
        }
        payload.update(overrides)
        return payload

    def test_valid_event(self):
        event = EventCreate(**self._payload())

        assert event.price_type == PriceType.STABLE
        assert event.participation_fee == 15

    def test_negative_capacity(self):
        with pytest.raises(ValidationError):
            EventCreate(**self._payload(capacity=-1))

    def test_secret_not_accepted(self):
        """Test the private secret cannot be supplied by clients"""
        with pytest.raises(ValidationError):
            EventCreate(**self._payload(secretId="abc"))


class TestRegisterRequest:
    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            RegisterRequest(firstName="A", lastName="B", email="not-an-email", phone="123456", password="Password1")

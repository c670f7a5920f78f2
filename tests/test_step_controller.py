"""
Tests for the wizard step controller.
"""

import pytest

from booking_wizard.core.enums import ContactChannel, StepKind
from booking_wizard.core.exceptions import BookingFlowError
from booking_wizard.core.models.booking import BookingRecord, UploadedFile
from booking_wizard.services.booking import StepController, compute_steps


def _file(file_id: str) -> UploadedFile:
    return UploadedFile(
        id=file_id, name=f"{file_id}.png", size_bytes=1, mime_type="image/png", access_url="/x"
    )


class TestComputeSteps:
    """Test the visible step sequence."""

    @pytest.mark.parametrize("service", ["", "wordpress", "video-editing"])
    def test_four_steps_without_upload(self, service):
        """Test services without uploads get four steps."""
        kinds = [s.kind for s in compute_steps(service)]
        assert kinds == [
            StepKind.SERVICE_SELECTION,
            StepKind.SERVICE_DETAILS,
            StepKind.CONTACT_INFO,
            StepKind.REVIEW,
        ]

    @pytest.mark.parametrize("service", ["graphic-design", "tshirt-printing"])
    def test_upload_step_before_contact(self, service):
        """Test upload services insert File Upload right before Contact Information."""
        steps = compute_steps(service)
        assert len(steps) == 5
        assert [s.id for s in steps] == [1, 2, 3, 4, 5]
        assert steps[2].kind == StepKind.FILE_UPLOAD
        assert steps[3].kind == StepKind.CONTACT_INFO
        assert steps[-1].title == "Review & Submit"


class TestNavigation:
    """Test advance, retreat and jump."""

    def test_advance_blocked_without_service(self):
        """Test advancing from step 1 requires a service."""
        controller = StepController()
        assert controller.advance() is False
        assert controller.current_step == 1
        assert "service" in controller.errors

    def test_advance_publishes_detail_errors(self):
        """Test missing details block step 2 and are reported."""
        controller = StepController(BookingRecord(service="graphic-design"), current_step=2)
        assert controller.advance() is False
        assert set(controller.errors) == {"designType", "dimensions", "conceptCount"}
        assert controller.current_step == 2

    def test_advance_clears_errors_on_success(self, wordpress_record):
        """Test a successful advance clears earlier errors."""
        controller = StepController(wordpress_record, current_step=2)
        controller.errors = {"pageCount": "stale"}
        assert controller.advance() is True
        assert controller.current_step == 3
        assert controller.errors == {}

    def test_advance_clamps_at_review(self, wordpress_record):
        """Test advancing on the last step stays on it."""
        controller = StepController(wordpress_record, current_step=4)
        assert controller.advance() is True
        assert controller.current_step == 4

    def test_retreat_clamps_at_one(self):
        """Test retreat never goes below step 1 and never validates."""
        controller = StepController(BookingRecord(service="wordpress"), current_step=3)
        controller.retreat()
        assert controller.current_step == 2
        controller.retreat()
        controller.retreat()
        assert controller.current_step == 1
        assert controller.errors == {}

    def test_jump_requires_earlier_steps_valid(self):
        """Test jump_to fails while an earlier step is invalid."""
        controller = StepController(BookingRecord(service="wordpress"))
        assert controller.jump_to(2) is True
        assert controller.jump_to(3) is False
        assert controller.current_step == 2

    def test_jump_out_of_range(self, wordpress_record):
        """Test jump_to rejects ids outside the sequence."""
        controller = StepController(wordpress_record)
        assert controller.jump_to(0) is False
        assert controller.jump_to(5) is False
        assert controller.current_step == 1

    def test_jump_is_idempotent(self, wordpress_record):
        """Test jumping twice to the same step lands on it both times."""
        controller = StepController(wordpress_record)
        assert controller.jump_to(4) is True
        assert controller.jump_to(4) is True
        assert controller.current_step == 4

    def test_restored_step_is_clamped(self):
        """Test a stored step past the end is clamped."""
        controller = StepController(BookingRecord(service="wordpress"), current_step=9)
        assert controller.current_step == 4


class TestServiceSelection:
    """Test choosing and changing the service."""

    def test_unknown_service_rejected(self):
        """Test selecting an unknown service raises."""
        controller = StepController()
        with pytest.raises(BookingFlowError):
            controller.select_service("plumbing")

    def test_switching_service_clears_details(self, wordpress_record):
        """Test switching service empties service_details."""
        controller = StepController(wordpress_record)
        controller.select_service("video-editing")
        assert controller.record.service == "video-editing"
        assert controller.record.service_details == {}

    def test_reselecting_same_service_keeps_details(self, wordpress_record):
        """Test selecting the current service again is a no-op."""
        controller = StepController(wordpress_record)
        controller.select_service("wordpress")
        assert controller.record.service_details["pageCount"] == "one-page"

    def test_snap_when_upload_step_appears(self, wordpress_record):
        """Test the step snaps to Service Details when File Upload is added."""
        controller = StepController(wordpress_record, current_step=3)
        controller.select_service("tshirt-printing")
        assert controller.current_step == 2
        assert controller.current.kind == StepKind.SERVICE_DETAILS

    def test_snap_when_upload_step_disappears(self):
        """Test the step snaps back when File Upload is removed."""
        controller = StepController(BookingRecord(service="graphic-design"), current_step=5)
        controller.select_service("video-editing")
        assert controller.current_step == 2

    def test_no_snap_when_shape_unchanged(self):
        """Test switching between two upload services keeps the step."""
        controller = StepController(BookingRecord(service="graphic-design"), current_step=4)
        controller.select_service("tshirt-printing")
        assert controller.current_step == 4

    def test_change_service(self, wordpress_record):
        """Test change_service returns to step 1 and clears the selection."""
        controller = StepController(wordpress_record, current_step=3)
        controller.change_service()
        assert controller.current_step == 1
        assert controller.record.service == ""
        assert controller.record.service_details == {}
        assert controller.record.contact_info.name == "Jane Doe"


class TestMutations:
    """Test detail, contact and file updates."""

    def test_update_details_requires_service(self):
        """Test details cannot be written before a service is chosen."""
        controller = StepController()
        with pytest.raises(BookingFlowError):
            controller.update_details({"websiteType": "new"})

    def test_update_details_rejects_unrelated_fields(self):
        """Test fields of another service are rejected."""
        controller = StepController(BookingRecord(service="wordpress"))
        with pytest.raises(BookingFlowError) as exc:
            controller.update_details({"quantity": "3"})
        assert "quantity" in exc.value.errors

    def test_blank_value_removes_field(self):
        """Test an empty value removes the key."""
        controller = StepController(BookingRecord(service="wordpress"))
        controller.update_details({"websiteType": "new", "features": "blog"})
        controller.update_details({"features": "", "websiteType": None})
        assert controller.record.service_details == {}

    def test_update_contact_partial(self, valid_contact):
        """Test only provided contact fields change."""
        controller = StepController(BookingRecord(contact_info=valid_contact))
        controller.update_contact(email="new@example.com", preferred_contact_channel=ContactChannel.PHONE)
        assert controller.record.contact_info.name == "Jane Doe"
        assert controller.record.contact_info.email == "new@example.com"
        assert controller.record.contact_info.preferred_contact_channel == ContactChannel.PHONE

    def test_add_and_remove_files(self):
        """Test files keep order, skip duplicate ids and can be removed."""
        controller = StepController(BookingRecord(service="graphic-design"))
        controller.add_files([_file("a"), _file("b"), _file("a")])
        assert [f.id for f in controller.record.files] == ["a", "b"]
        assert controller.remove_file("a") is True
        assert controller.remove_file("missing") is False
        assert [f.id for f in controller.record.files] == ["b"]

    def test_reset(self, wordpress_record):
        """Test reset empties the record and returns to step 1."""
        controller = StepController(wordpress_record, current_step=3)
        controller.reset()
        assert controller.record.is_empty()
        assert controller.current_step == 1


class TestValidation:
    """Test step validators."""

    def test_contact_step_errors(self):
        """Test contact validation reports each bad field."""
        controller = StepController(BookingRecord(service="wordpress"))
        controller.update_contact(name="Jane123", phone="0612345678", email="jane@")
        errors = controller.validate_step(3)
        assert set(errors) == {"name", "phone", "email"}

    def test_file_upload_step_always_valid(self):
        """Test File Upload never blocks."""
        controller = StepController(BookingRecord(service="tshirt-printing"))
        assert controller.is_step_valid(3) is True

    def test_is_complete(self, tshirt_record):
        """Test completeness covers every step before Review."""
        controller = StepController(tshirt_record)
        assert controller.is_complete() is True
        controller.update_contact(email="")
        assert controller.is_complete() is False

    def test_snapshot_shape(self, tshirt_record):
        """Test the snapshot carries steps, record and completeness."""
        snap = StepController(tshirt_record, current_step=2).snapshot()
        assert snap["currentStep"] == 2
        assert len(snap["steps"]) == 5
        assert snap["record"]["service"] == "tshirt-printing"
        assert snap["isComplete"] is True

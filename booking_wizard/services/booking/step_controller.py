"""
Step controller for the booking wizard.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ...core.enums import ContactChannel, ServiceType, StepKind
from ...core.exceptions import BookingFlowError
from ...core.models.booking import BookingRecord, StepDefinition, UploadedFile
from ...utils.event_log import log_event
from ...utils.validation import ValidationUtils
from .data import requires_file_upload
from .requirements import known_fields, missing_fields


_STEP_TEXT: Dict[StepKind, tuple] = {
    StepKind.SERVICE_SELECTION: ("Service Selection", "Choose the service you need"),
    StepKind.SERVICE_DETAILS: ("Service Details", "Tell us about your project"),
    StepKind.FILE_UPLOAD: ("File Upload", "Upload your designs or reference files"),
    StepKind.CONTACT_INFO: ("Contact Information", "How can we reach you?"),
    StepKind.REVIEW: ("Review & Submit", "Review your booking and pay"),
}


def compute_steps(service: str) -> List[StepDefinition]:
    """Return the visible wizard steps for ``service``, numbered from 1."""
    kinds = [StepKind.SERVICE_SELECTION, StepKind.SERVICE_DETAILS]
    if requires_file_upload(service):
        kinds.append(StepKind.FILE_UPLOAD)
    kinds.extend([StepKind.CONTACT_INFO, StepKind.REVIEW])

    return [
        StepDefinition(id=index, kind=kind, title=_STEP_TEXT[kind][0], description=_STEP_TEXT[kind][1])
        for index, kind in enumerate(kinds, start=1)
    ]


class StepController:
    """Drive navigation and mutations of a BookingRecord."""

    # Snap target when the step sequence changes shape under the customer.
    _SNAP_STEP = 2

    def __init__(self, record: Optional[BookingRecord] = None, current_step: int = 1) -> None:
        self.record = record if record is not None else BookingRecord()
        self.errors: Dict[str, str] = {}
        self.current_step = self._clamp(current_step)

    # ------------------------------------------------------------------
    # Step sequence
    @property
    def steps(self) -> List[StepDefinition]:
        return compute_steps(self.record.service)

    @property
    def last_step_id(self) -> int:
        return len(self.steps)

    @property
    def current(self) -> StepDefinition:
        return self.steps[self.current_step - 1]

    def _clamp(self, step: int) -> int:
        return max(1, min(step, self.last_step_id))

    def _step(self, step_id: int) -> Optional[StepDefinition]:
        steps = self.steps
        if 1 <= step_id <= len(steps):
            return steps[step_id - 1]
        return None

    # ------------------------------------------------------------------
    # Validation
    def validate_step(self, step_id: int) -> Dict[str, str]:
        """Return the error map for ``step_id``; empty when the step is valid."""
        step = self._step(step_id)
        if step is None:
            return {}

        if step.kind is StepKind.SERVICE_SELECTION:
            if not self.record.service:
                return {"service": "Please select a service"}
            return {}

        if step.kind is StepKind.SERVICE_DETAILS:
            if not self.record.service:
                return {"service": "Please select a service"}
            return missing_fields(self.record.service, self.record.service_details)

        if step.kind is StepKind.CONTACT_INFO:
            return ValidationUtils.validate_contact_info(self.record.contact_info)

        # File Upload and Review have nothing to check
        return {}

    def is_step_valid(self, step_id: int) -> bool:
        """Silent form of :meth:`validate_step`."""
        return not self.validate_step(step_id)

    def is_complete(self) -> bool:
        """Check if every step before Review passes validation."""
        return all(self.is_step_valid(step.id) for step in self.steps[:-1])

    # ------------------------------------------------------------------
    # Navigation
    def advance(self) -> bool:
        """Validate the current step and move forward if it passes."""
        errors = self.validate_step(self.current_step)
        if errors:
            self.errors = errors
            log_event(
                "invalid_advance",
                {"step": self.current_step, "fields": sorted(errors)},
            )
            return False

        self.errors = {}
        self._move_to(min(self.current_step + 1, self.last_step_id))
        return True

    def retreat(self) -> None:
        """Move one step back without validating."""
        self._move_to(max(self.current_step - 1, 1))

    def jump_to(self, step_id: int) -> bool:
        """Jump to ``step_id`` if every earlier step is valid."""
        if step_id < 1 or step_id > self.last_step_id:
            return False
        for earlier in range(1, step_id):
            if not self.is_step_valid(earlier):
                return False
        self._move_to(step_id)
        return True

    def _move_to(self, step_id: int) -> None:
        if step_id == self.current_step:
            return
        prev = self.current_step
        self.current_step = step_id
        log_event(
            "step_transition",
            {"from": prev, "to": step_id, "kind": self.current.kind.value},
        )

    # ------------------------------------------------------------------
    # Mutations
    def change_service(self) -> None:
        """Return to service selection and forget the chosen service."""
        prev_service = self.record.service
        self.record.service = ""
        self.record.service_details = {}
        self.errors = {}
        self._move_to(1)
        log_event("service_changed", {"from": prev_service, "to": ""})

    def select_service(self, service: str) -> None:
        """Select ``service``, clearing details if it differs from the current one."""
        if not ServiceType.is_known(service):
            raise BookingFlowError(
                f"Unknown service '{service}'", {"service": "Please select a valid service"}
            )

        prev_service = self.record.service
        if service == prev_service:
            return

        had_upload = requires_file_upload(prev_service)
        self.record.service = service
        self.record.service_details = {}
        self.errors = {}

        if had_upload != requires_file_upload(service) and self.current_step > self._SNAP_STEP:
            self._move_to(self._SNAP_STEP)
        else:
            self._move_to(self._clamp(self.current_step))

        log_event("service_changed", {"from": prev_service, "to": service})

    def update_details(self, updates: Dict[str, Optional[str]]) -> None:
        """Write detail fields for the current service; blank values remove a field."""
        if not self.record.service:
            raise BookingFlowError(
                "Select a service before entering details",
                {"service": "Please select a service"},
            )

        allowed = known_fields(self.record.service)
        unknown = sorted(name for name in updates if name not in allowed)
        if unknown:
            raise BookingFlowError(
                f"Unknown fields for {self.record.service}: {', '.join(unknown)}",
                {name: "Unknown field" for name in unknown},
            )

        for name, value in updates.items():
            if value is None or not str(value).strip():
                self.record.service_details.pop(name, None)
            else:
                self.record.service_details[name] = str(value)
            self.errors.pop(name, None)

    def update_contact(
        self,
        *,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        preferred_contact_channel: Optional[ContactChannel] = None,
    ) -> None:
        """Partially update the contact information."""
        contact = self.record.contact_info
        if name is not None:
            contact.name = name
            self.errors.pop("name", None)
        if phone is not None:
            contact.phone = phone
            self.errors.pop("phone", None)
        if email is not None:
            contact.email = email
            self.errors.pop("email", None)
        if preferred_contact_channel is not None:
            contact.preferred_contact_channel = preferred_contact_channel

    def add_files(self, files: List[UploadedFile]) -> None:
        """Append file descriptors, skipping ids already attached."""
        for uploaded in files:
            if self.record.find_file(uploaded.id) is None:
                self.record.files.append(uploaded)

    def remove_file(self, file_id: str) -> bool:
        """Detach the file with ``file_id``; returns False if it was not attached."""
        before = len(self.record.files)
        self.record.files = [f for f in self.record.files if f.id != file_id]
        return len(self.record.files) != before

    def reset(self) -> None:
        """Clear the record and go back to the first step."""
        self.record = BookingRecord()
        self.errors = {}
        self._move_to(1)

    def snapshot(self) -> Dict[str, object]:
        """Serializable view of the wizard state."""
        return {
            "currentStep": self.current_step,
            "steps": [step.to_dict() for step in self.steps],
            "errors": dict(self.errors),
            "record": self.record.to_dict(),
            "isComplete": self.is_complete(),
        }

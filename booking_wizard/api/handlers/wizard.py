"""
Wizard session handler.
"""

import uuid
from typing import Any, Dict, List

from fastapi import APIRouter, File, UploadFile, status
from fastapi.responses import JSONResponse

from ...config import Settings
from ...core.exceptions import BookingFlowError, FileRejectedError, SessionNotFoundError
from ...core.models.booking import (
    ContactInfoUpdate,
    ServiceDetailsUpdate,
    ServiceSelection,
    StepJump,
)
from ...services.booking import FileIntake, IncomingFile, ServiceDataProvider, StepController
from ...services.storage import StateManager
from ...utils.event_log import set_session_id
from ...utils.phone import PhoneNumberParser
from ..errors import error_body
from ...utils.logging import get_logger

logger = get_logger(__name__)


class WizardHandler:
    """Handler for the server-side booking wizard."""

    def __init__(
        self,
        settings: Settings,
        state_manager: StateManager,
        service_data: ServiceDataProvider,
        file_intake: FileIntake,
    ):
        self.settings = settings
        self.state_manager = state_manager
        self.service_data = service_data
        self.file_intake = file_intake
        self.router = APIRouter()
        self._setup_routes()

    async def load(self, session_id: str) -> StepController:
        """Restore the controller for ``session_id``."""
        set_session_id(session_id)
        state = await self.state_manager.get_state(session_id)
        if state is None:
            raise SessionNotFoundError(f"Wizard session {session_id} not found")
        record, step = state
        return StepController(record, current_step=step)

    async def save(self, session_id: str, controller: StepController) -> None:
        await self.state_manager.save_state(session_id, controller.record, controller.current_step)

    def snapshot(self, session_id: str, controller: StepController, **extra: Any) -> Dict[str, Any]:
        """Response body describing the whole wizard state."""
        quote_ = self.service_data.quote(controller.record)
        body: Dict[str, Any] = {"sessionId": session_id, **controller.snapshot()}
        body["pricing"] = quote_.to_dict() if quote_ else None
        body.update(extra)
        return body

    def _setup_routes(self):
        """Setup wizard session routes."""

        @self.router.post("", status_code=status.HTTP_201_CREATED)
        async def create_session():
            """Start a new, empty wizard."""
            session_id = uuid.uuid4().hex
            set_session_id(session_id)
            controller = StepController()
            await self.save(session_id, controller)
            logger.info("Started wizard session %s", session_id)
            return self.snapshot(session_id, controller)

        @self.router.get("/{session_id}")
        async def get_session(session_id: str):
            controller = await self.load(session_id)
            return self.snapshot(session_id, controller)

        @self.router.delete("/{session_id}")
        async def clear_session(session_id: str):
            set_session_id(session_id)
            await self.state_manager.clear_state(session_id)
            return {"sessionId": session_id, "cleared": True}

        @self.router.get("/{session_id}/services")
        async def list_services(session_id: str):
            """Service catalog shown on the first step."""
            await self.load(session_id)
            return {"services": self.service_data.get_services()}

        @self.router.post("/{session_id}/service")
        async def select_service(session_id: str, body: ServiceSelection):
            controller = await self.load(session_id)
            controller.select_service(body.service)
            await self.save(session_id, controller)
            return self.snapshot(session_id, controller)

        @self.router.post("/{session_id}/change-service")
        async def change_service(session_id: str):
            controller = await self.load(session_id)
            controller.change_service()
            await self.save(session_id, controller)
            return self.snapshot(session_id, controller)

        @self.router.patch("/{session_id}/details")
        async def update_details(session_id: str, body: ServiceDetailsUpdate):
            controller = await self.load(session_id)
            controller.update_details(body.fields)
            await self.save(session_id, controller)
            return self.snapshot(session_id, controller)

        @self.router.patch("/{session_id}/contact")
        async def update_contact(session_id: str, body: ContactInfoUpdate):
            controller = await self.load(session_id)
            phone = body.phone
            if phone is not None:
                phone = PhoneNumberParser.format_international(
                    phone, self.settings.default_phone_country_code
                )
            controller.update_contact(
                name=body.name,
                phone=phone,
                email=body.email,
                preferred_contact_channel=body.preferred_contact_channel,
            )
            await self.save(session_id, controller)
            return self.snapshot(session_id, controller)

        @self.router.post("/{session_id}/files")
        async def upload_files(session_id: str, files: List[UploadFile] = File(...)):
            """Attach uploaded files to the booking."""
            controller = await self.load(session_id)
            if not controller.record.service:
                raise BookingFlowError(
                    "Select a service before uploading files",
                    {"service": "Please select a service"},
                )

            incoming = [
                IncomingFile(
                    name=upload.filename or "upload",
                    mime_type=upload.content_type or "",
                    data=await upload.read(),
                )
                for upload in files
            ]
            result = await self.file_intake.accept(controller.record.service, incoming)
            if not result.accepted:
                raise FileRejectedError(result.notice or "No files were accepted")

            controller.add_files(result.accepted)
            await self.save(session_id, controller)
            return self.snapshot(
                session_id, controller, notice=result.notice, rejected=result.rejected
            )

        @self.router.delete("/{session_id}/files/{file_id}")
        async def remove_file(session_id: str, file_id: str):
            controller = await self.load(session_id)
            if not controller.remove_file(file_id):
                return JSONResponse(
                    status_code=status.HTTP_404_NOT_FOUND,
                    content=error_body(f"File {file_id} is not attached"),
                )
            await self.save(session_id, controller)
            return self.snapshot(session_id, controller)

        @self.router.post("/{session_id}/advance")
        async def advance(session_id: str):
            """Validate the current step and move forward."""
            controller = await self.load(session_id)
            advanced = controller.advance()
            await self.save(session_id, controller)
            return self.snapshot(session_id, controller, advanced=advanced)

        @self.router.post("/{session_id}/retreat")
        async def retreat(session_id: str):
            controller = await self.load(session_id)
            controller.retreat()
            await self.save(session_id, controller)
            return self.snapshot(session_id, controller)

        @self.router.post("/{session_id}/jump")
        async def jump(session_id: str, body: StepJump):
            controller = await self.load(session_id)
            jumped = controller.jump_to(body.step)
            await self.save(session_id, controller)
            return self.snapshot(session_id, controller, jumped=jumped)

        @self.router.get("/{session_id}/pricing")
        async def pricing(session_id: str):
            controller = await self.load(session_id)
            quote_ = self.service_data.quote(controller.record)
            return {
                "sessionId": session_id,
                "pricing": quote_.to_dict() if quote_ else None,
                "currency": self.settings.currency,
            }

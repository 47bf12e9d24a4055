"""
Contact form state machine.

    idle ──submit──▶ loading ──ok──────▶ success (fields cleared)
                        └──failure──▶ error   (fields kept)

success and error go back to loading on the next submit. Submitting while
loading does nothing.
"""

import asyncio
import logging
from typing import Dict, List, Optional

import aiohttp

from storefront.config import settings
from storefront.models.schemas import ContactResponse, FormState, FormStatus

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again later."
REJECTED_MESSAGE = "Failed to submit the form"
SUCCESS_MESSAGE = "Your message has been sent successfully. We will get back to you soon!"
FORM_FIELDS = ("name", "email", "message")


class ContactSubmissionError(Exception):
    """The contact endpoint rejected the submission or could not be reached"""


class MissingFieldsError(ValueError):
    def __init__(self, fields: List[str]):
        super().__init__(f"Required fields are empty: {', '.join(fields)}")
        self.fields = fields


# Transitions

def edit_field(state: FormState, field: str, value: str) -> FormState:
    if field not in FORM_FIELDS:
        raise KeyError(f"Unknown form field: {field}")
    return state.model_copy(update={field: value})


def begin_submit(state: FormState) -> FormState:
    return state.model_copy(update={"status": FormStatus.LOADING, "error_message": ""})


def submit_succeeded(state: FormState) -> FormState:
    return FormState(status=FormStatus.SUCCESS)


def submit_failed(state: FormState, reason: Optional[str] = None) -> FormState:
    return state.model_copy(update={
        "status": FormStatus.ERROR,
        "error_message": reason or GENERIC_ERROR_MESSAGE,
    })


def missing_fields(state: FormState) -> List[str]:
    return [field for field in FORM_FIELDS if not getattr(state, field).strip()]


class ContactFormSubmitter:
    """Posts a submission as JSON to the configured endpoint (Formspree compatible)"""

    def __init__(self, endpoint: Optional[str] = None, timeout: Optional[int] = None,
                 session: Optional[aiohttp.ClientSession] = None):
        self.endpoint = endpoint if endpoint is not None else settings.CONTACT_FORM_ENDPOINT
        self.timeout = aiohttp.ClientTimeout(total=timeout or settings.REQUEST_TIMEOUT)
        self.headers = {
            'Accept': 'application/json',
            'Content-Type': 'application/json',
        }
        self.session = session

    async def submit(self, payload: Dict[str, str]) -> None:
        """
        Send one submission

        Raises:
            ContactSubmissionError: endpoint missing, non-2xx response or network failure
        """
        if not self.endpoint:
            raise ContactSubmissionError("Contact form endpoint is not configured")

        if self.session is not None:
            await self._post(self.session, payload)
            return

        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            await self._post(session, payload)

    async def _post(self, session: aiohttp.ClientSession, payload: Dict[str, str]) -> None:
        try:
            async with session.post(self.endpoint, json=payload, headers=self.headers) as response:
                if 200 <= response.status < 300:
                    return
                reason = await self._rejection_reason(response)
                logger.warning(f"Contact endpoint rejected submission with HTTP {response.status}: {reason}")
                raise ContactSubmissionError(reason)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ContactSubmissionError(str(e) or GENERIC_ERROR_MESSAGE) from e

    @staticmethod
    async def _rejection_reason(response: aiohttp.ClientResponse) -> str:
        """Formspree style bodies carry {"error": ...} or {"errors": [{"message": ...}]}"""
        try:
            body = await response.json(content_type=None)
        except (ValueError, aiohttp.ContentTypeError):
            return REJECTED_MESSAGE

        if isinstance(body, dict):
            if isinstance(body.get("error"), str) and body["error"]:
                return body["error"]
            errors = body.get("errors")
            if isinstance(errors, list) and errors and isinstance(errors[0], dict) and errors[0].get("message"):
                return errors[0]["message"]
        return REJECTED_MESSAGE


class ContactFormController:
    """One form instance: owns its FormState and drives at most one submission at a time"""

    def __init__(self, submitter: ContactFormSubmitter, state: Optional[FormState] = None):
        self.submitter = submitter
        self.state = state or FormState()

    @property
    def submit_disabled(self) -> bool:
        return self.state.status == FormStatus.LOADING

    def update_field(self, field: str, value: str) -> FormState:
        self.state = edit_field(self.state, field, value)
        return self.state

    def fill(self, name: str, email: str, message: str) -> FormState:
        for field, value in zip(FORM_FIELDS, (name, email, message)):
            self.update_field(field, value)
        return self.state

    async def submit(self) -> FormState:
        if self.submit_disabled:
            logger.info("Submit ignored: a submission is already in flight")
            return self.state

        missing = missing_fields(self.state)
        if missing:
            raise MissingFieldsError(missing)

        self.state = begin_submit(self.state)
        payload = {field: getattr(self.state, field) for field in FORM_FIELDS}

        try:
            await self.submitter.submit(payload)
        except Exception as e:
            logger.error(f"Contact form submission failed: {e}")
            self.state = submit_failed(self.state, str(e))
        else:
            logger.info("Contact form submitted successfully")
            self.state = submit_succeeded(self.state)

        return self.state

    def to_response(self) -> ContactResponse:
        state = self.state
        return ContactResponse(
            status=state.status,
            name=state.name,
            email=state.email,
            message=state.message,
            error_message=state.error_message,
            notice=SUCCESS_MESSAGE if state.status == FormStatus.SUCCESS else (
                state.error_message if state.status == FormStatus.ERROR else None
            ),
            submit_label="Submitting..." if self.submit_disabled else "Submit",
            submit_disabled=self.submit_disabled
        )

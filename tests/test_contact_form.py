# =============================================================================
# tests/test_contact_form.py - Contact Form State Machine Tests
# =============================================================================

import asyncio

import aiohttp
import pytest

from storefront.models.schemas import FormState, FormStatus
from storefront.services.contact_form import (
    GENERIC_ERROR_MESSAGE,
    REJECTED_MESSAGE,
    SUCCESS_MESSAGE,
    ContactFormController,
    ContactFormSubmitter,
    ContactSubmissionError,
    MissingFieldsError,
    begin_submit,
    edit_field,
    submit_failed,
    submit_succeeded,
)
from tests.fakes import FakeResponse, FakeSession, FakeSubmitter


def filled_controller(submitter) -> ContactFormController:
    controller = ContactFormController(submitter)
    controller.fill("Ada Lovelace", "ada@example.com", "Do you stock silk?")
    if isinstance(submitter, FakeSubmitter):
        submitter.controller = controller
    return controller


# =============================================================================
# Transitions
# =============================================================================

class TestTransitions:
    """Transition functions return new states and never mutate their input."""

    def test_begin_submit_clears_error(self):
        state = FormState(name="a", email="b@c.de", message="m", status=FormStatus.ERROR, error_message="old")

        new = begin_submit(state)

        assert new.status == FormStatus.LOADING
        assert new.error_message == ""
        assert new.name == "a"
        assert state.status == FormStatus.ERROR

    def test_success_clears_fields(self):
        state = FormState(name="a", email="b@c.de", message="m", status=FormStatus.LOADING)

        assert submit_succeeded(state) == FormState(status=FormStatus.SUCCESS)

    def test_failure_keeps_fields_and_falls_back(self):
        state = FormState(name="a", email="b@c.de", message="m", status=FormStatus.LOADING)

        new = submit_failed(state, "")

        assert new.status == FormStatus.ERROR
        assert (new.name, new.email, new.message) == ("a", "b@c.de", "m")
        assert new.error_message == GENERIC_ERROR_MESSAGE

    def test_edit_unknown_field(self):
        with pytest.raises(KeyError):
            edit_field(FormState(), "status", "success")

    def test_state_is_frozen(self):
        with pytest.raises(Exception):
            FormState().name = "x"


# =============================================================================
# Controller
# =============================================================================

class TestContactFormController:

    @pytest.mark.asyncio
    async def test_successful_round_trip(self):
        submitter = FakeSubmitter()
        controller = filled_controller(submitter)
        assert controller.state.status == FormStatus.IDLE

        state = await controller.submit()

        assert submitter.statuses_seen == [FormStatus.LOADING]
        assert state.status == FormStatus.SUCCESS
        assert (state.name, state.email, state.message) == ("", "", "")
        assert submitter.payloads == [{
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "message": "Do you stock silk?",
        }]

    @pytest.mark.asyncio
    async def test_rejected_submission_keeps_fields(self):
        submitter = FakeSubmitter(error=ContactSubmissionError(REJECTED_MESSAGE))
        controller = filled_controller(submitter)

        state = await controller.submit()

        assert submitter.statuses_seen == [FormStatus.LOADING]
        assert state.status == FormStatus.ERROR
        assert state.name == "Ada Lovelace"
        assert state.email == "ada@example.com"
        assert state.message == "Do you stock silk?"
        assert state.error_message == REJECTED_MESSAGE

    @pytest.mark.asyncio
    async def test_network_failure_without_message_uses_fallback(self):
        controller = filled_controller(FakeSubmitter(error=aiohttp.ClientConnectionError()))

        state = await controller.submit()

        assert state.status == FormStatus.ERROR
        assert state.error_message == GENERIC_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_submit_while_loading_is_ignored(self):
        submitter = FakeSubmitter(block=True)
        controller = filled_controller(submitter)

        first = asyncio.create_task(controller.submit())
        await asyncio.sleep(0)
        assert controller.submit_disabled

        second = await controller.submit()

        assert second.status == FormStatus.LOADING
        assert len(submitter.payloads) == 1

        submitter.release.set()
        assert (await first).status == FormStatus.SUCCESS
        assert len(submitter.payloads) == 1

    @pytest.mark.asyncio
    async def test_retry_after_error_clears_message(self):
        submitter = FakeSubmitter(error=ContactSubmissionError("Form not found"), block=True)
        controller = filled_controller(submitter)
        submitter.release.set()
        await controller.submit()
        assert controller.state.error_message == "Form not found"

        submitter.release.clear()
        submitter.error = None
        retry = asyncio.create_task(controller.submit())
        await asyncio.sleep(0)

        assert controller.state.status == FormStatus.LOADING
        assert controller.state.error_message == ""

        submitter.release.set()
        assert (await retry).status == FormStatus.SUCCESS
        assert len(submitter.payloads) == 2

    @pytest.mark.asyncio
    async def test_resubmit_after_success(self):
        submitter = FakeSubmitter()
        controller = filled_controller(submitter)
        await controller.submit()

        controller.fill("Grace", "grace@example.com", "Second message")
        state = await controller.submit()

        assert state.status == FormStatus.SUCCESS
        assert submitter.payloads[1]["name"] == "Grace"

    @pytest.mark.asyncio
    async def test_blank_fields_rejected_before_request(self):
        submitter = FakeSubmitter()
        controller = ContactFormController(submitter)
        controller.update_field("name", "Ada")

        with pytest.raises(MissingFieldsError) as exc_info:
            await controller.submit()

        assert exc_info.value.fields == ["email", "message"]
        assert controller.state.status == FormStatus.IDLE
        assert submitter.payloads == []

    def test_response_labels(self):
        controller = ContactFormController(FakeSubmitter())
        assert controller.to_response().submit_label == "Submit"

        controller.state = FormState(status=FormStatus.LOADING)
        response = controller.to_response()
        assert response.submit_label == "Submitting..."
        assert response.submit_disabled is True

        controller.state = FormState(status=FormStatus.SUCCESS)
        assert controller.to_response().notice == SUCCESS_MESSAGE


# =============================================================================
# Submitter
# =============================================================================

class TestContactFormSubmitter:

    @pytest.mark.asyncio
    async def test_posts_json_with_headers(self):
        session = FakeSession(FakeResponse(200, {"ok": True}))
        submitter = ContactFormSubmitter(endpoint="https://forms.example.com/f/abc", session=session)

        await submitter.submit({"name": "A", "email": "a@b.co", "message": "hi"})

        request = session.requests[0]
        assert request["url"] == "https://forms.example.com/f/abc"
        assert request["json"] == {"name": "A", "email": "a@b.co", "message": "hi"}
        assert request["headers"]["Accept"] == "application/json"
        assert request["headers"]["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_server_reason_is_surfaced(self):
        body = {"errors": [{"field": "email", "message": "should be an email"}]}
        session = FakeSession(FakeResponse(422, body))
        submitter = ContactFormSubmitter(endpoint="https://forms.example.com/f/abc", session=session)

        with pytest.raises(ContactSubmissionError, match="should be an email"):
            await submitter.submit({"name": "A", "email": "nope", "message": "hi"})

    @pytest.mark.asyncio
    async def test_non_json_rejection_uses_default_reason(self):
        session = FakeSession(FakeResponse(500, None, "Internal Server Error"))
        submitter = ContactFormSubmitter(endpoint="https://forms.example.com/f/abc", session=session)

        with pytest.raises(ContactSubmissionError, match=REJECTED_MESSAGE):
            await submitter.submit({"name": "A", "email": "a@b.co", "message": "hi"})

    @pytest.mark.asyncio
    async def test_network_error_wrapped(self):
        session = FakeSession(error=aiohttp.ClientConnectionError("connection refused"))
        submitter = ContactFormSubmitter(endpoint="https://forms.example.com/f/abc", session=session)

        with pytest.raises(ContactSubmissionError, match="connection refused"):
            await submitter.submit({"name": "A", "email": "a@b.co", "message": "hi"})

    @pytest.mark.asyncio
    async def test_missing_endpoint(self):
        session = FakeSession()
        submitter = ContactFormSubmitter(endpoint="", session=session)

        with pytest.raises(ContactSubmissionError, match="not configured"):
            await submitter.submit({"name": "A", "email": "a@b.co", "message": "hi"})
        assert session.requests == []

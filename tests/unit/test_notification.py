"""
Unit tests for the Notification Lambda.

Tests cover:
- Templates: templates.py
- Parameters and handler: handler.py
"""

import pytest
from pydantic import ValidationError

from lambdas.notification.templates import construct_message, format_date
from shiftbot.exceptions import ConfigurationError, InvalidEmailFormatError, SESError
from shiftbot.models.events import ChangeEvent, ChangeState
from shiftbot.models.shift import Shift

SHIFT_URL = "https://m.shiftboard.com/onlocationexp/schedules/shifts/1001"


@pytest.fixture
def shift(shift_data) -> Shift:
    return Shift.model_validate(shift_data)


@pytest.fixture
def created_event(shift) -> ChangeEvent:
    return ChangeEvent(state=ChangeState.CREATED, shift=shift)


@pytest.fixture
def updated_event(shift) -> ChangeEvent:
    return ChangeEvent(state=ChangeState.UPDATED, shift=shift)


# ============================================================================
# Template Tests
# ============================================================================

class TestConstructMessage:
    def test_created_message(self, created_event, settings):
        message = construct_message(created_event, settings)

        assert message.subject == "New shift added: Stage Crew - Evening Load In"
        assert "starting on Wed, 15 Jun 2022 08:00:00 UTC" in message.text_body
        assert "at Arena, Springfield, IL" in message.text_body
        assert SHIFT_URL in message.text_body
        assert message.text_body.rstrip().endswith("ShiftBoard Bot")

    def test_updated_message_uses_updated_timestamp(self, updated_event, settings):
        message = construct_message(updated_event, settings)

        assert message.subject == "Shift updated: Stage Crew - Evening Load In"
        assert "updated on Wed, 01 Jun 2022 00:00:00 UTC" in message.text_body
        assert "starts on Wed, 15 Jun 2022 08:00:00 UTC" in message.text_body

    def test_html_links_shift(self, created_event, settings):
        message = construct_message(created_event, settings)

        assert f'<a href="{SHIFT_URL}">Stage Crew - Evening Load In</a>' in message.html_body

    def test_html_escapes_shift_name(self, shift_data, settings):
        shift_data["name"] = "Crew <Lead> & Co"
        event = ChangeEvent(state=ChangeState.CREATED, shift=Shift.model_validate(shift_data))

        message = construct_message(event, settings)

        assert "Crew &lt;Lead&gt; &amp; Co" in message.html_body
        assert "Crew <Lead> & Co" in message.text_body
        assert message.subject == "New shift added: Crew <Lead> & Co"

    def test_location_omitted_when_absent(self, shift_data, settings):
        del shift_data["location"]
        event = ChangeEvent(state=ChangeState.CREATED, shift=Shift.model_validate(shift_data))

        message = construct_message(event, settings)

        assert " at " not in message.text_body

    def test_link_and_signature_follow_settings(self, created_event, settings):
        custom = settings.model_copy(
            update={"shift_url_base": "https://example.com/shifts/", "notification_signature": "Ops"}
        )

        message = construct_message(created_event, custom)

        assert "https://example.com/shifts/1001" in message.text_body
        assert message.text_body.rstrip().endswith("Ops")

    def test_format_date(self, shift):
        assert format_date(shift.starts_at) == "Wed, 15 Jun 2022 08:00:00 UTC"


# ============================================================================
# Parameter Tests
# ============================================================================

class TestLoadNotificationParameters:
    def test_reads_sender_and_recipients(self, mock_ssm, settings):
        from lambdas.notification.handler import load_notification_parameters

        params = load_notification_parameters(settings)

        assert params.sender == "no-reply@example.com"
        assert params.recipients == ["john.doe@example.com", "jane.doe@example.com"]

    def test_invalid_sender(self, mock_ssm, settings):
        from lambdas.notification.handler import load_notification_parameters

        mock_ssm.put_parameter(
            Name="/shiftboard/notifications/sender", Value="not-an-email", Type="String", Overwrite=True
        )

        with pytest.raises(InvalidEmailFormatError):
            load_notification_parameters(settings)

    def test_missing_recipient(self, mock_ssm, settings):
        from lambdas.notification.handler import load_notification_parameters

        mock_ssm.delete_parameter(Name="/shiftboard/notifications/recipient")

        with pytest.raises(ConfigurationError) as exc_info:
            load_notification_parameters(settings)

        assert exc_info.value.parameter == "recipient"

    def test_recipient_of_only_separators(self, mock_ssm, settings):
        from lambdas.notification.handler import load_notification_parameters

        mock_ssm.put_parameter(
            Name="/shiftboard/notifications/recipient", Value=" , ", Type="String", Overwrite=True
        )

        with pytest.raises(ConfigurationError):
            load_notification_parameters(settings)


# ============================================================================
# Handler Tests
# ============================================================================

class TestNotificationHandler:
    def test_sends_email_for_change_event(self, mock_ssm, mock_ses, created_event):
        from lambdas.notification.handler import lambda_handler

        result = lambda_handler(created_event.to_payload(), None)

        assert result["statusCode"] == 200
        assert result["body"]["message_id"]
        assert result["body"]["state"] == "created"
        assert result["body"]["shift_id"] == "1001"
        assert mock_ses.get_send_quota()["SentLast24Hours"] == 2

    def test_accepts_updated_event(self, mock_ssm, mock_ses, updated_event):
        from lambdas.notification.handler import lambda_handler

        result = lambda_handler(updated_event.to_payload(), None)

        assert result["body"]["state"] == "updated"

    def test_unchanged_payload_rejected(self, shift):
        from lambdas.notification.handler import lambda_handler

        with pytest.raises(ValidationError):
            lambda_handler({"State": "unchanged", "Shift": shift.to_payload()}, None)

    def test_unverified_sender_raises(self, mock_ssm, mock_ses, created_event):
        from lambdas.notification.handler import lambda_handler

        mock_ssm.put_parameter(
            Name="/shiftboard/notifications/sender",
            Value="someone-else@example.com",
            Type="String",
            Overwrite=True,
        )

        with pytest.raises(SESError):
            lambda_handler(created_event.to_payload(), None)

"""
Tests for WasenderClient request handling.

Covers authentication header selection, endpoint URLs, error mapping and the
injected-session lifecycle.
"""

import pytest

from wasender.core.exceptions import WasenderApiError, WasenderConfigurationError
from wasender.messaging.client import WasenderClient, WasenderUrlBuilder

BASE_URL = "https://www.wasenderapi.com/api"


class TestUrlBuilder:
    def test_trailing_slash_is_stripped(self):
        builder = WasenderUrlBuilder("https://example.test/api/")

        assert builder.get_endpoint_url("/contacts") == "https://example.test/api/contacts"

    def test_path_without_leading_slash(self):
        builder = WasenderUrlBuilder("https://example.test/api")

        assert builder.get_endpoint_url("groups") == "https://example.test/api/groups"


@pytest.mark.asyncio
class TestSendMessage:
    async def test_send_text_returns_response_body_verbatim(self, client, fake_session):
        body = {"success": True, "data": {"msgId": 42, "jid": "123", "status": "sent"}}
        fake_session.queue(200, body)

        result = await client.send_text("123", "hello")

        assert result == body

    async def test_send_text_uses_api_key_headers(self, client, fake_session):
        fake_session.queue(200, {"success": True})

        await client.send_text("123", "hello")

        headers = fake_session.last_request["headers"]
        assert headers["Authorization"] == "Bearer testkey"
        assert headers["Accept"] == "application/json"
        assert headers["User-Agent"] == "wasenderapi-python-sdk"

    async def test_error_status_raises_api_error_with_body(self, client, fake_session):
        fake_session.queue(400, {"success": False, "message": "Invalid number"})

        with pytest.raises(WasenderApiError) as exc_info:
            await client.send_text("invalid", "hello")

        error = exc_info.value
        assert error.status_code == 400
        assert error.response == {"success": False, "message": "Invalid number"}
        assert "Invalid number" in error.message

    async def test_non_json_error_body_has_no_response(self, client, fake_session):
        fake_session.queue(502, "<html>Bad Gateway</html>")

        with pytest.raises(WasenderApiError) as exc_info:
            await client.get_contacts()

        assert exc_info.value.status_code == 502
        assert exc_info.value.response is None

    async def test_empty_success_body_returns_empty_dict(self, client, fake_session):
        fake_session.queue(204, "")

        assert await client.block_contact("123") == {}

    async def test_non_json_success_body_raises(self, client, fake_session):
        fake_session.queue(200, "not json")

        with pytest.raises(WasenderApiError):
            await client.get_groups()

    async def test_json_null_success_body_returns_empty_dict(self, client, fake_session):
        fake_session.queue(200, "null")

        assert await client.get_groups() == {}

    async def test_non_object_success_body_raises(self, client, fake_session):
        fake_session.queue(200, ["g1@g.us"])

        with pytest.raises(WasenderApiError, match="expected a JSON object"):
            await client.get_groups()

    async def test_json_null_error_body(self, client, fake_session):
        fake_session.queue(500, "null")

        with pytest.raises(WasenderApiError) as exc_info:
            await client.get_groups()

        assert exc_info.value.status_code == 500
        assert exc_info.value.response is None

    async def test_request_without_session_raises(self, config):
        client = WasenderClient(config=config)

        with pytest.raises(WasenderConfigurationError):
            await client.get_contacts()


@pytest.mark.asyncio
class TestEndpoints:
    @pytest.mark.parametrize(
        "call,method,path,payload",
        [
            (lambda c: c.get_contacts(), "GET", "/contacts", None),
            (lambda c: c.get_contact_info("123"), "GET", "/contacts/123", None),
            (
                lambda c: c.get_contact_profile_picture("123"),
                "GET",
                "/contacts/123/profile-picture",
                None,
            ),
            (lambda c: c.block_contact("123"), "POST", "/contacts/123/block", None),
            (lambda c: c.unblock_contact("123"), "POST", "/contacts/123/unblock", None),
            (lambda c: c.get_groups(), "GET", "/groups", None),
            (
                lambda c: c.get_group_metadata("g@g.us"),
                "GET",
                "/groups/g@g.us/metadata",
                None,
            ),
            (
                lambda c: c.get_group_participants("g@g.us"),
                "GET",
                "/groups/g@g.us/participants",
                None,
            ),
            (
                lambda c: c.add_group_participants("g@g.us", ["1", "2"]),
                "POST",
                "/groups/g@g.us/participants/add",
                {"participants": ["1", "2"]},
            ),
            (
                lambda c: c.remove_group_participants("g@g.us", ["1"]),
                "POST",
                "/groups/g@g.us/participants/remove",
                {"participants": ["1"]},
            ),
            (
                lambda c: c.update_group_settings("g@g.us", {"announce": True}),
                "PUT",
                "/groups/g@g.us/settings",
                {"announce": True},
            ),
        ],
    )
    async def test_api_key_endpoints(
        self, client, fake_session, call, method, path, payload
    ):
        fake_session.queue(200, {"success": True})

        await call(client)

        request = fake_session.last_request
        assert request["method"] == method
        assert request["url"] == f"{BASE_URL}{path}"
        assert request["json"] == payload
        assert request["headers"]["Authorization"] == "Bearer testkey"

    @pytest.mark.parametrize(
        "call,method,path",
        [
            (lambda c: c.get_all_whatsapp_sessions(), "GET", "/whatsapp-sessions"),
            (
                lambda c: c.create_whatsapp_session({"name": "s"}),
                "POST",
                "/whatsapp-sessions",
            ),
            (lambda c: c.get_whatsapp_session_details(7), "GET", "/whatsapp-sessions/7"),
            (
                lambda c: c.update_whatsapp_session(7, {"name": "s"}),
                "PUT",
                "/whatsapp-sessions/7",
            ),
            (lambda c: c.delete_whatsapp_session(7), "DELETE", "/whatsapp-sessions/7"),
            (
                lambda c: c.connect_whatsapp_session(7),
                "POST",
                "/whatsapp-sessions/7/connect",
            ),
            (
                lambda c: c.get_whatsapp_session_qr_code(7),
                "GET",
                "/whatsapp-sessions/7/qr-code",
            ),
            (
                lambda c: c.disconnect_whatsapp_session(7),
                "POST",
                "/whatsapp-sessions/7/disconnect",
            ),
            (
                lambda c: c.regenerate_api_key(7),
                "POST",
                "/whatsapp-sessions/7/regenerate-api-key",
            ),
            (lambda c: c.get_session_status("abc"), "GET", "/sessions/abc/status"),
        ],
    )
    async def test_personal_token_endpoints(
        self, pat_client, fake_session, call, method, path
    ):
        fake_session.queue(200, {"success": True})

        await call(pat_client)

        request = fake_session.last_request
        assert request["method"] == method
        assert request["url"] == f"{BASE_URL}{path}"
        assert request["headers"]["Authorization"] == "Bearer testpat"

    async def test_personal_token_endpoint_without_token_makes_no_request(
        self, client, fake_session
    ):
        with pytest.raises(WasenderConfigurationError):
            await client.get_all_whatsapp_sessions()

        assert fake_session.requests == []

    async def test_connect_session_with_qr_as_image(self, pat_client, fake_session):
        fake_session.queue(200, {"success": True, "data": {"qrCode": "data:image/png"}})

        await pat_client.connect_whatsapp_session(7, qr_as_image=True)

        assert fake_session.last_request["params"] == {"qrAsImage": "true"}

    async def test_connect_session_without_qr_as_image(self, pat_client, fake_session):
        fake_session.queue(200, {"success": True})

        await pat_client.connect_whatsapp_session(7)

        assert fake_session.last_request["params"] is None


class TestClientConfiguration:
    def test_explicit_arguments_override_config(self, fake_session, config):
        client = WasenderClient(
            fake_session,
            api_key="other",
            personal_access_token="pat",
            base_url="https://example.test/api/",
            config=config,
        )

        assert client.api_key == "other"
        assert client.personal_access_token == "pat"
        assert client.url_builder.base_url == "https://example.test/api"

    def test_values_default_to_config(self, fake_session, config):
        client = WasenderClient(fake_session, config=config)

        assert client.api_key == "testkey"
        assert client.personal_access_token == ""
        assert client.url_builder.base_url == BASE_URL


@pytest.mark.asyncio
class TestSessionLifecycle:
    async def test_injected_session_is_not_closed(self, fake_session, config):
        async with WasenderClient(fake_session, config=config) as client:
            assert client.session is fake_session

        assert fake_session.closed is False

    async def test_owned_session_is_closed_on_exit(self, config):
        client = WasenderClient(config=config)

        async with client:
            assert client.session is not None
            session = client.session

        assert session.closed
        assert client.session is None

import asyncio
import json
from typing import List

import httpx
import pytest

from planvision.client import endpoints
from planvision.client.dtos import CreateRenderConfigDTO, EmptyResponse, ImageTypeDTO
from planvision.client.errors import DecodingError, InvalidURLError, UnauthorizedError, UnknownNetworkError
from planvision.client.http_client import HTTPClient
from planvision.client.services import AuthService, HomeService, InputImageService, ProjectService
from planvision.client.signals import UnauthorizedSignal
from planvision.client.token_store import MemoryTokenStore
from planvision.client.session import SessionManager
from planvision.models.schemas import SessionInfo, SessionUser, UserSession


class Recorder:
    """MockTransport handler returning a canned response and keeping requests."""

    def __init__(self, status_code=200, payload=None, content=None):
        self.status_code = status_code
        self.payload = payload
        self.content = content
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.payload)


def _client(handler, token=None, signal=None):
    return HTTPClient(
        MemoryTokenStore(token),
        signal or UnauthorizedSignal(),
        base_url="http://localhost:8000",
        transport=httpx.MockTransport(handler),
    )


def test_authenticated_request_sends_bearer_token():
    handler = Recorder(payload=[{"id": "t1", "label": "Room Photo", "value": "room_photo"}])
    http = _client(handler, token="abc")

    result = asyncio.run(http.send_request(endpoints.get_image_types(), List[ImageTypeDTO]))

    assert result[0].label == "Room Photo"
    request = handler.requests[0]
    assert request.url == "http://localhost:8000/image-types"
    assert request.headers["Authorization"] == "Bearer abc"


def test_auth_endpoints_send_origin_and_no_token():
    handler = Recorder(payload={"token": "t", "user": {"id": "u", "email": "e@example.com", "name": "E"}})
    http = _client(handler, token="stale")

    asyncio.run(AuthService(http).sign_in("e@example.com", "pw"))

    request = handler.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/api/auth/sign-in/email"
    assert "Authorization" not in request.headers
    assert request.headers["Origin"] == "http://localhost:8000"
    assert json.loads(request.content) == {"email": "e@example.com", "password": "pw"}


def test_styles_query_parameter():
    handler = Recorder(payload=[])
    asyncio.run(HomeService(_client(handler)).fetch_styles("type-1"))

    assert handler.requests[0].url.params["imageTypeId"] == "type-1"


def test_unauthorized_emits_signal_then_raises():
    signal = UnauthorizedSignal()
    calls = []
    signal.connect(lambda: calls.append("unauthorized"))
    http = _client(Recorder(status_code=401, payload={"detail": "Session is required"}), token="abc", signal=signal)

    with pytest.raises(UnauthorizedError):
        asyncio.run(http.send_request(endpoints.get_templates(), EmptyResponse))
    assert calls == ["unauthorized"]


def test_other_statuses_raise_unknown():
    http = _client(Recorder(status_code=500, payload={"detail": "boom"}))

    with pytest.raises(UnknownNetworkError) as exc:
        asyncio.run(http.send_request(endpoints.get_templates(), EmptyResponse))
    assert exc.value.status_code == 500


def test_undecodable_body_raises_decoding_error():
    http = _client(Recorder(payload={"unexpected": True}))

    with pytest.raises(DecodingError) as exc:
        asyncio.run(http.send_request(endpoints.get_image_types(), List[ImageTypeDTO]))
    assert exc.value.custom_message == "Server data format invalid"


def test_empty_success_body_decodes_to_empty_response():
    http = _client(Recorder(status_code=200, content=b""))

    assert isinstance(asyncio.run(http.send_request(endpoints.sign_out(), EmptyResponse)), EmptyResponse)


def test_transport_errors_raise_unknown():
    def fail(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UnknownNetworkError):
        asyncio.run(_client(fail).send_request(endpoints.get_templates(), EmptyResponse))


def test_invalid_base_url_raises_invalid_url():
    http = HTTPClient(MemoryTokenStore(), UnauthorizedSignal(), base_url="http://localhost:notaport")

    with pytest.raises(InvalidURLError):
        asyncio.run(http.send_request(endpoints.get_templates(), EmptyResponse))


def test_upload_is_multipart_jpeg():
    handler = Recorder(status_code=201, payload={
        "id": "img-1", "url": "https://cdn.example.com/a.jpg", "userId": "u", "createdAt": "2025-01-01T00:00:00Z",
    })

    image = asyncio.run(InputImageService(_client(handler, token="abc")).upload_image(b"\xff\xd8data"))

    assert image.id == "img-1"
    request = handler.requests[0]
    assert request.url.path == "/input-images/upload"
    assert request.headers["content-type"].startswith("multipart/form-data")
    assert b'name="file"; filename="upload.jpg"' in request.content
    assert b"Content-Type: image/jpeg" in request.content


def test_sign_in_saves_token():
    handler = Recorder(payload={"token": "fresh", "user": {"id": "u1", "email": "e@example.com", "name": "E"}})
    http = _client(handler)

    user = asyncio.run(AuthService(http).sign_in("e@example.com", "pw"))

    assert user.id == "u1"
    assert http.token_store.get_token() == "fresh"


def test_failed_sign_in_keeps_no_token():
    http = _client(Recorder(status_code=401, payload={"detail": "Invalid email or password"}))

    with pytest.raises(UnauthorizedError):
        asyncio.run(AuthService(http).sign_in("e@example.com", "bad"))
    assert http.token_store.get_token() is None


def test_sign_out_deletes_token():
    http = _client(Recorder(payload={"success": True}), token="abc")

    asyncio.run(AuthService(http).sign_out())

    assert http.token_store.get_token() is None


def test_create_render_config_omits_unset_fields():
    handler = Recorder(status_code=201, payload={"id": "cfg-1"})
    dto = CreateRenderConfigDTO(project_id="p", input_image_id="i", image_type_id="t", color_primary_hex="BCB88A")

    result = asyncio.run(ProjectService(_client(handler, token="abc")).create_render_config(dto))

    assert result.id == "cfg-1"
    assert json.loads(handler.requests[0].content) == {
        "projectId": "p",
        "inputImageId": "i",
        "imageTypeId": "t",
        "colorPrimaryHex": "BCB88A",
    }


def test_generation_status_maps_to_domain():
    handler = Recorder(payload={"id": "", "status": "pending"})

    status = asyncio.run(ProjectService(_client(handler, token="abc")).get_generation_status("cfg-1"))

    assert handler.requests[0].url.path == "/render-configs/cfg-1/generation"
    assert status.state.value == "pending"
    assert not status.is_finished


def test_session_without_email_decodes():
    server_session = UserSession(
        session=SessionInfo(id="s1"),
        user=SessionUser(id="phone-user", email=None, name=""),
    )
    handler = Recorder(payload=server_session.model_dump(mode="json", by_alias=True))

    user = asyncio.run(AuthService(_client(handler, token="abc")).fetch_session())

    assert user.id == "phone-user"
    assert user.email == ""


def test_check_session_keeps_user_without_email():
    server_session = UserSession(
        session=SessionInfo(id="s1"),
        user=SessionUser(id="phone-user", email=None, name="Pat"),
    )
    http = _client(Recorder(payload=server_session.model_dump(mode="json", by_alias=True)), token="abc")
    manager = SessionManager(AuthService(http), http.token_store, http.unauthorized)

    asyncio.run(manager.check_session())

    assert manager.current_user.name == "Pat"
    assert http.token_store.get_token() == "abc"

"""
Request descriptions for every backend call the client makes.
"""
from dataclasses import dataclass
from typing import Optional, Dict, Any

from planvision.client.config import BASE_URL


@dataclass(frozen=True)
class Endpoint:
    path: str
    method: str = "GET"
    query: Optional[Dict[str, str]] = None
    body: Optional[Dict[str, Any]] = None
    # raw image bytes sent as the multipart "file" part
    upload: Optional[bytes] = None
    headers: Optional[Dict[str, str]] = None
    authenticated: bool = True


# --- Auth ---

def _auth(path: str, method: str = "POST", body=None, authenticated=False) -> Endpoint:
    return Endpoint(
        path=f"/api/auth{path}",
        method=method,
        body=body,
        headers={"Origin": BASE_URL},
        authenticated=authenticated,
    )


def sign_in(email: str, password: str) -> Endpoint:
    return _auth("/sign-in/email", body={"email": email, "password": password})


def sign_up(name: str, email: str, password: str) -> Endpoint:
    return _auth("/sign-up/email", body={"name": name, "email": email, "password": password})


def social_login(provider: str, id_token: str, nonce: str) -> Endpoint:
    return _auth("/sign-in/social", body={"provider": provider, "idToken": id_token, "nonce": nonce})


def sign_out() -> Endpoint:
    return _auth("/sign-out", authenticated=True)


def get_session() -> Endpoint:
    return _auth("/get-session", method="GET", authenticated=True)


# --- Projects and catalogue ---

def get_templates() -> Endpoint:
    return Endpoint(path="/project-templates")


def get_image_types() -> Endpoint:
    return Endpoint(path="/image-types")


def get_styles(image_type_id: Optional[str] = None) -> Endpoint:
    query = {"imageTypeId": image_type_id} if image_type_id else None
    return Endpoint(path="/styles", query=query)


def create_project(name: str) -> Endpoint:
    return Endpoint(path="/projects", method="POST", body={"name": name})


def create_render_config(body: Dict[str, Any]) -> Endpoint:
    return Endpoint(path="/render-configs", method="POST", body=body)


def get_generation_status(config_id: str) -> Endpoint:
    return Endpoint(path=f"/render-configs/{config_id}/generation")


# --- Input images ---

def upload_input_image(data: bytes) -> Endpoint:
    return Endpoint(path="/input-images/upload", method="POST", upload=data)


def register_input_image(url: str) -> Endpoint:
    return Endpoint(path="/input-images", method="POST", body={"url": url})

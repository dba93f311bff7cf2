"""
Session resolution for incoming requests.

A ``SessionResolver`` turns request headers into a ``UserSession``. The
``AuthMiddleware`` runs the configured resolver on every request and attaches
the result to ``request.state.session``; ``require_session`` is the route
guard that rejects requests without one.

The default resolver verifies Supabase JWTs using Supabase's JWKS endpoint,
supporting automatic key rotation and the ES256 algorithm.
"""
import os
import jwt
import requests
import time
import logging
from datetime import datetime, timezone
from jwt.algorithms import ECAlgorithm
from fastapi import Request, HTTPException, status
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from supabase import create_client, Client
from typing import Optional, Mapping, Protocol

from planvision.models.schemas import AuthResponse, SessionInfo, SessionUser, UserSession

logger = logging.getLogger(__name__)

JWKS_TTL_SECONDS = 600


class SessionResolver(Protocol):
    def resolve(self, headers: Mapping[str, str]) -> Optional[UserSession]:
        ...


def extract_bearer_token(headers: Mapping[str, str]) -> Optional[str]:
    auth_header = headers.get("Authorization") or headers.get("authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    token = auth_header.split(" ", 1)[1].strip()
    return token or None


def session_from_claims(payload: dict) -> UserSession:
    """Build a UserSession from verified Supabase JWT claims."""
    user_id = payload.get("sub")
    if not user_id:
        raise ValueError("Token payload missing 'sub' claim")

    metadata = payload.get("user_metadata") or {}
    name = metadata.get("name") or metadata.get("full_name") or ""
    exp = payload.get("exp")

    return UserSession(
        session=SessionInfo(
            id=payload.get("session_id") or payload.get("jti") or "",
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None,
        ),
        user=SessionUser(id=user_id, email=payload.get("email"), name=name),
    )


class SupabaseSessionResolver:
    """Verifies Supabase access tokens against the project's JWKS."""

    def __init__(self, jwks_url: Optional[str] = None, audience: str = "authenticated"):
        if jwks_url is None:
            jwks_url = os.getenv("SUPABASE_JWKS_URL")
        if jwks_url is None and os.getenv("SUPABASE_URL"):
            jwks_url = f"{os.getenv('SUPABASE_URL').rstrip('/')}/auth/v1/.well-known/jwks.json"
        self.jwks_url = jwks_url
        self.audience = audience
        # Cache for JWKS to avoid re-fetching each request
        self._jwks_cache = {"keys": None, "timestamp": 0}

    def _get_jwks(self):
        """
        Fetch and cache the JWKS.

        The JWKS is cached for 10 minutes to reduce API calls while still
        allowing for key rotation.
        """
        if not self.jwks_url:
            raise ValueError("SUPABASE_URL or SUPABASE_JWKS_URL must be set")

        now = time.time()
        if not self._jwks_cache["keys"] or (now - self._jwks_cache["timestamp"] > JWKS_TTL_SECONDS):
            logger.info("Fetching JWKS from Supabase...")
            resp = requests.get(self.jwks_url, timeout=10)
            resp.raise_for_status()
            self._jwks_cache["keys"] = resp.json()["keys"]
            self._jwks_cache["timestamp"] = now
            logger.info(f"✅ JWKS fetched successfully ({len(self._jwks_cache['keys'])} keys)")
        return self._jwks_cache["keys"]

    def resolve(self, headers: Mapping[str, str]) -> Optional[UserSession]:
        """
        Verify the bearer token and return its session.

        Returns None when there is no token or the token does not verify.
        JWKS fetch failures propagate to the caller.
        """
        token = extract_bearer_token(headers)
        if not token:
            return None

        try:
            kid = jwt.get_unverified_header(token).get("kid")
        except jwt.InvalidTokenError as e:
            logger.warning(f"Malformed token: {e}")
            return None
        if not kid:
            logger.warning("Missing 'kid' in token header")
            return None

        key = next((k for k in self._get_jwks() if k["kid"] == kid), None)
        if not key:
            logger.warning(f"Matching key not found in JWKS for kid: {kid}")
            return None

        try:
            payload = jwt.decode(
                token,
                ECAlgorithm.from_jwk(key),
                algorithms=["ES256"],
                audience=self.audience,
            )
        except jwt.ExpiredSignatureError:
            logger.info("Token expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {e}")
            return None

        session = session_from_claims(payload)
        logger.info(f"✅ User authenticated: {session.user.id[:8]}...")
        return session


class AuthMiddleware(BaseHTTPMiddleware):
    """Attaches the resolved session (or None) to request.state.session."""

    def __init__(self, app, resolver: SessionResolver):
        super().__init__(app)
        self.resolver = resolver

    async def dispatch(self, request: Request, call_next):
        request.state.session = None
        try:
            session = await run_in_threadpool(self.resolver.resolve, request.headers)
            if session:
                request.state.session = session
        except Exception as e:
            logger.error(f"Auth middleware error: {e}")
        return await call_next(request)


def require_session(request: Request) -> UserSession:
    """
    Route guard: return the request's session or reject with 401.

    Use as ``Depends(require_session)`` on protected routes.
    """
    session = getattr(request.state, "session", None)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session is required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


class SupabaseAuthProvider:
    """
    Email, id-token and sign-out flows against Supabase Auth.

    Each call uses a fresh client so no user session is kept on a shared
    instance.
    """

    def __init__(self, url: Optional[str] = None, key: Optional[str] = None):
        self.url = url or os.getenv("SUPABASE_URL")
        self.key = key or os.getenv("SUPABASE_ANON_KEY") or os.getenv("SUPABASE_SERVICE_ROLE_KEY")
        self.admin_key = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

    def _client(self, key: Optional[str] = None) -> Client:
        key = key or self.key
        if not self.url or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
        return create_client(self.url, key)

    @staticmethod
    def _to_response(result) -> AuthResponse:
        if not result.session or not result.user:
            raise ValueError("Supabase returned no session")
        metadata = result.user.user_metadata or {}
        return AuthResponse(
            token=result.session.access_token,
            user=SessionUser(
                id=result.user.id,
                email=result.user.email,
                name=metadata.get("name") or metadata.get("full_name") or "",
            ),
        )

    def sign_in_email(self, email: str, password: str) -> AuthResponse:
        result = self._client().auth.sign_in_with_password({"email": email, "password": password})
        return self._to_response(result)

    def sign_up_email(self, name: str, email: str, password: str) -> AuthResponse:
        result = self._client().auth.sign_up({
            "email": email,
            "password": password,
            "options": {"data": {"name": name}},
        })
        return self._to_response(result)

    def sign_in_id_token(self, provider: str, id_token: str, nonce: Optional[str] = None) -> AuthResponse:
        credentials = {"provider": provider, "token": id_token}
        if nonce:
            credentials["nonce"] = nonce
        result = self._client().auth.sign_in_with_id_token(credentials)
        return self._to_response(result)

    def sign_out(self, token: str) -> None:
        # admin API needs the service role key
        self._client(self.admin_key).auth.admin.sign_out(token)

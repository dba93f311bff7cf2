"""
Authentication endpoints proxied to Supabase Auth.

Sign-in and sign-up return the access token the client stores and sends back
as ``Authorization: Bearer <token>``.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status

from planvision.api.deps import get_auth_provider
from planvision.models.schemas import (
    AuthResponse,
    SignInRequest,
    SignUpRequest,
    SocialLoginRequest,
    UserSession,
)
from planvision.services.auth import SupabaseAuthProvider, extract_bearer_token, require_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth")


@router.post("/sign-in/email", response_model=AuthResponse)
async def sign_in_email(body: SignInRequest, provider: SupabaseAuthProvider = Depends(get_auth_provider)):
    try:
        result = provider.sign_in_email(body.email, body.password)
        logger.info(f"✅ Signed in user {result.user.id[:8]}...")
        return result
    except Exception as e:
        logger.warning(f"Sign-in failed: {e}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")


@router.post("/sign-up/email", response_model=AuthResponse)
async def sign_up_email(body: SignUpRequest, provider: SupabaseAuthProvider = Depends(get_auth_provider)):
    try:
        result = provider.sign_up_email(body.name, body.email, body.password)
        logger.info(f"✅ Signed up user {result.user.id[:8]}...")
        return result
    except Exception as e:
        logger.warning(f"Sign-up failed: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Sign-up failed: {e}")


@router.post("/sign-in/social", response_model=AuthResponse)
async def sign_in_social(body: SocialLoginRequest, provider: SupabaseAuthProvider = Depends(get_auth_provider)):
    """Exchange a provider id token (e.g. Apple, Google) for a session."""
    try:
        return provider.sign_in_id_token(body.provider, body.id_token, body.nonce)
    except Exception as e:
        logger.warning(f"Social sign-in with {body.provider} failed: {e}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Social sign-in failed")


@router.post("/sign-out")
async def sign_out(request: Request, provider: SupabaseAuthProvider = Depends(get_auth_provider)):
    """Revoke the caller's session. Succeeds even if revocation fails upstream."""
    token = extract_bearer_token(request.headers)
    if token:
        try:
            provider.sign_out(token)
        except Exception as e:
            logger.warning(f"⚠️  Sign-out revocation failed: {e}")
    return {"success": True}


@router.get("/get-session", response_model=UserSession)
async def get_session(session: UserSession = Depends(require_session)):
    return session

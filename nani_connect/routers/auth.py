from fastapi import APIRouter, Depends, HTTPException, Security
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials
from supabase import Client

from ..dependencies import get_current_user, get_current_user_optional, get_profile_repository, security
from ..repositories.profiles import ProfileRepository
from ..roles import Role, resolve_route, role_of
from ..schemas.auth import AuthResponse, AuthUser, LoginPayload, LogoutPayload, RouteOut, SignupPayload
from ..session import AuthResult, SessionStore
from ..supabase_client import get_supabase_anon_client
from ..utils.notifications import Notifier, get_notifier

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_user(user) -> AuthUser:
    metadata = user.user_metadata or {}
    return AuthUser(
        id=user.id,
        email=user.email,
        role=role_of(user),
        latitude=metadata.get("latitude"),
        longitude=metadata.get("longitude"),
    )


def _response(result: AuthResult, notifier: Notifier) -> AuthResponse:
    session = result.session
    return AuthResponse(
        access_token=session.access_token if session else None,
        refresh_token=session.refresh_token if session else None,
        expires_at=getattr(session, "expires_at", None) if session else None,
        user=_auth_user(result.user) if result.user else None,
        notifications=notifier.drain(),
    )


def _failure(status_code: int, result: AuthResult, notifier: Notifier) -> JSONResponse:
    """Error response that keeps the `detail` shape of HTTPException and carries the toast along."""
    return JSONResponse(
        status_code=status_code,
        content={"detail": result.error, "notifications": jsonable_encoder(notifier.drain())},
    )


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginPayload,
    supabase: Client = Depends(get_supabase_anon_client),
    notifier: Notifier = Depends(get_notifier),
):
    with SessionStore(supabase, notifier) as store:
        result = store.sign_in_with_email(payload.email, payload.password)
    if not result.ok:
        return _failure(401, result, notifier)
    return _response(result, notifier)


@router.post("/signup", response_model=AuthResponse)
def signup(
    payload: SignupPayload,
    supabase: Client = Depends(get_supabase_anon_client),
    profiles: ProfileRepository = Depends(get_profile_repository),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Create an account. Sellers may share a location once, here; buyers' coordinates are ignored.
    """
    latitude, longitude = payload.latitude, payload.longitude
    if payload.role is not Role.SELLER:
        latitude = longitude = None

    with SessionStore(supabase, notifier) as store:
        result = store.sign_up_with_email(payload.email, payload.password, payload.role, latitude, longitude)
    if not result.ok:
        return _failure(400, result, notifier)

    profiles.upsert_profile(result.user.id, payload.role, latitude, longitude)
    return _response(result, notifier)


@router.post("/logout", response_model=AuthResponse)
def logout(
    payload: LogoutPayload,
    credentials: HTTPAuthorizationCredentials | None = Security(security),
    supabase: Client = Depends(get_supabase_anon_client),
    notifier: Notifier = Depends(get_notifier),
):
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    with SessionStore(supabase, notifier) as store:
        if store.restore(credentials.credentials, payload.refresh_token).ok:
            store.sign_out()
    return AuthResponse(notifications=notifier.drain())


@router.get("/me")
def me(user=Depends(get_current_user)):
    return user


@router.get("/route", response_model=RouteOut)
def route(user=Depends(get_current_user_optional)):
    """Where the caller should land: login, buyer dashboard or seller dashboard."""
    decision = resolve_route(False, user)
    return RouteOut(state=decision.state.value, path=decision.path)

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from innovatehub.config import Config, load_config
from innovatehub.db import connect, init_db

from innovatehub.auth import (
    ADMIN_GATE,
    TOKEN_GATE,
    bootstrap_admin_if_needed,
    create_access_token,
    require_self,
    verify_token,
)
from innovatehub.auth import crud as users_crud
from innovatehub.auth.deps import get_config
from innovatehub.billing.stripe_billing import create_payment_intent
from innovatehub.contests import crud as contests_crud


def _debug(msg: str) -> None:
    print(f"[api] {msg}")


router = APIRouter()


# -----------------------------
# Request bodies
# -----------------------------
# No validation beyond shape: every field is optional and untyped, and a
# missing field is written through as null.


class RoleUpdateRequest(BaseModel):
    selectedOption: Any = None


class UserNameUpdateRequest(BaseModel):
    userName: Any = None


class ContestStatusUpdateRequest(BaseModel):
    confirmation: Any = None
    newCount: Any = None


class ContestInfoRequest(BaseModel):
    name: Any = None
    contestPrice: Any = None
    prizeMoney: Any = None
    image: Any = None
    tag: Any = None
    deadline: Any = None
    description: Any = None
    instruction: Any = None


class WinnerUpdateRequest(BaseModel):
    confirmation: Any = None


class RegistrationStatusRequest(BaseModel):
    status: Any = None


class PaymentIntentRequest(BaseModel):
    price: Any = None


# -----------------------------
# Health
# -----------------------------


@router.get("/")
def root() -> str:
    return "InnovateHub server is running..."


@router.get("/health")
def health() -> Dict[str, Any]:
    return {"status": "ok"}


# -----------------------------
# Auth
# -----------------------------


@router.post("/jwt")
def issue_token(
    payload: Dict[str, Any] = Body(...),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    token = create_access_token(
        payload,
        secret=cfg.ACCESS_TOKEN_SECRET,
        expires_minutes=cfg.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
    return {"token": token}


# -----------------------------
# Users
# -----------------------------


@router.get("/users")
def list_users(cfg: Config = Depends(get_config)) -> List[Dict[str, Any]]:
    with connect(cfg.DB_DSN) as conn:
        return users_crud.list_users(conn)


@router.get("/users/admin/{email}")
def user_is_admin(
    email: str,
    decoded: Dict[str, Any] = Depends(verify_token),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    require_self(email, decoded)
    with connect(cfg.DB_DSN) as conn:
        user = users_crud.get_user_by_email(conn, email)
    return {"isAdmin": users_crud.has_role(user, users_crud.ROLE_ADMIN)}


@router.get("/users/creator/{email}")
def user_is_creator(
    email: str,
    decoded: Dict[str, Any] = Depends(verify_token),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    require_self(email, decoded)
    with connect(cfg.DB_DSN) as conn:
        user = users_crud.get_user_by_email(conn, email)
    return {"isCreator": users_crud.has_role(user, users_crud.ROLE_CREATOR)}


@router.post("/users")
def create_user(
    user: Dict[str, Any] = Body(...),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    """First sign-in creates the user; later sign-ins are a no-op."""
    with connect(cfg.DB_DSN) as conn:
        result = users_crud.create_user_if_absent(conn, user)
    if result is None:
        return {"message": "User already exist"}
    return result.to_dict()


@router.patch("/users/role/{user_id}", dependencies=ADMIN_GATE)
def update_user_role(
    user_id: str,
    payload: RoleUpdateRequest,
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    with connect(cfg.DB_DSN) as conn:
        return users_crud.set_user_role(conn, user_id, payload.selectedOption).to_dict()


@router.patch("/users/{user_id}")
def update_user_name(
    user_id: str,
    payload: UserNameUpdateRequest,
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    with connect(cfg.DB_DSN) as conn:
        return users_crud.set_user_name(conn, user_id, payload.userName).to_dict()


@router.delete("/users/{user_id}", dependencies=ADMIN_GATE)
def delete_user(user_id: str, cfg: Config = Depends(get_config)) -> Dict[str, Any]:
    with connect(cfg.DB_DSN) as conn:
        return users_crud.delete_user(conn, user_id).to_dict()


# -----------------------------
# Contests
# -----------------------------


@router.get("/contests")
def list_contests(cfg: Config = Depends(get_config)) -> List[Dict[str, Any]]:
    with connect(cfg.DB_DSN) as conn:
        return contests_crud.list_contests(conn)


@router.get("/contests/{contest_id}")
def get_contest(contest_id: str, cfg: Config = Depends(get_config)) -> Optional[Dict[str, Any]]:
    with connect(cfg.DB_DSN) as conn:
        return contests_crud.get_contest(conn, contest_id)


@router.post("/contests", dependencies=TOKEN_GATE)
def create_contest(
    contest: Dict[str, Any] = Body(...),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    with connect(cfg.DB_DSN) as conn:
        return contests_crud.create_contest(conn, contest).to_dict()


@router.patch("/contests/{contest_id}", dependencies=TOKEN_GATE)
def update_contest_status(
    contest_id: str,
    payload: ContestStatusUpdateRequest,
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    with connect(cfg.DB_DSN) as conn:
        result = contests_crud.update_contest_status(
            conn,
            contest_id,
            status=payload.confirmation,
            participated=payload.newCount,
        )
    return result.to_dict()


@router.put("/contests/{contest_id}", dependencies=TOKEN_GATE)
def replace_contest(
    contest_id: str,
    payload: ContestInfoRequest,
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    with connect(cfg.DB_DSN) as conn:
        return contests_crud.replace_contest_info(conn, contest_id, payload.model_dump()).to_dict()


@router.delete("/contests/{contest_id}", dependencies=TOKEN_GATE)
def delete_contest(contest_id: str, cfg: Config = Depends(get_config)) -> Dict[str, Any]:
    with connect(cfg.DB_DSN) as conn:
        return contests_crud.delete_contest(conn, contest_id).to_dict()


# -----------------------------
# Best creators
# -----------------------------


@router.get("/bestCreator")
def list_best_creators(cfg: Config = Depends(get_config)) -> List[Dict[str, Any]]:
    with connect(cfg.DB_DSN) as conn:
        return contests_crud.list_best_creators(conn)


# -----------------------------
# Payments (Stripe)
# -----------------------------


@router.post("/create-payment-intent")
def payment_intent(
    payload: PaymentIntentRequest,
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    try:
        client_secret = create_payment_intent(cfg, price=payload.price)
    except RuntimeError as e:
        # Stripe missing / not configured.
        raise HTTPException(status_code=501, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"billing_error: {e}")
    return {"clientSecret": client_secret}


# -----------------------------
# Registrations
# -----------------------------


@router.get("/registers", dependencies=TOKEN_GATE)
def list_registrations(cfg: Config = Depends(get_config)) -> List[Dict[str, Any]]:
    with connect(cfg.DB_DSN) as conn:
        return contests_crud.list_registrations(conn)


@router.post("/registers", dependencies=TOKEN_GATE)
def create_registration(
    registration: Dict[str, Any] = Body(...),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    with connect(cfg.DB_DSN) as conn:
        return contests_crud.create_registration(conn, registration).to_dict()


@router.patch("/registers/{registration_id}", dependencies=TOKEN_GATE)
def update_registration_winner(
    registration_id: str,
    payload: WinnerUpdateRequest,
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    with connect(cfg.DB_DSN) as conn:
        return contests_crud.set_registration_winner(conn, registration_id, payload.confirmation).to_dict()


@router.put("/registers/{registration_id}", dependencies=TOKEN_GATE)
def update_registration_status(
    registration_id: str,
    payload: RegistrationStatusRequest,
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    with connect(cfg.DB_DSN) as conn:
        return contests_crud.set_registration_status(conn, registration_id, payload.status).to_dict()


# -----------------------------
# App
# -----------------------------


def create_app(cfg: Config | None = None) -> FastAPI:
    """Build the API around one Config, made available to routes and gates."""
    cfg = cfg or load_config()
    app = FastAPI(title="InnovateHub", version="0.1.0")
    app.state.cfg = cfg

    # The browser client is served from another origin.
    origins = [o.strip() for o in (cfg.CORS_ALLOW_ORIGINS or "").split(",") if o.strip()]
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(router)

    @app.on_event("startup")
    def _on_startup() -> None:
        init_db(cfg.DB_DSN)

        boot = bootstrap_admin_if_needed(cfg)
        if boot:
            _debug(f"Bootstrapped initial admin user: email={boot.get('email')}")

        _debug("Storage connected; InnovateHub API ready")

    return app


app = create_app()

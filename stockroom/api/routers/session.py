# stockroom/api/routers/session.py
import redis
from fastapi import APIRouter, Depends, HTTPException

from stockroom.api.errors import to_http
from stockroom.data.kv import get_redis
from stockroom.domain.errors import InventoryError
from stockroom.domain.schemas import ChangePasswordIn, LoginIn, SessionUser
from stockroom.services.session_service import SessionService

router = APIRouter(prefix="/session", tags=["session"])


@router.get("/", response_model=SessionUser | None)
def current_user(client: redis.Redis = Depends(get_redis)):
    return SessionService(client).current_user()


@router.post("/login", response_model=SessionUser)
def login(payload: LoginIn, client: redis.Redis = Depends(get_redis)):
    svc = SessionService(client)
    try:
        return svc.login(payload.employee_code, payload.password)
    except PermissionError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except InventoryError as e:
        raise to_http(e)


@router.post("/logout", status_code=204)
def logout(client: redis.Redis = Depends(get_redis)):
    SessionService(client).logout()


@router.post("/password", status_code=204)
def change_password(payload: ChangePasswordIn, client: redis.Redis = Depends(get_redis)):
    svc = SessionService(client)
    try:
        svc.change_password(payload.current_password, payload.new_password, payload.confirm_password)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except InventoryError as e:
        raise to_http(e)

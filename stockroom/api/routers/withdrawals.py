# stockroom/api/routers/withdrawals.py
from typing import List
import redis
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from stockroom.api.errors import to_http
from stockroom.data.database import get_db
from stockroom.data.kv import get_redis
from stockroom.domain.errors import InventoryError
from stockroom.domain.schemas import WithdrawalCreate, WithdrawalOut
from stockroom.services.export_service import ExportService, XLSX_MEDIA_TYPE
from stockroom.services.lock_service import LockService
from stockroom.services.session_service import SessionService
from stockroom.services.withdrawal_service import WithdrawalService

router = APIRouter(prefix="/withdrawals", tags=["withdrawals"])


def get_service(db: Session, client: redis.Redis):
    return WithdrawalService(
        db=db,
        session_service=SessionService(client),
        lock_service=LockService(client=client),
    )


@router.get("/", response_model=List[WithdrawalOut])
def list_withdrawals(db: Session = Depends(get_db), client: redis.Redis = Depends(get_redis)):
    return get_service(db, client).list_withdrawals()


@router.post("/", response_model=WithdrawalOut, status_code=201)
def confirm_withdrawal(
    payload: WithdrawalCreate,
    db: Session = Depends(get_db),
    client: redis.Redis = Depends(get_redis),
):
    """
    Zatwierdza koszyk jako wydanie.
    Stan zdejmowany atomowo, koszyk czyszczony.
    """
    svc = get_service(db, client)
    try:
        return svc.confirm_withdrawal(
            payload.withdrawer_name,
            payload.withdrawer_section,
            payload.notes,
        )
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except InventoryError as e:
        raise to_http(e)


@router.get("/{withdrawal_id}", response_model=WithdrawalOut)
def get_withdrawal(
    withdrawal_id: int,
    db: Session = Depends(get_db),
    client: redis.Redis = Depends(get_redis),
):
    svc = get_service(db, client)
    try:
        return svc.get_withdrawal(withdrawal_id)
    except InventoryError as e:
        raise to_http(e)


@router.get("/{withdrawal_id}/export")
def export_withdrawal(
    withdrawal_id: int,
    db: Session = Depends(get_db),
    client: redis.Redis = Depends(get_redis),
):
    svc = get_service(db, client)
    try:
        withdrawal = svc.get_withdrawal(withdrawal_id)
    except InventoryError as e:
        raise to_http(e)

    return Response(
        content=ExportService.withdrawal_workbook(withdrawal),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{ExportService.withdrawal_filename(withdrawal)}"'},
    )

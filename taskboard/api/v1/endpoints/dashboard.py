from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import Optional
import uuid

from ...deps import resolve_current_owner
from ....db.session import get_session
from ....schemas.task import DashboardStats
from ....services.dashboard import build_dashboard

router = APIRouter()


@router.get("/dashboard", response_model=DashboardStats)
def get_dashboard(
    owner_id: Optional[uuid.UUID] = Depends(resolve_current_owner),
    session: Session = Depends(get_session),
):
    # Anonymous visitors get an empty dashboard rather than a challenge
    return build_dashboard(session, owner_id)

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import get_reconciliation_loop
from ..models import MonitorStatus, TargetStatus
from ..services.reconciler import ReconciliationLoop

router = APIRouter(prefix="/api", tags=["status"])


@router.get("/status", response_model=MonitorStatus)
async def get_monitor_status(
    loop: ReconciliationLoop = Depends(get_reconciliation_loop),
) -> MonitorStatus:
    """
    Get the current classification and check interval.

    HTTP Status Codes:
        200: At least one cycle has completed
        404: No cycle has completed yet
    """
    monitor_status = loop.get_status()
    if monitor_status.cycle_count == 0:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No reconciliation cycle has completed yet",
        )
    return monitor_status


@router.get("/targets", response_model=List[TargetStatus])
async def get_target_statuses(
    loop: ReconciliationLoop = Depends(get_reconciliation_loop),
) -> List[TargetStatus]:
    """Get failure bookkeeping for every configured target."""
    return loop.get_target_statuses()


@router.post("/check", status_code=status.HTTP_202_ACCEPTED)
async def trigger_check(
    loop: ReconciliationLoop = Depends(get_reconciliation_loop),
) -> dict:
    """Cut the current sleep short so the next cycle starts now."""
    if not loop.is_running:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Reconciliation loop is not running",
        )
    loop.request_immediate_cycle()
    return {"status": "accepted"}

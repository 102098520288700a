# catering/routers/reports.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from catering.db import get_db
from catering.schemas.report import ReportSummary
from catering.services.reporting import build_summary

router = APIRouter(prefix="/admin/reports", tags=["reports"])


@router.get("/summary", response_model=ReportSummary)
def report_summary(db: Session = Depends(get_db)):
    return build_summary(db)

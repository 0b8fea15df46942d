import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from tutorhub.config import settings
from tutorhub.database import get_session
from tutorhub.utils.dates import utcnow

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/check")
def health_check(session: Session = Depends(get_session)):
    database = "ok"

    try:
        session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Database ping failed")
        database = "failed"

    return {
        "status": "ok" if database == "ok" else "degraded",
        "environment": settings.ENV,
        "database": database,
        "payment_provider": settings.payment_provider,
        "timestamp": utcnow().isoformat(),
    }

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from articulos_api.db import get_db
from articulos_api.services.errors import describe

router = APIRouter()


@router.get("/health", tags=["health"], summary="Database connectivity probe")
def health(db: Session = Depends(get_db)):
    now = datetime.now(timezone.utc).isoformat()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        return JSONResponse(
            status_code=500,
            content={
                "status": "ERROR",
                "database": "disconnected",
                "error": describe(e),
                "timestamp": now,
            },
        )
    return {"status": "OK", "database": "connected", "timestamp": now}

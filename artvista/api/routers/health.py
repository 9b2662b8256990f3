# artvista/api/routers/health.py
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from artvista.data.database import get_db

router = APIRouter(tags=["health"])


@router.get("/")
def read_root():
    return {"message": "ArtVista API is running..."}


@router.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        database = f"error: {str(e)[:80]}"
    return {"status": "ok", "database": database}

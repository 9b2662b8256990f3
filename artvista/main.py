# artvista/main.py
import uvicorn

from artvista.api import create_app
from artvista.data.database import Base, engine
from artvista.data import models  # noqa: F401  rejestracja tabel w Base.metadata
from artvista.utils.settings import PORT
from artvista.utils.logging import get_logger

logger = get_logger(__name__)

logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")

try:
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
except Exception as e:
    logger.error(f"Failed to create tables: {e}")
    raise


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)

# artvista/services/image_storage.py
import os
import shutil
import uuid
from typing import BinaryIO, List, Tuple

from artvista.utils.settings import UPLOAD_DIR
from artvista.utils.logging import get_logger

logger = get_logger(__name__)

PUBLIC_PREFIX = "/uploads"


class ImageStorage:
    """
    Lokalny magazyn obrazow. Zwraca sciezki publiczne, ktore dzielo
    przechowuje dokladnie w takiej postaci.
    """

    def __init__(self, directory: str | None = None):
        self.directory = directory or UPLOAD_DIR

    def save(self, filename: str, stream: BinaryIO) -> str:
        os.makedirs(self.directory, exist_ok=True)

        _, ext = os.path.splitext(filename or "")
        stored_name = f"{uuid.uuid4().hex}{ext.lower()}"
        target = os.path.join(self.directory, stored_name)

        with open(target, "wb") as out:
            shutil.copyfileobj(stream, out)

        logger.info(f"Stored image {filename!r} as {stored_name}")
        return f"{PUBLIC_PREFIX}/{stored_name}"

    def save_all(self, files: List[Tuple[str, BinaryIO]]) -> List[str]:
        return [self.save(name, stream) for name, stream in files]

# server/core/utils.py

import shutil
import uuid
from pathlib import Path
from fastapi import UploadFile
from core.errors import ValidationError


IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg"}


def save_profile_image(file: UploadFile, images_dir: Path) -> Path:
    """
    Stores an uploaded profile picture under `images_dir/users` with a fresh name.
    Only png and jpg files are accepted.
    """
    suffix = Path(file.filename or "").suffix.lower()
    if suffix not in IMAGE_EXTENSIONS:
        raise ValidationError("Please send only png or jpg images", field="image")

    save_dir = images_dir / "users"
    save_dir.mkdir(parents=True, exist_ok=True)

    path = save_dir / f"{uuid.uuid4().hex}{suffix}"
    with path.open("wb") as buffer:
        shutil.copyfileobj(file.file, buffer)

    return path

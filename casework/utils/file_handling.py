"""
Delivered document file storage

Files live in the bucket directory as {bucket}/{individual_process_id}/{sha256}{ext}.
An upload is read and checked first (ReceivedFile), and only written to the
bucket once the caller has decided to keep it.
"""
import hashlib
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from fastapi import UploadFile, HTTPException
from casework.core.config import settings


@dataclass
class ReceivedFile:
    """Upload content with the metadata stored on a delivered document version"""
    filename: str
    content: bytes
    sha256: str
    mime_type: str

    @property
    def extension(self) -> str:
        return Path(self.filename).suffix.lower()

    @property
    def size_bytes(self) -> int:
        return len(self.content)


def check_extension(filename: str) -> str:
    """
    Raises:
        HTTPException 400: If the extension is not one of settings.ALLOWED_EXTENSIONS
    """
    extension = Path(filename or "").suffix.lower()
    if extension not in settings.ALLOWED_EXTENSIONS:
        allowed = ", ".join(sorted(settings.ALLOWED_EXTENSIONS))
        raise HTTPException(
            status_code=400,
            detail=f"File type {extension or '(none)'} not allowed. Allowed types: {allowed}"
        )
    return extension


def check_size(size: int) -> None:
    """
    Raises:
        HTTPException 400: If the file is empty
        HTTPException 413: If the file is larger than settings.MAX_FILE_SIZE
    """
    if size == 0:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    if size > settings.MAX_FILE_SIZE:
        raise HTTPException(
            status_code=413,
            detail=f"File size {size / 1048576:.2f}MB exceeds maximum allowed size of "
                   f"{settings.MAX_FILE_SIZE / 1048576:.2f}MB"
        )


async def receive_upload(file: UploadFile) -> ReceivedFile:
    """Read an upload into memory, check it and hash it"""
    content = await file.read()
    check_size(len(content))
    check_extension(file.filename)
    return ReceivedFile(
        filename=file.filename,
        content=content,
        sha256=hashlib.sha256(content).hexdigest(),
        mime_type=mimetypes.guess_type(file.filename)[0] or "application/octet-stream",
    )


def store_in_bucket(received: ReceivedFile, individual_process_id: str) -> Path:
    """Write the file under the process's folder and return its path"""
    folder = Path(settings.BUCKET_DIR) / individual_process_id
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / f"{received.sha256}{received.extension}"
    path.write_bytes(received.content)
    return path

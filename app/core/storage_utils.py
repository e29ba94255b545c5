# app/core/storage_utils.py
import uuid

from app.core.config import get_settings
from app.core.supabase_client import supabase_admin


def _bucket() -> str:
    return get_settings().STORAGE_BUCKET


def upload_to_storage(path: str, file_bytes: bytes, content_type: str) -> str:
    """
    Upload raw bytes to Supabase Storage and return a public URL.

    If a file already exists at this path, it will be overwritten
    thanks to the 'upsert' option.

    Args:
        path: Full object path inside the bucket.
              Example: "holidays/<holiday_id>/<uuid>.png"
        file_bytes: File content in bytes.
        content_type: MIME type stored alongside the object.

    Returns:
        Public URL to the uploaded file.

    Raises:
        Any exception raised by Supabase client if upload fails.
    """
    bucket = supabase_admin().storage.from_(_bucket())
    bucket.upload(path, file_bytes, {"upsert": "true", "content-type": content_type})
    return bucket.get_public_url(path)


def delete_from_storage(path: str) -> None:
    """
    Delete a file from Supabase Storage by its object path.

    Example path (relative to bucket):
        'holidays/<holiday_id>/<uuid>.png'
    """
    # Supabase Python client expects a list of paths.
    supabase_admin().storage.from_(_bucket()).remove([path])


def extract_path_from_public_url(url: str) -> str | None:
    """
    Given a public URL, extract the object path relative to the bucket.

    Example:
        https://<proj>.supabase.co/storage/v1/object/public/holiday-images/holidays/h/a.png
        -> 'holidays/h/a.png'
    """
    marker = f"/storage/v1/object/public/{_bucket()}/"
    idx = url.find(marker)
    if idx == -1:
        return None
    path = url[idx + len(marker) :]
    # get_public_url may append an empty query string
    return path.split("?", 1)[0] or None


def delete_public_url(url: str) -> None:
    """
    Convenience helper: delete a file by its public URL.
    No-op if the URL does not belong to this bucket (e.g. an external
    image link typed in by an admin).
    """
    path = extract_path_from_public_url(url)
    if path:
        delete_from_storage(path)


def generate_filename(ext: str) -> str:
    """
    Generate a random filename using UUID4.

    Args:
        ext: File extension without dot (e.g. "png", "jpg")

    Returns:
        A filename like "<uuid4>.png"
    """
    return f"{uuid.uuid4()}.{ext}"

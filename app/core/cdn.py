import cloudinary
import cloudinary.uploader

from app.core.config import settings
from app.core.errors import ExternalCallError

_configured = False


def setup_cloudinary():
    global _configured
    if _configured:
        return
    if not (settings.CLOUDINARY_CLOUD_NAME and settings.CLOUDINARY_API_KEY and settings.CLOUDINARY_API_SECRET):
        raise ExternalCallError("Missing CLOUDINARY_* settings, uploads are disabled")
    cloudinary.config(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        secure=True,
    )
    _configured = True


def upload_symptom_photo(file_bytes: bytes, folder: str, public_id: str | None = None) -> tuple[str, str]:
    """Sube una foto de síntoma (png/jpg) y devuelve (secure_url, public_id)."""
    setup_cloudinary()
    res = cloudinary.uploader.upload(
        file_bytes,
        folder=folder,
        public_id=public_id,
        resource_type="image",
        overwrite=True,
        unique_filename=public_id is None,
        use_filename=False,
        tags=["healthbridge", "symptom-photo"],
        type="upload",
        transformation=[
            {"width": 1600, "height": 1600, "crop": "limit"},
            {"quality": "auto:good"},
        ],
    )
    return res["secure_url"], res["public_id"]


def destroy(public_id: str) -> None:
    if public_id:
        setup_cloudinary()
        cloudinary.uploader.destroy(public_id, resource_type="image", invalidate=True)

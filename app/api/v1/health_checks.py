from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import cdn
from app.core.db import get_db
from app.core.config import settings
from app.core.errors import ExternalCallError
from app.core.logger import get_module_logger
from app.api.deps import get_current_user
from app.models.health_check import HealthCheck
from app.schemas.auth import AuthUser
from app.schemas.health_check import HealthCheckCreate, HealthCheckOut, ForwardIn, ForwardOut
from app.services.health_check import forward_health_check

log = get_module_logger(__name__)

MAX_BYTES = settings.MAX_UPLOAD_MB * 1024 * 1024
ALLOWED_PHOTO_TYPES = {"image/png", "image/jpeg"}

router = APIRouter(prefix="/health-checks", tags=["health-checks"])


async def _get_own_check_or_404(id: str, user: AuthUser, db: AsyncSession) -> HealthCheck:
    res = await db.execute(select(HealthCheck).where(HealthCheck.id == id, HealthCheck.user_id == user.id))
    hc = res.scalar_one_or_none()
    if not hc:
        raise HTTPException(status_code=404, detail="Health check not found")
    return hc


async def _read_and_validate_image(file: UploadFile) -> bytes:
    if file.content_type not in ALLOWED_PHOTO_TYPES:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Only PNG or JPEG images are allowed",
        )
    b = await file.read()
    if len(b) > MAX_BYTES:
        raise HTTPException(status_code=413, detail=f"Maximum {settings.MAX_UPLOAD_MB} MB per photo")
    return b


# ---------- create ----------
@router.post("/", response_model=HealthCheckOut, status_code=201)
async def create_health_check(
    payload: HealthCheckCreate,
    current: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    hc = HealthCheck(user_id=current.id, symptom_photos={}, **payload.model_dump())
    db.add(hc)
    await db.commit()
    await db.refresh(hc)
    return hc


def _discard_uploads(public_ids: list[str]) -> None:
    for public_id in public_ids:
        try:
            cdn.destroy(public_id)
        except Exception:
            log.warning("Could not delete orphaned photo %s", public_id, exc_info=True)


# ---------- read ----------
@router.get("/me", response_model=list[HealthCheckOut])
async def my_health_checks(current: AuthUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    res = await db.execute(
        select(HealthCheck).where(HealthCheck.user_id == current.id).order_by(HealthCheck.created_at.desc())
    )
    return res.scalars().all()


@router.get("/{id}", response_model=HealthCheckOut)
async def get_health_check(id: str, current: AuthUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await _get_own_check_or_404(id, current, db)


# ---------- fotos ----------
@router.post("/{id}/photos", response_model=HealthCheckOut)
async def upload_symptom_photos(
    id: str,
    files: list[UploadFile] = File(...),
    current: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    hc = await _get_own_check_or_404(id, current, db)
    photos = dict(hc.symptom_photos or {})
    if len(photos) + len(files) > settings.MAX_SYMPTOM_PHOTOS:
        raise HTTPException(status_code=400, detail=f"Maximum {settings.MAX_SYMPTOM_PHOTOS} photos per health check")

    contents = [await _read_and_validate_image(f) for f in files]
    folder = f"{settings.MEDIA_FOLDER_SYMPTOM_PHOTOS}/{current.id}"
    uploaded: list[str] = []
    try:
        for bits in contents:
            key = f"photo_{len(photos) + 1}"
            url, public_id = cdn.upload_symptom_photo(bits, folder, public_id=f"{hc.id}_{key}")
            uploaded.append(public_id)
            photos[key] = url
    except Exception as exc:
        # el lote es todo o nada: se borran las fotos que ya habían subido
        _discard_uploads(uploaded)
        if isinstance(exc, ExternalCallError):
            raise HTTPException(status_code=503, detail=exc.message)
        log.exception("Error uploading symptom photos for health check %s", hc.id)
        raise HTTPException(status_code=502, detail="Failed to upload photos")

    # JSON: se reasigna el dict entero para que el ORM detecte el cambio
    hc.symptom_photos = photos
    await db.commit()
    await db.refresh(hc)
    return hc


# ---------- reenvío al doctor ----------
@router.post("/{id}/forward", response_model=ForwardOut)
async def forward_to_doctor(
    id: str,
    payload: ForwardIn | None = None,
    current: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    hc = await _get_own_check_or_404(id, current, db)
    appointment_id = payload.appointment_id if payload else None
    sent, target_id = await forward_health_check(db, current.id, hc, appointment_id)

    if sent:
        message = "Health check data has been shared with your doctor."
    elif target_id is None:
        message = "No upcoming appointment found to share this health check with."
    else:
        message = "Failed to share health check data with your doctor."
    return ForwardOut(sent=sent, appointment_id=target_id, message=message)

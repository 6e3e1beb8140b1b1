from app.core.config import settings


def image_or_fallback(src: str | None, fallback: str | None = None) -> str:
    """
    URL de imagen lista para mostrar: si no hay src usable, devuelve el
    placeholder configurado.
    """
    fallback = fallback or settings.IMAGE_FALLBACK_URL
    if not src or not src.strip():
        return fallback
    src = src.strip()
    if not src.startswith(("http://", "https://", "/")):
        return fallback
    return src

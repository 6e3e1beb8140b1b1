from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logger import logger
from app.api.v1.profiles import router as profiles_router
from app.api.v1.doctors import router as doctors_router
from app.api.v1.appointments import router as appointments_router
from app.api.v1.slots import router as slots_router
from app.api.v1.doctor_appointments import router as doctor_appointments_router
from app.api.v1.notifications import router as notifications_router
from app.api.v1.health_checks import router as health_checks_router
from app.api.v1.emergency import router as emergency_router
from app.api.v1.functions import router as functions_router
from app.api.v1.rpc import router as rpc_router
from app.api.v1.voice_ws import router as voice_ws_router


app = FastAPI(title=settings.APP_NAME, version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(profiles_router)
app.include_router(doctors_router)
app.include_router(appointments_router)
app.include_router(slots_router)
app.include_router(doctor_appointments_router)
app.include_router(notifications_router)
app.include_router(health_checks_router)
app.include_router(emergency_router)
app.include_router(functions_router)
app.include_router(rpc_router)
app.include_router(voice_ws_router)

logger.info("%s started", settings.APP_NAME)


@app.get("/health")
async def health():
    return {"status": "ok"}

"""
Hotel front desk application entry point
Check-in, checkout, booking edits and admin reports over a FastAPI service
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from frontdesk.config import settings
from frontdesk.database import init_db
from frontdesk.routers import auth, rooms, checkin, checkout, bookings, reports, system_logs

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup"""
    init_db()
    logger.info(f"{settings.APP_NAME} started")
    yield
    logger.info(f"{settings.APP_NAME} stopped")


app = FastAPI(
    title=settings.APP_NAME,
    description="Hotel front desk: check-in, checkout, GST billing and guest history",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(rooms.router)
app.include_router(checkin.router)
app.include_router(checkout.router)
app.include_router(bookings.router)
app.include_router(reports.router)
app.include_router(system_logs.router)


@app.get("/")
def root():
    return {"name": settings.APP_NAME, "status": "running"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("frontdesk.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import APP_NAME, DATABASE_URL
from database import Database
from routes.calendar_routes import router as calendar_router
from routes.day_routes import router as day_router
from routes.habit_routes import router as habit_router
from services.habit_store import AsyncHabitStore, HabitStore

logger = logging.getLogger(__name__)


def build_store(url: str = DATABASE_URL) -> AsyncHabitStore:
    """Open the database once; StorageUnavailableError stops startup."""
    return AsyncHabitStore(HabitStore(Database(url)))


def create_app(store: AsyncHabitStore | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = getattr(app.state, "store", None) is None
        if owned:
            app.state.store = build_store()
            logger.info(f"Habit store opened at {DATABASE_URL}")
        yield
        if owned:
            app.state.store.close()

    app = FastAPI(title=APP_NAME, lifespan=lifespan)
    if store is not None:
        app.state.store = store

    @app.get("/api/v1/health-check")
    async def health():
        return {"status": "ok", "message": "Backend is alive!"}

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(habit_router)
    app.include_router(day_router)
    app.include_router(calendar_router)
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from core import config, db, errors
from core.log import setup_logging
from items import repository as items_repository
from items import router as items_router

setup_logging(config.log_level())


@asynccontextmanager
async def lifespan(_: FastAPI):
    # One pool per process; the items table is created on first boot.
    await db.init_pool()
    try:
        await items_repository.ensure_schema()
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="Insights API", lifespan=lifespan)

# Browsers on any localhost port may call the API; other origins get no CORS
# headers and their preflights are refused.
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_allowed_origins(),
    allow_origin_regex=config.cors_origin_regex(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

errors.install(app)

uploads_dir = config.uploads_dir()
uploads_dir.mkdir(parents=True, exist_ok=True)
app.mount(
    "/uploads",
    StaticFiles(directory=uploads_dir),
    name="uploads",
)

app.include_router(items_router.router, prefix="/api", tags=["items"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "Backend API is running"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.host(), port=config.port())

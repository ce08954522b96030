from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from fitting_room.config import logger

from .routers import router

STATIC_DIR = Path(__file__).parent / "static"

# Initialize FastAPI application
app = FastAPI(
    title="Fitting Room",
    description="Virtual clothing try-on powered by Gemini image generation",
    version="1.0.0",
)

app.include_router(router)
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.get("/", include_in_schema=False)
async def index() -> FileResponse:
    """Serve the try-on page."""
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


logger.info("Fitting Room initialized successfully")


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run("fitting_room.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()

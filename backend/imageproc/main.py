"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from imageproc.api.routes import router
from imageproc.config import CORS_ORIGINS, logger as config_logger
from imageproc.conversion.service import get_image_processor

logging.getLogger("uvicorn").setLevel(logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_image_processor()
    config_logger.info("Image processor API started")
    yield
    config_logger.info("Image processor API shutting down")


app = FastAPI(
    title="Image Processor API",
    description="Resize and re-encode images to JPEG, PNG, GIF or WebP.",
    version="1.0.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS if CORS_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)


if __name__ == "__main__":
    import uvicorn
    from imageproc.config import HOST, PORT
    uvicorn.run("imageproc.main:app", host=HOST, port=PORT, reload=True)

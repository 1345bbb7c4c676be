from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from htmlview.core.config import settings
from htmlview.core.logging_config import setup_logging
from htmlview.routers import render
import logging

# Setup logging before creating the app
setup_logging(log_level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)

logger = logging.getLogger(__name__)

app = FastAPI(title="htmlview API")

# CORS setup (adjust origins as needed)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def read_root():
    return {"message": "Welcome to htmlview API"}


# Routers
app.include_router(render.router)

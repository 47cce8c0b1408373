"""FastAPI application entrypoint."""

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.adapters.inbound.http.routes import router
from app.infrastructure.config.settings import settings

# Load environment variables from .env file
load_dotenv()

app = FastAPI(
    title="Consultant Stream Gateway",
    description="Streams persona-scoped LLM consultations with persistent session history",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)

"""Agregador de routers de la API."""
from fastapi import APIRouter
from notes_app.api.routers import auth, health, note

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(note.router)

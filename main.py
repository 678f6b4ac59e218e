import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import app.models  # ensure models are registered
from app.core.config import CORS_ORIGINS, LOG_LEVEL
from app.utils.database import engine, Base

from app.routers import (
    auth_router,
    houses_router,
    tenants_router,
    charges_router,
    payments_router,
    maintenance_router,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Property Back Office API", version="1.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth_router.router)
app.include_router(houses_router.router)
app.include_router(tenants_router.router)
app.include_router(charges_router.router)
app.include_router(payments_router.router)
app.include_router(maintenance_router.router)


@app.on_event("startup")
def on_startup():
    # DEV ONLY – schema is managed outside the app in production
    Base.metadata.create_all(bind=engine)


@app.get("/")
def root():
    return {"message": "Property Back Office is running!!"}

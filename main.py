import logging

from app.auth import routes as auth_router
from app.users import routes as users_router
from app.journals import routes as journals_router
from app.quotes import routes as quotes_router
from app.mood import routes as mood_router
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import CORS_ORIGINS, LOG_LEVEL
from app.core.database import Base, SessionLocal, engine
from app.quotes.db import seed_quotes

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(
    title="Daily Journal API",
    version="1.0.0",
    description="Backend for Daily Journal: journaling, mood analysis, quotes and emergency alerts.",
)

# CORS config
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth_router.router)
app.include_router(users_router.router)
app.include_router(journals_router.router)
app.include_router(quotes_router.router)
app.include_router(mood_router.router)


# DB Tables
@app.on_event("startup")
def create_tables():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_quotes(db)
    finally:
        db.close()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roicalc.config import APP_TITLE, APP_VERSION, ALLOW_ORIGINS
from roicalc.routers import calculator, export

app = FastAPI(title=APP_TITLE, version=APP_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(calculator.router)
app.include_router(export.router)

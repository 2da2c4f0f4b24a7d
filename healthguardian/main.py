from fastapi import FastAPI

from healthguardian.api import ai
from healthguardian.config.logger import configure_logging

configure_logging()

app = FastAPI(title="Health Guardian API")

app.include_router(ai.router)

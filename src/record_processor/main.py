"""FastAPI application entry point."""

from ddtrace import patch
from fastapi import FastAPI

from record_processor.logging import setup_logging
from record_processor.routes import records_router

logger = setup_logging()
patch(fastapi=True, requests=True, sqlalchemy=True)

app = FastAPI(title="Record Processor")
app.include_router(records_router)

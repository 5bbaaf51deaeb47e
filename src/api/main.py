import logging

from fastapi import FastAPI

from api.dependencies import backend
from api.routers import assignments, chat, classes, ops

# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Greedy")

app.include_router(chat.router)
app.include_router(classes.router)
app.include_router(assignments.router)
app.include_router(ops.router)


@app.on_event("startup")
async def startup() -> None:
    logger.info("Greedy API started with %d stored class(es)", len(backend.store.list_classes()))

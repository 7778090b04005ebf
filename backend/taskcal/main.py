import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import NoResultFound
from taskcal.core.config import settings
from taskcal.core.database import engine, init_models
from taskcal.core.logging_setup import setup_logging
from taskcal.routers import tasks

logger = logging.getLogger(__name__)

app = FastAPI(title="Taskcal API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tasks.router)

@app.exception_handler(NoResultFound)
async def not_found_handler(request: Request, exc: NoResultFound):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": "Task not found"},
    )

@app.on_event("startup")
async def startup():
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)
    await init_models(engine)
    logger.info("Taskcal API started")

@app.on_event("shutdown")
async def shutdown():
    await engine.dispose()

@app.get("/")
async def root():
    return {"message": "Taskcal API is running"}

def main():
    import uvicorn

    uvicorn.run("taskcal.main:app", host="0.0.0.0", port=settings.API_PORT)

if __name__ == "__main__":
    main()

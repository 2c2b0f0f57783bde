import logging
import sys

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from settings import settings

# 1. Configure logging
logging.basicConfig(
    level=settings.get_log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("chatbot")

# 2. Setup App
app = FastAPI(title="Chatbot Backend")

# 3. Setup CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 4. Import Models BEFORE create_all to ensure they are registered in Base.metadata
from database import Base, engine
from models import db_models  # CRITICAL: Ensures models are registered
Base.metadata.create_all(bind=engine)

# 5. Load the response table once; a broken table stops startup
from services.response_table import load_response_table
from services.responder import ResponseSelector

response_table = load_response_table(settings.get_response_table_path())
app.state.selector = ResponseSelector(response_table)
logger.info("Response categories: %s", ", ".join(response_table.category_names()))

# 6. Include Routers
from routers import chat
app.include_router(chat.router)

# 7. Failures are reported as {"error": "..."}
from exceptions import StorageError, ValidationError


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=500, content={"error": exc.message})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = ", ".join(".".join(str(p) for p in err["loc"] if p != "body") for err in exc.errors())
    return JSONResponse(status_code=422, content={"error": f"Invalid request: {fields}"})


@app.get("/")
def read_root():
    return {"status": "Chatbot backend is running"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.get_host(), port=settings.get_port())

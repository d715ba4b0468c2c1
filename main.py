from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from apis import auth, tasks, users
from settings import ENVIRONMENT, CORS_ORIGINS, logger

app = FastAPI(
    title="Task Tracker API",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc"
)

# CORS middleware for development
if ENVIRONMENT == "development":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

app.include_router(auth.router, prefix="/api")
app.include_router(tasks.router, prefix="/api")
app.include_router(users.router, prefix="/api")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests as 400 with a readable message."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        message = error.get("msg", "Invalid value").removeprefix("Value error, ")
        problems.append(f"{location}: {message}" if location else message)

    logger.info("Rejected invalid request", extra={
        "path": request.url.path,
        "errors": len(problems)
    })

    return JSONResponse(
        status_code=400,
        content={"error": "Validation Error", "message": "; ".join(problems)}
    )


@app.get("/api/health")
async def root():
    """API health check."""
    return {
        "message": "Task Tracker API is running",
        "status": "running",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }

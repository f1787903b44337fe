from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging
import os

# Only load .env file if not running on Heroku
if not os.getenv("DYNO"):  # DYNO is a Heroku-specific environment variable
    from dotenv import load_dotenv
    load_dotenv()

from api import image_edit, edit_preview, prompts, history
from config.settings import get_settings
from core.cors import cors_middleware
from core.errors import ApiError

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)
logger.info("Configuration source: %s", "heroku_env" if os.getenv("DYNO") else "dotenv_file")

app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION)

# Preflights are answered and CORS headers attached for every route
app.middleware("http")(cors_middleware)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    # Runs outside the CORS middleware, so the headers are added here
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": str(exc) or "Unknown error"},
        headers=get_settings().cors_headers,
    )


# Include API routers
app.include_router(image_edit.router, prefix="/api")
app.include_router(edit_preview.router, prefix="/api")
app.include_router(prompts.router, prefix="/api")
app.include_router(history.router, prefix="/api")


@app.get("/")
async def root():
    return {"message": f"{settings.PROJECT_NAME} is running"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.get("/api/health")
async def api_health_check():
    current = get_settings()
    return {
        "status": "healthy",
        "service": "api",
        "ai_gateway_configured": bool(current.LOVABLE_API_KEY),
        "supabase_configured": bool(current.SUPABASE_URL and current.SUPABASE_ANON_KEY),
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", settings.PORT))
    uvicorn.run(app, host=settings.HOST, port=port)

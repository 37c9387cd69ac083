"""
============================================================
 CareerHub v1.0.0 — main.py (Web Server)
 Mock interviews, resume suggestions and career advice
 on top of a Groq chat-completion model.
 ------------------------------------------------------------
 Runs FastAPI + serves the frontend entry page.

 Features:
   • Router registration (interview, suggest, career)
   • In-memory interview session store tied to app lifespan
   • Web-friendly CORS + tracing middleware (skips /health)
   • {"error": ...} bodies for every HTTP error
   • Host/port from HOST / PORT (default 0.0.0.0:3001)
============================================================
"""

# ============================== Imports =================================
import importlib
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional, Tuple

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from careerhub.core import config
from careerhub.core.sessions import SessionStore
from careerhub.core.utils import log_event

APP_VERSION = config.APP_VERSION


def _elog(event: str, meta: Optional[Dict[str, Any]] = None) -> None:
    if config.VERBOSE:
        log_event(event, meta)


# ============================ Lifespan ==================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.sessions = SessionStore()
    log_event("server_start", {"url": f"http://localhost:{config.PORT}", "version": APP_VERSION})
    try:
        yield
    finally:
        dropped = len(app.state.sessions)
        app.state.sessions.clear()
        log_event("server_stop", {"sessions_dropped": dropped})


app = FastAPI(
    title="CareerHub API",
    description="Mock interview, resume suggestion and career advice backend",
    version=APP_VERSION,
    lifespan=lifespan,
)


# ========================== Error bodies ================================
@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)


# Malformed bodies answer with the route's own status + message
VALIDATION_ERRORS: Dict[str, Tuple[int, str]] = {
    "/interview/start": (400, "Missing jobRole or resumeText"),
    "/interview/answer": (400, "Invalid session or answer"),
    "/interview/clarify": (400, "Invalid session"),
    "/interview/finish": (400, "Invalid session"),
    "/suggest": (400, "Role required"),
    "/career-ai": (500, "Invalid AI JSON"),
}


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    path = request.url.path
    status, message = VALIDATION_ERRORS.get(path, (400, "Invalid request body"))
    log_event("request_validation_error", {"path": path, "errors": exc.errors()})
    return JSONResponse({"error": message}, status_code=status)


# ============================ Routers ===================================
ROUTER_NAMES = ["interview", "suggest", "career"]

for _name in ROUTER_NAMES:
    _mod = importlib.import_module(f"careerhub.api.{_name}")
    app.include_router(_mod.router)
    _elog("router_registered", {"module": _name, "prefix": _mod.router.prefix})


# ============================ CORS ======================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=False,
    allow_methods=["*"], allow_headers=["*"],
)


# ================== Middleware — Request/Response log ===================
@app.middleware("http")
async def trace_requests(request: Request, call_next):
    start = time.time()
    path = request.url.path
    method = request.method

    skip_exact = {"/health", "/favicon.ico"}
    log_this = (
        config.VERBOSE
        and method != "OPTIONS"
        and path not in skip_exact
        and not path.startswith("/static/")
    )

    if log_this:
        log_event("http_request", {"method": method, "path": path})
    try:
        response: Response = await call_next(request)
    except Exception as e:
        log_event("❌ unhandled_error", {"method": method, "path": path, "error": f"{type(e).__name__}: {e}"})
        return JSONResponse({"error": "internal_error"}, status_code=500)

    if log_this:
        ms = (time.time() - start) * 1000
        log_event("http_response", {
            "method": method, "path": path, "status": response.status_code, "ms": round(ms, 1)
        })
    if path.endswith(".html") or path == "/":
        response.headers["Cache-Control"] = "no-store"
    return response


# ======================= Static + Frontend Mount ========================
if config.STATIC_DIR.exists():
    app.mount("/static", StaticFiles(directory=str(config.STATIC_DIR)), name="static")


def _frontend_path(filename: str):
    p = (config.FRONTEND_DIR / filename).resolve()
    # stay inside the frontend directory
    if config.FRONTEND_DIR.resolve() not in p.parents:
        return None
    return p if p.is_file() else None


# ============================= Health ===================================
@app.get("/health", include_in_schema=False)
def health():
    return {"status": "OK"}


# ============================ Frontend ==================================
@app.get("/", include_in_schema=False)
def serve_index():
    f = _frontend_path("index.html")
    if f:
        return FileResponse(f)
    return JSONResponse({"error": "frontend_not_found"}, status_code=404)


@app.get("/{page_name}", include_in_schema=False)
def serve_page(page_name: str):
    """Serve top-level frontend pages such as /index or /index.html."""
    page = page_name if page_name.endswith(".html") else f"{page_name}.html"
    f = _frontend_path(page)
    if f:
        return FileResponse(f)
    raise HTTPException(status_code=404, detail="Not Found")


# ================================ Main ==================================
def start_backend():
    import uvicorn

    uvicorn.run(
        app, host=config.HOST, port=config.PORT,
        log_level="error", timeout_keep_alive=25,
        access_log=False,
    )


if __name__ == "__main__":
    print(f"🚀 Launching CareerHub v{APP_VERSION}")
    print(f"✅ Server running at http://localhost:{config.PORT}\n")

    start_backend()

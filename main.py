import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

HOST = os.getenv("SITE_HOST", "0.0.0.0")
PORT = int(os.getenv("SITE_PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

logger = logging.getLogger(__name__)

# 路由表，启动日志也用它
ROUTES = {
    "Home": "/",
    "About": "/about",
    "API": "/api/data",
}


@asynccontextmanager
async def lifespan(_app: FastAPI):
    logger.info("Server is running at: http://localhost:%s", PORT)
    logger.info("Available routes:")
    for label, path in ROUTES.items():
        logger.info("- %-6s http://localhost:%s%s", label + ":", PORT, path)
    yield


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # 允许所有来源，生产环境请指定具体域名
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", response_class=HTMLResponse)
async def home():
    return """
    <h1>Welcome to the Multi-Route Site</h1>
    <p>Visit <a href="/about">/about</a> or <a href="/api/data">/api/data</a></p>
    """


@app.get("/about", response_class=HTMLResponse)
async def about():
    return """
    <h2>About This Application</h2>
    <p>A small demo of several distinct routes served by one FastAPI app.</p>
    """


@app.get("/api/data")
async def api_data():
    return {
        "status": "success",
        "endpoint": "/api/data",
        "message": "Data successfully retrieved from the server route.",
        "users": 5,
    }


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(message)s')
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())

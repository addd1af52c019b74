"""
Longevity Ranker API Entry Point

  uvicorn main:app --host 0.0.0.0 --port $PORT
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ranker import __version__
from ranker.analysis.admin import router as analysis_router
from ranker.audit.admin import router as audit_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title="Longevity Ranker API",
    version=__version__,
    description="Cost per gram of active ingredient for supplement listings",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis_router)
app.include_router(audit_router)


@app.get("/")
def root():
    return {
        "service": "longevity-ranker",
        "version": __version__,
        "endpoints": [
            "/api/v1/analysis/analyze",
            "/api/v1/analysis/health",
            "/api/v1/admin/audit/run",
            "/api/v1/admin/audit/health",
        ],
    }


# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)

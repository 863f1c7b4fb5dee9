"""FastAPI application for Taskboard"""

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard import __version__
from taskboard.api.boards import router as boards_router
from taskboard.api.columns import router as columns_router
from taskboard.api.tasks import router as tasks_router
from taskboard.api.users import router as users_router

# Create FastAPI app
app = FastAPI(
    title="Taskboard API",
    description="Kanban boards with drag-and-drop ordering of columns and tasks",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

# Add CORS middleware for development (when frontend runs on different port)
if os.getenv("TASKBOARD_ENV") == "development":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
            "http://127.0.0.1:3000"
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Include API routers
app.include_router(users_router, prefix="/api/users", tags=["users"])
app.include_router(boards_router, prefix="/api/boards", tags=["boards"])
app.include_router(columns_router, prefix="/api/columns", tags=["columns"])
app.include_router(tasks_router, prefix="/api/tasks", tags=["tasks"])

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "taskboard-api"}

@app.on_event("startup")
async def startup_event():
    """Initialize database and run migrations on startup"""
    from taskboard.storage.database import initialize_database
    await initialize_database()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8080)

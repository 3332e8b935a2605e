from fastapi import APIRouter

router = APIRouter()

@router.get("/")
def root():
    return {
        "name": "Request Binding Service",
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
    }

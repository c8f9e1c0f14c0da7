from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db, settings
from app.services import assets

router = APIRouter(tags=["health"])

@router.get("/healthz")
def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "asset-tracking-api"}

@router.get("/api/v1/health")
def api_health_check():
    """API health check endpoint"""
    return {"status": "ok", "api_version": "v1"}

@router.get("/api/v1/debug/collections")
def debug_collections(db: Session = Depends(get_db)):
    """Number of records per collection, only with DEBUG enabled"""
    if not settings.debug:
        raise HTTPException(status_code=404, detail="Not Found")
    return assets.collection_counts(db)

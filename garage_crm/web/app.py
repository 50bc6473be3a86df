import logging
from typing import List, Optional
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from garage_crm.config import get_settings, setup_logging
from garage_crm.core.exceptions import DataAccessError, MergeError, NotFoundError
from garage_crm.core.quality_manager import QualityManager
from garage_crm.core.validation import (
    is_valid_phone, is_valid_plate, is_valid_vin, phone_error, plate_error, vin_error
)
from garage_crm.db.database import init_db
from garage_crm.db.store import SqlAlchemyStore

logger = logging.getLogger(__name__)

class MergeRequest(BaseModel):
    primary_client_id: str
    duplicate_client_ids: List[str]

app = FastAPI()

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Database initialization
@app.on_event("startup")
async def startup_event():
    app.state.settings = get_settings()
    setup_logging(app.state.settings)
    app.state.db_session = await init_db(app.state.settings.database_url, create_tables=True)
    logger.info("Database ready")

@app.on_event("shutdown")
async def shutdown_event():
    engine = app.state.db_session.kw['bind']
    await engine.dispose()

@app.get("/api/quality")
async def quality_report():
    """Duplicate groups and validation issues for all clients and claims"""
    async with app.state.db_session() as session:
        manager = QualityManager(SqlAlchemyStore(session), app.state.settings)
        report = await manager.detect_quality_issues()
        return report.to_dict()

@app.post("/api/clients/merge")
async def merge_clients(merge_data: MergeRequest):
    try:
        async with app.state.db_session() as session:
            manager = QualityManager(SqlAlchemyStore(session), app.state.settings)
            result = await manager.merge_clients(
                merge_data.primary_client_id,
                merge_data.duplicate_client_ids
            )
            return {"success": True, **result.to_dict()}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except MergeError as e:
        # step is None when the request was rejected before any write
        status_code = 400 if e.step is None else 500
        return JSONResponse(
            status_code=status_code,
            content={"success": False, "error": str(e), "step": e.step}
        )
    except DataAccessError as e:
        logger.exception("Error merging clients")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": str(e)}
        )

@app.get("/api/validate")
async def validate_fields(
    phone: Optional[str] = None,
    car_number: Optional[str] = None,
    vin: Optional[str] = None
):
    """Check the supplied field values without touching the database"""
    checks = {}
    if phone is not None:
        checks["phone"] = {"valid": is_valid_phone(phone), "message": phone_error(phone)}
    if car_number is not None:
        checks["car_number"] = {"valid": is_valid_plate(car_number), "message": plate_error(car_number)}
    if vin is not None:
        checks["vin"] = {"valid": is_valid_vin(vin), "message": vin_error(vin)}
    return checks

"""
Batch Import Router
Spreadsheet preview and execute endpoints for bulk department creation.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from cel_schedule.dependencies import get_audit_logger, get_database, require_admin
from cel_schedule.models import AuthUser, LogType, Severity
from cel_schedule.repositories import Database
from cel_schedule.schemas.batch_import import (
    BatchImportExecuteRequest,
    BatchImportExecuteResponse,
    BatchImportPreviewResponse,
)
from cel_schedule.services.audit_log import AuditLogger, LogMetadata, MetaKey
from cel_schedule.services.conflict_detector import count_unique_volunteers, detect_conflicts
from cel_schedule.services.excel_parser import SpreadsheetReadError, parse_excel_file
from cel_schedule.services.import_executor import ImportExecutionError, ImportExecutor, ImportStage
from cel_schedule.services.import_session_store import (
    ImportSessionStore,
    SessionNotFoundError,
    get_session_store,
)


logger = logging.getLogger(__name__)

router = APIRouter()

ALLOWED_EXTENSIONS = (".xlsx", ".xls")

STAGE_ERROR_PREFIXES = {
    ImportStage.VOLUNTEER_CREATION: "Failed to create volunteers: ",
    ImportStage.DEPARTMENT_CREATION: "Failed to create departments: ",
}


@router.post(
    "/preview",
    response_model=BatchImportPreviewResponse,
    response_model_exclude_none=True
)
async def preview_batch_import(
    file: Optional[UploadFile] = File(None),
    db: Database = Depends(get_database),
    store: ImportSessionStore = Depends(get_session_store),
    audit: AuditLogger = Depends(get_audit_logger),
    current_user: AuthUser = Depends(require_admin)
):
    """Parse an uploaded workbook and report departments and conflicts."""
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    # Validate file type
    if not file.filename.lower().endswith(ALLOWED_EXTENSIONS):
        raise HTTPException(
            status_code=400,
            detail="Invalid file format. Please upload an Excel file (.xlsx or .xls)"
        )

    content = await file.read()

    try:
        departments, validation_errors, row_count = await parse_excel_file(content)
    except SpreadsheetReadError as e:
        raise HTTPException(status_code=400, detail=f"Failed to parse Excel file: {e}")

    if validation_errors:
        return BatchImportPreviewResponse(validation_errors=validation_errors)

    conflicts = detect_conflicts(
        departments,
        await db.volunteers.list(),
        await db.departments.list()
    )
    total_volunteers = count_unique_volunteers(departments)

    session = store.new_session(departments, file_name=file.filename)
    await store.put(session)

    logger.info(
        "Import session %s created from %s: %d departments, %d conflicts",
        session.session_id, file.filename, len(departments), len(conflicts)
    )

    await audit.record(
        LogType.BATCH_IMPORT_STARTED,
        LogMetadata({
            MetaKey.FILE_NAME: file.filename,
            MetaKey.FILE_SIZE: len(content),
            MetaKey.ROW_COUNT: row_count,
            MetaKey.SESSION_ID: session.session_id,
            MetaKey.TOTAL_VOLUNTEERS: total_volunteers,
            MetaKey.TOTAL_DEPARTMENTS: len(departments),
        }),
        actor=current_user
    )

    return BatchImportPreviewResponse(
        departments=departments,
        conflicts=conflicts,
        total_volunteers=total_volunteers,
        total_departments=len(departments),
        session_id=session.session_id
    )


@router.post(
    "/execute",
    response_model=BatchImportExecuteResponse,
    response_model_exclude_none=True
)
async def execute_batch_import(
    data: BatchImportExecuteRequest,
    db: Database = Depends(get_database),
    store: ImportSessionStore = Depends(get_session_store),
    audit: AuditLogger = Depends(get_audit_logger),
    current_user: AuthUser = Depends(require_admin)
):
    """Apply conflict resolutions to a previewed import and create records."""
    try:
        session = await store.take(data.session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=400, detail="Invalid or expired session")

    executor = ImportExecutor(db)
    try:
        result = await executor.execute(session.departments, data.resolutions)
    except ImportExecutionError as e:
        logger.error("Import session %s failed at %s: %s", data.session_id, e.stage.value, e)
        # Keep the session so the import can be retried
        await store.put(session)
        await audit.record(
            LogType.BATCH_IMPORT_FAILED,
            LogMetadata({
                MetaKey.ERROR_MESSAGE: e.message,
                MetaKey.SESSION_ID: data.session_id,
                MetaKey.STAGE: e.stage,
                MetaKey.SUCCESS_COUNT: e.result.volunteers_created,
                MetaKey.VOLUNTEERS_CREATED: e.result.volunteers_created,
                MetaKey.DEPARTMENTS_CREATED: e.result.departments_created,
            }),
            severity=Severity.ERROR,
            actor=current_user
        )
        response = BatchImportExecuteResponse(
            success=False,
            departments_created=e.result.departments_created,
            volunteers_created=e.result.volunteers_created,
            volunteers_reused=e.result.volunteers_reused,
            error_message=STAGE_ERROR_PREFIXES[e.stage] + e.message,
            created_department_ids=e.result.created_department_ids,
            created_volunteer_ids=e.result.created_volunteer_ids
        )
        return JSONResponse(
            status_code=500,
            content=response.model_dump(mode="json", by_alias=True, exclude_none=True)
        )

    await audit.record(
        LogType.BATCH_IMPORT_COMPLETED,
        LogMetadata({
            MetaKey.SESSION_ID: data.session_id,
            MetaKey.SUCCESS_COUNT: result.volunteers_created + result.departments_created,
            MetaKey.VOLUNTEERS_CREATED: result.volunteers_created,
            MetaKey.VOLUNTEERS_REUSED: result.volunteers_reused,
            MetaKey.DEPARTMENTS_CREATED: result.departments_created,
        }),
        actor=current_user
    )

    return BatchImportExecuteResponse(
        success=True,
        departments_created=result.departments_created,
        volunteers_created=result.volunteers_created,
        volunteers_reused=result.volunteers_reused,
        created_department_ids=result.created_department_ids,
        created_volunteer_ids=result.created_volunteer_ids
    )

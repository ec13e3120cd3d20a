"""
Vendor document API endpoints - upload, list, download and delete files
attached to a quotation.
"""
import logging
import os
from typing import List

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import FileResponse

from quotedesk.config import Settings, get_settings
from quotedesk.models.vendor_document import DocumentType, VendorDocument
from quotedesk.services import documents as document_service
from quotedesk.services.quotations import get_quotation
from quotedesk.storage import CollectionStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=List[VendorDocument])
async def list_documents(quotation_id: str, store: CollectionStore = Depends(get_store)):
    return await document_service.list_vendor_documents(store, quotation_id)


@router.post("/upload", response_model=VendorDocument)
async def upload_document(
    quotation_id: str = Form(...),
    document_type: DocumentType = Form(DocumentType.QUOTATION),
    file: UploadFile = File(...),
    store: CollectionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Attach a vendor document to a quotation"""
    if await get_quotation(store, quotation_id) is None:
        raise HTTPException(status_code=404, detail="Quotation not found")

    file_name = os.path.basename(file.filename or "document")
    ext = os.path.splitext(file_name)[1].lower()
    if ext not in document_service.ALLOWED_EXTENSIONS:
        raise HTTPException(status_code=400, detail=f"File type '{ext or file_name}' not allowed.")

    content = await file.read()
    if len(content) > settings.MAX_DOCUMENT_SIZE:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {settings.MAX_DOCUMENT_SIZE // (1024 * 1024)}MB",
        )

    dest = await document_service.save_document_bytes(
        content, quotation_id, file_name, settings.DOCUMENTS_DIR
    )
    if dest is None:
        raise HTTPException(status_code=500, detail="Failed to save document")

    document = await document_service.add_vendor_document(
        store,
        quotation_id,
        file_name,
        str(dest),
        len(content),
        document_service.file_type_of(file_name),
        document_type,
    )
    if not document:
        await document_service.remove_document_file(str(dest))
        raise HTTPException(status_code=500, detail="Failed to save document")

    logger.info(f"Uploaded '{file_name}' for quotation {quotation_id} ({len(content)} bytes)")
    return document


@router.get("/{document_id}/download")
async def download_document(
    document_id: str,
    store: CollectionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    document = await document_service.get_vendor_document(store, document_id)
    if not document:
        raise HTTPException(status_code=404, detail="Document not found")

    if not document_service.is_within(document.file_path, settings.DOCUMENTS_DIR):
        raise HTTPException(status_code=403, detail="Access denied")
    if not os.path.exists(document.file_path):
        raise HTTPException(status_code=404, detail="File not found on disk")

    return FileResponse(document.file_path, filename=document.file_name)


@router.delete("/{document_id}")
async def delete_document(document_id: str, store: CollectionStore = Depends(get_store)):
    if not await document_service.delete_vendor_document(store, document_id):
        raise HTTPException(status_code=404, detail="Document not found")
    return {"message": "Document deleted"}

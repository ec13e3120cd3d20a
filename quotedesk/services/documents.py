"""
Vendor documents - files copied under documents/<quotation_id>/ plus their records
"""
import asyncio
import logging
import os
import shutil
import time
from pathlib import Path
from typing import List, Optional

from quotedesk.models.vendor_document import DocumentType, VendorDocument
from quotedesk.repository import Repository
from quotedesk.storage import Collection, CollectionStore

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".pdf", ".doc", ".docx", ".xls", ".xlsx", ".png", ".jpg", ".jpeg"}


def _repo(store: CollectionStore) -> Repository[VendorDocument]:
    return Repository(store, Collection.VENDOR_DOCUMENTS, VendorDocument)


def file_type_of(file_name: str) -> str:
    """Lower-case extension without the dot ("pdf", "xlsx", ...)"""
    return os.path.splitext(file_name)[1].lower().lstrip(".")


def unique_document_name(file_name: str, millis: Optional[int] = None) -> str:
    stem, ext = os.path.splitext(os.path.basename(file_name))
    if millis is None:
        millis = int(time.time() * 1000)
    return f"{stem}_{millis}{ext}"


def is_within(path: Path, root: Path) -> bool:
    """Path traversal guard"""
    real_path = os.path.realpath(path)
    real_root = os.path.realpath(root)
    return os.path.commonpath([real_path, real_root]) == real_root


def quotation_dir(documents_dir: Path, quotation_id: str) -> Path:
    target = Path(documents_dir) / quotation_id
    if not is_within(target, documents_dir):
        raise ValueError(f"Invalid quotation id for document storage: {quotation_id!r}")
    return target


# ─── Files ───

async def store_document_file(
    source: Path, quotation_id: str, file_name: str, documents_dir: Path
) -> Optional[Path]:
    """Copy a file into the quotation's document folder; None on failure"""
    def _copy() -> Path:
        target_dir = quotation_dir(documents_dir, quotation_id)
        target_dir.mkdir(parents=True, exist_ok=True)
        dest = target_dir / unique_document_name(file_name)
        shutil.copyfile(source, dest)
        return dest

    try:
        return await asyncio.to_thread(_copy)
    except (OSError, ValueError) as e:
        logger.error(f"Error saving document {file_name}: {e}")
        return None


async def save_document_bytes(
    content: bytes, quotation_id: str, file_name: str, documents_dir: Path
) -> Optional[Path]:
    """Write uploaded bytes into the quotation's document folder; None on failure"""
    def _write() -> Path:
        target_dir = quotation_dir(documents_dir, quotation_id)
        target_dir.mkdir(parents=True, exist_ok=True)
        dest = target_dir / unique_document_name(file_name)
        dest.write_bytes(content)
        return dest

    try:
        return await asyncio.to_thread(_write)
    except (OSError, ValueError) as e:
        logger.error(f"Error saving document {file_name}: {e}")
        return None


async def remove_document_file(file_path: str) -> bool:
    """Delete a stored document file; a missing file counts as removed"""
    try:
        await asyncio.to_thread(Path(file_path).unlink, missing_ok=True)
    except OSError as e:
        logger.error(f"Error deleting document {file_path}: {e}")
        return False
    return True


async def remove_quotation_dir(documents_dir: Path, quotation_id: str) -> None:
    """Drop the quotation's document folder if nothing is left in it"""
    try:
        target = quotation_dir(documents_dir, quotation_id)
        if target.is_dir() and not any(target.iterdir()):
            target.rmdir()
    except (OSError, ValueError) as e:
        logger.warning(f"Could not remove document folder for {quotation_id}: {e}")


# ─── Records ───

async def list_vendor_documents(store: CollectionStore, quotation_id: str) -> List[VendorDocument]:
    return [d for d in await _repo(store).all() if d.quotation_id == quotation_id]


async def get_vendor_document(store: CollectionStore, document_id: str) -> Optional[VendorDocument]:
    return await _repo(store).get(document_id)


async def add_vendor_document(
    store: CollectionStore,
    quotation_id: str,
    file_name: str,
    file_path: str,
    file_size: int,
    file_type: str,
    document_type: DocumentType = DocumentType.QUOTATION,
) -> Optional[VendorDocument]:
    document = VendorDocument(
        quotation_id=quotation_id,
        file_name=file_name,
        file_path=file_path,
        file_size=file_size,
        file_type=file_type,
        document_type=document_type,
    )
    return await _repo(store).add(document)


async def attach_document(
    store: CollectionStore,
    quotation_id: str,
    source: Path,
    documents_dir: Path,
    document_type: DocumentType = DocumentType.QUOTATION,
) -> Optional[VendorDocument]:
    """Copy a local file into storage and record it against the quotation"""
    source = Path(source)
    try:
        size = source.stat().st_size
    except OSError as e:
        logger.error(f"Error reading document file {source}: {e}")
        return None

    dest = await store_document_file(source, quotation_id, source.name, documents_dir)
    if dest is None:
        return None

    document = await add_vendor_document(
        store, quotation_id, source.name, str(dest), size, file_type_of(source.name), document_type
    )
    if document is None:
        await remove_document_file(str(dest))
    return document


async def delete_vendor_document(store: CollectionStore, document_id: str) -> bool:
    """Remove the record, then its file; False when the id is unknown"""
    repo = _repo(store)
    documents = await repo.all()
    document = next((d for d in documents if d.id == document_id), None)
    if document is None:
        return False

    if not await repo.save_all([d for d in documents if d.id != document_id]):
        return False

    await remove_document_file(document.file_path)
    logger.info(f"Deleted document {document.file_name} from quotation {document.quotation_id}")
    return True

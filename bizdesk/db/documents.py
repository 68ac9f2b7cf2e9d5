"""
Documents repository module.

Business documents (licences, filings, contracts) carry an optional expiry
date that feeds compliance alerts. Client documents are file references
attached to a single client.
"""

import logging
from typing import Optional

from bizdesk.errors import NotFoundError
from bizdesk.models.records import ClientDocumentInput, DocumentInput

from .base import BaseRepository
from .dates import iso_date
from .models import ClientDocument, Document

logger = logging.getLogger(__name__)


class DocumentRepository(BaseRepository):
    """Repository for business and client documents."""

    # =========================================================================
    # Business Documents
    # =========================================================================

    def list_by_business(self, business_id: int) -> list[Document]:
        """Documents of a business ordered by type, then name."""
        with self._get_connection() as conn:
            cursor = conn.execute(
                "SELECT * FROM documents WHERE business_id = ? ORDER BY type, name",
                (business_id,),
            )
            return [Document.from_row(row) for row in cursor.fetchall()]

    def get_by_id(self, document_id: int) -> Optional[Document]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM documents WHERE id = ?", (document_id,)
            ).fetchone()
            return Document.from_row(row) if row else None

    def create(self, document: DocumentInput) -> Document:
        with self._get_connection() as conn:
            document_id = self._insert(
                conn,
                "documents",
                {"business_id": document.business_id, **self._columns(document)},
            )
            row = conn.execute(
                "SELECT * FROM documents WHERE id = ?", (document_id,)
            ).fetchone()

        logger.info(
            f"Created {document.type.value} document {document_id} "
            f"(expires: {document.expiry_date or 'never'})"
        )
        return Document.from_row(row)

    def update(self, document: DocumentInput) -> Document:
        with self._get_connection() as conn:
            if not self._update_fields(
                conn, "documents", document.id, self._columns(document)
            ):
                raise NotFoundError("Document", document.id)
            row = conn.execute(
                "SELECT * FROM documents WHERE id = ?", (document.id,)
            ).fetchone()
        return Document.from_row(row)

    def delete(self, document_id: int) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM documents WHERE id = ?", (document_id,))
            return cursor.rowcount > 0

    @staticmethod
    def _columns(document: DocumentInput) -> dict:
        return {
            "name": document.name,
            "type": document.type.value,
            "notes": document.notes,
            "expiry_date": iso_date(document.expiry_date),
            "status": document.status,
        }

    # =========================================================================
    # Client Documents
    # =========================================================================

    def list_for_client(self, client_id: int) -> list[ClientDocument]:
        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT * FROM client_documents
                WHERE client_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (client_id,),
            )
            return [ClientDocument.from_row(row) for row in cursor.fetchall()]

    def create_client_document(self, document: ClientDocumentInput) -> ClientDocument:
        with self._get_connection() as conn:
            document_id = self._insert(
                conn,
                "client_documents",
                {
                    "client_id": document.client_id,
                    "name": document.name,
                    "type": document.type,
                    "notes": document.notes,
                    "file_path": document.file_path,
                },
            )
            row = conn.execute(
                "SELECT * FROM client_documents WHERE id = ?", (document_id,)
            ).fetchone()

        logger.info(f"Attached document {document_id} to client {document.client_id}")
        return ClientDocument.from_row(row)

    def delete_client_document(self, document_id: int) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM client_documents WHERE id = ?", (document_id,)
            )
            return cursor.rowcount > 0

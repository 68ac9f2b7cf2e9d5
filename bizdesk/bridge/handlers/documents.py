"""
Document operations for business records and per-client files.
"""

from bizdesk.errors import NotFoundError
from bizdesk.models import ClientDocumentInput, DocumentInput

from .base import HandlerGroup, operation, payload_id, rows


class DocumentsHandler(HandlerGroup):
    """Operations for business documents and client documents."""

    @operation("get-documents", "documents-data")
    def get_documents(self, payload):
        business_id = payload_id(payload, "business_id")
        return rows(self.repository.documents.list_by_business(business_id))

    @operation("get-document-by-id", "document-data")
    def get_document_by_id(self, payload):
        document_id = payload_id(payload)
        document = self.repository.documents.get_by_id(document_id)
        if document is None:
            raise NotFoundError("Document", document_id)
        return document.to_dict()

    @operation("save-document", "document-saved")
    def save_document(self, payload):
        document = self.repository.documents.create(DocumentInput.from_payload(payload))
        return document.to_dict()

    @operation("update-document", "document-updated")
    def update_document(self, payload):
        document = DocumentInput.from_payload(payload, require_id=True)
        return self.repository.documents.update(document).to_dict()

    @operation("delete-document", "document-deleted")
    def delete_document(self, payload):
        document_id = payload_id(payload)
        deleted = self.repository.documents.delete(document_id)
        return {"id": document_id, "deleted": deleted}

    # =========================================================================
    # Client Documents
    # =========================================================================

    @operation("get-client-documents", "client-documents-data")
    def get_client_documents(self, payload):
        client_id = payload_id(payload, "client_id")
        return rows(self.repository.documents.list_for_client(client_id))

    @operation("save-client-document", "client-document-saved")
    def save_client_document(self, payload):
        document = self.repository.documents.create_client_document(
            ClientDocumentInput.from_payload(payload)
        )
        return document.to_dict()

    @operation("delete-client-document", "client-document-deleted")
    def delete_client_document(self, payload):
        document_id = payload_id(payload)
        deleted = self.repository.documents.delete_client_document(document_id)
        return {"id": document_id, "deleted": deleted}

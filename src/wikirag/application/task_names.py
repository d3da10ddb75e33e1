"""Names of background tasks, as registered in the task table."""

GENERATE_DOCUMENT_EMBEDDINGS = "generate_document_embeddings"
BULK_INDEX_DOCUMENTS = "bulk_index_documents"
CLEANUP_OBSOLETE_EMBEDDINGS = "cleanup_obsolete_embeddings"
HANDLE_DOCUMENT_EVENT = "handle_document_event"

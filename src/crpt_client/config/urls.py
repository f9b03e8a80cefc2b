from __future__ import annotations

CRPT_API_BASE_URL = "https://ismp.crpt.ru/api/v3"


def get_create_document_url(base_url: str = CRPT_API_BASE_URL) -> str:
	return f"{base_url.rstrip('/')}/lk/documents/create"

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CreateDocumentRequest(BaseModel):
	"""Body of a create-document call: the document as-is plus its signature."""

	model_config = ConfigDict(frozen=True, extra="forbid")

	document: dict[str, Any]
	signature: str = Field(min_length=1)

"""Shared pydantic base for request and response payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
	"""Serialises with camelCase field names and ignores unknown input fields."""

	model_config = ConfigDict(
		alias_generator=to_camel,
		populate_by_name=True,
		extra="ignore",
	)

from datetime import datetime
from typing import Any, Self
from uuid import UUID, uuid4

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pymongo.asynchronous.cursor import AsyncCursor

from rollbook.utils import now


class MongoModel(BaseModel):
    """Document stored in MongoDB, keyed by a UUID `_id` and exposed as `id`."""

    id: UUID = Field(alias="_id", serialization_alias="id", default_factory=uuid4)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_serialization_defaults_required=True,
    )

    def to_mongo(self) -> dict[str, Any]:
        """Convert the model to a dictionary for MongoDB storage with _id field."""
        data = self.model_dump()
        data["_id"] = data.pop("id")
        return data

    @classmethod
    def from_mongo(cls, document: dict[str, Any] | None) -> Self | None:
        """Build a model from a raw document, passing None through."""
        if document is None:
            return None
        return cls.model_validate(document)

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Iterate over an AsyncCursor and return a list of model instances."""
        return [cls.model_validate(item) async for item in cursor]


class TimestampedMongoModel(MongoModel):
    """Document with store-maintained creation and modification timestamps."""

    created_at: datetime = Field(
        default_factory=now, validation_alias=AliasChoices("created_at", "createdAt"), serialization_alias="createdAt"
    )
    updated_at: datetime = Field(
        default_factory=now, validation_alias=AliasChoices("updated_at", "updatedAt"), serialization_alias="updatedAt"
    )

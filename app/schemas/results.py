from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class WriteResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True


class InsertResult(WriteResult):
    inserted_id: str = Field(alias="insertedId")


class UpdateResult(WriteResult):
    matched_count: int = Field(alias="matchedCount")
    modified_count: int = Field(alias="modifiedCount")
    upserted_id: Optional[str] = Field(default=None, alias="upsertedId")
    upserted_count: int = Field(default=0, alias="upsertedCount")


class DeleteResult(WriteResult):
    deleted_count: int = Field(alias="deletedCount")

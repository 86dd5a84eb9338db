
from datetime import date, datetime
from typing import Literal
from pydantic import BaseModel

ChangeTypeName = Literal["created", "title_updated", "content_modified", "restored"]

class VersionOut(BaseModel):
    id: int
    document_id: int
    title: str
    content: str
    change_type: ChangeTypeName
    user_id: int | None = None
    user_email: str
    created_at: datetime
    change_description: str
    relative_time: str
    absolute_time: str
    preview: str

class DayGroupOut(BaseModel):
    day: date
    label: str
    versions: list[VersionOut]

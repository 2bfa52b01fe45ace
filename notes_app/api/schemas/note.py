"""
Esquemas Pydantic para `note` (singular), alineados a convención en inglés.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

TITLE_MIN = 5
DESCRIPTION_MIN = 7

TITLE_MSG = "Please enter a valid title with at least five characters."
DESCRIPTION_MSG = "Please enter a valid description with at least seven characters."


class NoteCreate(BaseModel):
    title: str
    description: str

    @field_validator("title")
    @classmethod
    def _check_title(cls, v: str) -> str:
        if len(v) < TITLE_MIN:
            raise PydanticCustomError("title_length", TITLE_MSG)
        return v

    @field_validator("description")
    @classmethod
    def _check_description(cls, v: str) -> str:
        if len(v) < DESCRIPTION_MIN:
            raise PydanticCustomError("description_length", DESCRIPTION_MSG)
        return v


class NoteUpdate(BaseModel):
    """
    Actualización parcial. Campos ausentes o vacíos no se tocan; los presentes
    siguen las mismas reglas de longitud que al crear.
    """
    title: Optional[str] = None
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _check_title(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        if len(v) < TITLE_MIN:
            raise PydanticCustomError("title_length", TITLE_MSG)
        return v

    @field_validator("description")
    @classmethod
    def _check_description(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        if len(v) < DESCRIPTION_MIN:
            raise PydanticCustomError("description_length", DESCRIPTION_MSG)
        return v

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class NoteOut(BaseModel):
    id: str
    user_id: str
    title: str
    description: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, doc: Dict[str, Any]) -> "NoteOut":
        return cls(
            id=str(doc["_id"]),
            user_id=str(doc["user_id"]),
            title=doc["title"],
            description=doc["description"],
            created_at=doc["created_at"],
            updated_at=doc.get("updated_at"),
        )


class NoteDeleted(BaseModel):
    Success: str = "Note deleted successfully."

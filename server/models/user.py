"""User data models"""
from pydantic import BaseModel, EmailStr
from typing import Optional


class User(BaseModel):
    """Console operator on whose behalf commands run"""
    id: str
    email: EmailStr
    name: Optional[str] = None

    class Config:
        from_attributes = True

    @property
    def display_name(self) -> str:
        return self.name or self.email

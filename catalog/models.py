# catalog/models.py
from pydantic import BaseModel, ConfigDict
from typing import Optional

class Category(BaseModel):
    id: int
    name: str

class Product(BaseModel):
    # clients may send keys we don't know about; they are stored as-is
    model_config = ConfigDict(extra="allow")

    id: int
    categoryId: Optional[int] = None
    category: Optional[Category] = None
    name: Optional[str] = None
    shortName: Optional[str] = None
    description: Optional[str] = None
    ibuMin: Optional[str] = None
    ibuMax: Optional[str] = None
    abvMin: Optional[str] = None
    abvMax: Optional[str] = None
    srmMin: Optional[str] = None
    srmMax: Optional[str] = None
    ogMin: Optional[str] = None
    fgMin: Optional[str] = None
    fgMax: Optional[str] = None

class ProductSummary(BaseModel):
    id: Optional[int] = None
    categoryId: Optional[int] = None
    name: Optional[str] = None
    shortName: Optional[str] = None
    details: str

class Message(BaseModel):
    message: str

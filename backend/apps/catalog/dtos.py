"""DTO dataclasses only. Mapping logic lives in mappers.py."""
from dataclasses import dataclass


@dataclass
class ProductDTO:
    id: int
    name: str
    price: str
    image_url: str
    description: str
    created_at: str

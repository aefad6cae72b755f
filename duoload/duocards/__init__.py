from .client import DuocardsClient
from .models import Card, CardsQuery, DuocardsResponse

__all__ = ["Card", "CardsQuery", "DuocardsClient", "DuocardsResponse"]

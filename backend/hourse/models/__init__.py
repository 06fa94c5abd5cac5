from .listing import City, Hourse, Section

__all__ = [
    "City",
    "Section",
    "Hourse",
]

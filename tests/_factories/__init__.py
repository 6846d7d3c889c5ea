from .memory_store import InMemoryUserStore, InMemoryRecommendationStore, FakeBlobStore
from .recommendation import RecommendationFieldsFactory

__all__ = [
    "InMemoryUserStore",
    "InMemoryRecommendationStore",
    "FakeBlobStore",
    "RecommendationFieldsFactory",
]

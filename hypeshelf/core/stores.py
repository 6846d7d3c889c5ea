"""Interfaces of the external collaborators the gateways depend on."""

from typing import Optional, Protocol
from uuid import UUID

from hypeshelf.models.recommendation import Recommendation, RecommendationContent
from hypeshelf.models.user import Role, User


class UserStore(Protocol):
    def get_user_by_id(self, user_id: UUID) -> Optional[User]: ...

    def get_user_by_external_id(self, external_id: str) -> Optional[User]: ...

    def create_user(
        self, external_id: str, role: Role, display_name: Optional[str]
    ) -> User: ...

    def set_user_role(self, user_id: UUID, role: Role) -> bool: ...

    def get_all_users(self) -> list[User]: ...

    def delete_users_without_external_id(self) -> int: ...

    def assign_role_to_users_without_role(self, role: Role) -> int: ...


class RecommendationStore(Protocol):
    def create_recommendation(
        self, content: RecommendationContent, author_id: str, author_name: str
    ) -> Recommendation: ...

    def get_recommendation_by_id(self, rec_id: UUID) -> Optional[Recommendation]: ...

    def update_recommendation_content(
        self, rec_id: UUID, content: RecommendationContent
    ) -> bool: ...

    def set_staff_pick(self, rec_id: UUID, is_staff_pick: bool) -> bool: ...

    def delete_recommendation(self, rec_id: UUID) -> bool: ...

    def get_recent_recommendations(self, limit: int) -> list[Recommendation]: ...

    def get_all_recommendations(
        self, genre: Optional[str] = None
    ) -> list[Recommendation]: ...

    def get_distinct_genres(self) -> list[str]: ...


class BlobStore(Protocol):
    def generate_upload_url(self) -> str: ...

    def get_url(self, ref: str) -> Optional[str]: ...

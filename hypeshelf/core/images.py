"""Image upload handles and lookups.

The service only ever stores a reference to an image; the bytes go straight
from the client to the blob store.
"""

from contextlib import nullcontext
from typing import Optional

from hypeshelf.models.caller import CallerContext
from .errors import AuthenticationError
from .identity import resolve_or_create_role
from .recommendations import Transaction
from .stores import BlobStore, UserStore


class ImageGateway:
    def __init__(
        self,
        users: UserStore,
        blobs: BlobStore,
        transaction: Transaction = nullcontext,
    ):
        self.users = users
        self.blobs = blobs
        self.transaction = transaction

    def generate_upload_url(self, caller: CallerContext) -> str:
        """Issue a single-use upload URL to a signed-in caller."""
        if caller.identity is None:
            raise AuthenticationError()

        with self.transaction():
            resolve_or_create_role(caller, self.users)
        return self.blobs.generate_upload_url()

    def get_image_url(self, image_id: Optional[str]) -> Optional[str]:
        if not image_id:
            return None
        return self.blobs.get_url(image_id)

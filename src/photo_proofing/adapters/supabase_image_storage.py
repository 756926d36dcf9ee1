"""Supabase Storage adapter for image files."""

from dataclasses import dataclass

from supabase import Client

from photo_proofing.services.uploads import ImageStorage


@dataclass
class SupabaseImageStorage(ImageStorage):
    """Stores originals and thumbnails in a Supabase Storage bucket."""

    client: Client
    bucket: str

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Upload bytes to the bucket and return their public URL."""
        bucket = self.client.storage.from_(self.bucket)
        bucket.upload(
            path,
            content,
            {"content-type": content_type, "upsert": "false"},
        )
        return bucket.get_public_url(path)

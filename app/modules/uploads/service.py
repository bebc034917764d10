import os
import time
from supabase import Client
from fastapi import HTTPException, UploadFile
from app.config.settings import settings
from app.modules.uploads.r2_storage import R2Storage
from app.modules.uploads.schemas import UploadResponse, PhotoPosition
from typing import Dict, Any, List, Optional
import logging

logger = logging.getLogger(__name__)

# Positions are unique per user, so a reorder parks rows here first
REORDER_OFFSET = 1000


class UploadService:
    def __init__(self, supabase: Client, storage: R2Storage):
        self.supabase = supabase
        self.storage = storage

    @staticmethod
    def build_key(user_id: str, filename: Optional[str]) -> str:
        """profiles/<userId>/<epoch ms>.<ext>; the user id comes from the token, never the client"""
        extension = os.path.splitext(filename or "")[1].lstrip(".") or "jpg"
        return f"{settings.upload_key_prefix}/{user_id}/{int(time.time() * 1000)}.{extension}"

    def _get_owned_photo(self, photo_id: str, user_id: str, action: str) -> Dict[str, Any]:
        result = self.supabase.table("photos")\
            .select("*")\
            .eq("id", photo_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Photo not found")
        photo = result.data[0]
        if photo["userId"] != user_id:
            raise HTTPException(status_code=403, detail=f"Unauthorized to {action} this photo")
        return photo

    def _list_photos(self, user_id: str) -> List[Dict[str, Any]]:
        result = self.supabase.table("photos")\
            .select("*")\
            .eq("userId", user_id)\
            .order("position")\
            .execute()
        return result.data or []

    async def upload_photo(self, user_id: str, file: Optional[UploadFile], replace_id: Optional[str] = None) -> UploadResponse:
        """Store one image and record it as a new or replacement photo. Single attempt, no retry."""
        if file is None or not file.filename:
            raise HTTPException(status_code=400, detail="No file uploaded")
        content_type = file.content_type or ""
        if not content_type.startswith("image/"):
            raise HTTPException(status_code=400, detail="Only image files are allowed!")

        content = await file.read()
        if not content:
            raise HTTPException(status_code=400, detail="No file uploaded")
        if len(content) > settings.max_upload_bytes:
            raise HTTPException(status_code=400, detail="File too large")

        existing = None
        photos: List[Dict[str, Any]] = []
        if replace_id:
            existing = self._get_owned_photo(replace_id, user_id, "replace")
        else:
            photos = self._list_photos(user_id)
            if len(photos) >= settings.max_photos_per_user:
                raise HTTPException(
                    status_code=400,
                    detail=f"You can only upload up to {settings.max_photos_per_user} photos"
                )

        key = self.build_key(user_id, file.filename)
        try:
            self.storage.upload_file(content, key, content_type)
        except Exception as e:
            logger.error(f"Upload error for user {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Upload failed")
        logger.info(f"Stored {len(content)} bytes at {key}")

        try:
            if existing is not None:
                photo = self._replace_photo(existing, key)
            else:
                next_position = photos[-1]["position"] + 1 if photos else 0
                photo = self._create_photo(user_id, key, next_position)
        except HTTPException:
            raise
        except Exception as e:
            # the object stays in the bucket; the caller uploads again
            logger.error(f"Photo record failed for {key}: {e}")
            raise HTTPException(status_code=500, detail="Failed to create or update photo record")

        return UploadResponse(
            key=key,
            id=photo["id"],
            image_url=key,
            position=photo["position"],
            is_primary=bool(photo.get("isPrimary")),
        )

    def _replace_photo(self, existing: Dict[str, Any], key: str) -> Dict[str, Any]:
        old_key = existing.get("imageUrl")
        if old_key and not self.storage.delete_file(old_key):
            logger.warning(f"Old image {old_key} was not removed during replacement")
        result = self.supabase.table("photos")\
            .update({"imageUrl": key})\
            .eq("id", existing["id"])\
            .execute()
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create or update photo record")
        return result.data[0]

    def _create_photo(self, user_id: str, key: str, position: int) -> Dict[str, Any]:
        result = self.supabase.table("photos").insert({
            "userId": user_id,
            "imageUrl": key,
            "position": position,
            "isPrimary": position == 0,
        }).execute()
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create or update photo record")
        return result.data[0]

    def delete_photo(self, user_id: str, photo_id: str) -> None:
        """Delete a photo, close the gap in positions and keep one primary photo."""
        photo = self._get_owned_photo(photo_id, user_id, "delete")
        logger.info(f"Deleting photo {photo_id} for user {user_id}")

        if photo.get("imageUrl") and not self.storage.delete_file(photo["imageUrl"]):
            # orphaned objects are acceptable; the row still goes
            logger.warning(f"Image {photo['imageUrl']} left in storage")

        self.supabase.table("photos").delete().eq("id", photo_id).execute()

        remaining = self._list_photos(user_id)
        # sequential so no two rows share a position mid-way
        for index, row in enumerate(remaining):
            if row["position"] != index:
                self.supabase.table("photos").update({"position": index}).eq("id", row["id"]).execute()
                row["position"] = index

        if remaining and not any(row.get("isPrimary") for row in remaining):
            self.supabase.table("photos")\
                .update({"isPrimary": True})\
                .eq("id", remaining[0]["id"])\
                .execute()

    def reorder_photos(self, user_id: str, photos: List[PhotoPosition]) -> None:
        photo_ids = [p.id for p in photos]
        if not photo_ids:
            raise HTTPException(status_code=400, detail="Invalid request: photos array required")
        owned = self.supabase.table("photos")\
            .select("id")\
            .in_("id", photo_ids)\
            .eq("userId", user_id)\
            .execute()
        if len(owned.data or []) != len(set(photo_ids)):
            raise HTTPException(status_code=403, detail="Some photos do not belong to this user")

        for index, photo in enumerate(photos):
            self.supabase.table("photos")\
                .update({"position": REORDER_OFFSET + index})\
                .eq("id", photo.id)\
                .execute()
        for photo in photos:
            self.supabase.table("photos")\
                .update({"position": photo.position, "isPrimary": photo.position == 0})\
                .eq("id", photo.id)\
                .execute()

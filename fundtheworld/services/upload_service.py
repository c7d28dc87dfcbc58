import asyncio
import base64
import logging
import aiohttp
from fundtheworld.core.config import settings

logger = logging.getLogger("upload_service")

MAX_IMAGE_BYTES = 32 * 1024 * 1024


class UploadError(Exception):
    pass


class UploadNotConfiguredError(UploadError):
    pass


class UploadService:
    async def upload_image(self, filename: str, content: bytes) -> str:
        """Host an image on ImgBB and return its public URL"""
        if not settings.imgbb_api_key:
            raise UploadNotConfiguredError("Image upload is not configured")
        if not content:
            raise ValueError("Empty image")
        if len(content) > MAX_IMAGE_BYTES:
            raise ValueError("Image is larger than 32MB")

        form = aiohttp.FormData()
        form.add_field("image", base64.b64encode(content).decode("ascii"))
        form.add_field("name", filename.rsplit(".", 1)[0] if filename else "upload")

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    settings.imgbb_upload_url,
                    params={"key": settings.imgbb_api_key},
                    data=form,
                    timeout=aiohttp.ClientTimeout(total=30),
                ) as response:
                    if response.status != 200:
                        raise UploadError(f"Failed to upload image: HTTP {response.status}")
                    payload = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Image upload error: {e}")
            raise UploadError(f"Failed to upload image: {e}") from e

        if not payload.get("success") or not payload.get("data", {}).get("url"):
            raise UploadError("Failed to upload image: unexpected response")
        return payload["data"]["url"]

upload_service = UploadService()

from fastapi import APIRouter, File, HTTPException, UploadFile
from fundtheworld.services.upload_service import UploadError, UploadNotConfiguredError, upload_service
from fundtheworld.utils.response import success_response

router = APIRouter(tags=["upload"])

@router.post("/upload")
async def upload_image(image: UploadFile = File(...)):
    if image.content_type and not image.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files can be uploaded")
    content = await image.read()
    try:
        url = await upload_service.upload_image(image.filename or "upload", content)
        return success_response(data={"url": url}, message="Image uploaded")
    except UploadNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except UploadError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

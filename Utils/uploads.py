import io
import logging
import os
import uuid

from PIL import Image, UnidentifiedImageError

from Models.allImgsModel import AllImgs
from Utils.appError import AppError

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = ("image/png", "image/jpeg")
MAX_SIDE = 800


def save_image(file_storage, owner_id=None):
    """Normalize an uploaded image and store it in GridFS; returns its filename."""
    mime_type = file_storage.mimetype
    if mime_type not in ALLOWED_MIME_TYPES:
        raise AppError("Only PNG and JPEG formats are supported", 400)

    try:
        image = Image.open(file_storage)
    except UnidentifiedImageError:
        raise AppError("Uploaded file is not a valid image", 400)

    file_extension = "png" if mime_type == "image/png" else "jpg"
    original_name = os.path.splitext(os.path.basename(file_storage.filename or "image"))[0]
    filename = f"{original_name}_{uuid.uuid4().hex[:8]}.{file_extension}"

    # JPEG has no alpha channel; PNG keeps its transparency
    if file_extension == "jpg":
        image = image.convert("RGB")
    image.thumbnail((MAX_SIDE, MAX_SIDE))

    img_byte_arr = io.BytesIO()
    image.save(img_byte_arr, format="JPEG" if file_extension == "jpg" else "PNG")
    img_byte_arr.seek(0)

    img_doc = AllImgs(filename=filename, content_type=mime_type, owner_id=owner_id)
    img_doc.file.put(img_byte_arr, content_type=mime_type)
    img_doc.save()

    logger.info(f"✅ Uploaded image: {filename}")
    return filename


def save_images(file_list, owner_id=None):
    return [save_image(f, owner_id) for f in file_list if f and f.filename]


def delete_image(filename):
    """Remove a stored image; the shared default avatar is never deleted."""
    if not filename or filename == "default.jpg":
        return
    img_doc = AllImgs.objects(filename=filename).first()
    if img_doc:
        img_doc.file.delete()
        img_doc.delete()
        logger.info(f"🗑️ Deleted image: {filename}")


def load_image(filename):
    img_doc = AllImgs.objects(filename=filename).first()
    if not img_doc:
        raise AppError("Image not found", 404)
    return io.BytesIO(img_doc.file.read()), img_doc.content_type or "image/jpeg"

"""Render domain records as JSON-ready dictionaries."""

from datetime import datetime
from decimal import Decimal

from photo_proofing.domain.galleries import (
    ClientGallery,
    GalleryDetail,
    GalleryRecord,
    ImageRecord,
)
from photo_proofing.domain.orders import OrderItemRecord, OrderRecord


def _money(amount: Decimal) -> float:
    return float(amount)


def _timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def serialize_image(image: ImageRecord) -> dict[str, object]:
    return {
        "id": str(image.id),
        "gallery_id": str(image.gallery_id),
        "filename": image.filename,
        "original_url": image.original_url,
        "thumbnail_url": image.thumbnail_url,
        "price": _money(image.price),
        "size_bytes": image.size_bytes,
        "uploaded_at": _timestamp(image.uploaded_at),
    }


def serialize_gallery(gallery: GalleryRecord) -> dict[str, object]:
    return {
        "id": str(gallery.id),
        "name": gallery.name,
        "description": gallery.description,
        "photographer_id": str(gallery.photographer_id),
        "client_email": gallery.client_email,
        "client_name": gallery.client_name,
        "access_code": gallery.access_code,
        "is_active": gallery.is_active,
        "expires_at": _timestamp(gallery.expires_at),
        "views": gallery.views,
        "created_at": _timestamp(gallery.created_at),
    }


def serialize_gallery_detail(detail: GalleryDetail) -> dict[str, object]:
    """Owner view: the gallery plus its images and counts."""
    return {
        **serialize_gallery(detail.gallery),
        "images": [serialize_image(image) for image in detail.images],
        "image_count": detail.image_count,
        "order_count": detail.order_count,
    }


def serialize_client_gallery(resolved: ClientGallery) -> dict[str, object]:
    """Client view. The owner id and view counter stay private."""
    gallery = resolved.gallery
    photographer = resolved.photographer
    return {
        "id": str(gallery.id),
        "name": gallery.name,
        "description": gallery.description,
        "client_name": gallery.client_name,
        "access_code": gallery.access_code,
        "expires_at": _timestamp(gallery.expires_at),
        "images": [serialize_image(image) for image in resolved.images],
        "photographer": (
            {"name": photographer.name, "email": photographer.email}
            if photographer
            else None
        ),
    }


def serialize_order(order: OrderRecord) -> dict[str, object]:
    return {
        "id": str(order.id),
        "gallery_id": str(order.gallery_id),
        "client_email": order.client_email,
        "client_name": order.client_name,
        "total": _money(order.total),
        "status": order.status,
        "payment_session_id": order.payment_session_id,
        "created_at": _timestamp(order.created_at),
    }


def serialize_order_item(item: OrderItemRecord) -> dict[str, object]:
    return {
        "id": str(item.id),
        "image_id": str(item.image_id),
        "price": _money(item.price),
        "quantity": item.quantity,
    }

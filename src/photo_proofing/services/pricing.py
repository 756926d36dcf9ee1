"""Bulk and individual price updates for gallery images."""

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from photo_proofing.domain.errors import InvalidRequestError
from photo_proofing.domain.galleries import ImageRecord
from photo_proofing.services.galleries import GalleryService, ImageRepository

logger = logging.getLogger(__name__)


@dataclass
class PricingService:
    """Applies a photographer's saved price sheet."""

    gallery_service: GalleryService
    image_repository: ImageRepository

    async def apply_prices(
        self,
        photographer_id: UUID,
        gallery_id: UUID,
        prices: dict[UUID, Decimal],
    ) -> list[ImageRecord]:
        """Validate the whole mapping, then write each price concurrently.

        Nothing is written unless every image belongs to the gallery and every
        price is non-negative. Each write is scoped to the gallery.
        """
        self.gallery_service.get_owned(photographer_id, gallery_id)
        if not prices:
            raise InvalidRequestError("Invalid prices data")
        negative = sorted(
            str(image_id) for image_id, price in prices.items() if price < 0
        )
        if negative:
            raise InvalidRequestError(
                "Prices must be non-negative", details={"image_ids": negative}
            )
        images = self.image_repository.list_images(gallery_id)
        known = {image.id for image in images}
        unknown = sorted(str(image_id) for image_id in prices if image_id not in known)
        if unknown:
            raise InvalidRequestError(
                "Images do not belong to this gallery",
                details={"image_ids": unknown},
            )

        results = await asyncio.gather(
            *(
                asyncio.to_thread(
                    self.image_repository.update_price, gallery_id, image_id, price
                )
                for image_id, price in prices.items()
            )
        )
        missed = [
            str(image_id)
            for image_id, updated in zip(prices, results, strict=True)
            if not updated
        ]
        if missed:
            logger.warning(
                "Some price updates matched no image",
                extra={"gallery_id": str(gallery_id), "image_ids": missed},
            )
        logger.info(
            "Updated image prices",
            extra={"gallery_id": str(gallery_id), "count": len(prices) - len(missed)},
        )
        return self.image_repository.list_images(gallery_id)

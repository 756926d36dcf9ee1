"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from photo_proofing.adapters.stripe_checkout_client import StripeCheckoutClient
from photo_proofing.adapters.supabase_gallery_repository import (
    SupabaseGalleryRepository,
)
from photo_proofing.adapters.supabase_identity_provider import (
    SupabaseIdentityProvider,
)
from photo_proofing.adapters.supabase_image_repository import SupabaseImageRepository
from photo_proofing.adapters.supabase_image_storage import SupabaseImageStorage
from photo_proofing.adapters.supabase_order_repository import SupabaseOrderRepository
from photo_proofing.adapters.supabase_photographer_repository import (
    SupabasePhotographerRepository,
)
from photo_proofing.config import Settings, parse_allowed_types
from photo_proofing.services.access import GalleryAccessService
from photo_proofing.services.checkout import CheckoutService
from photo_proofing.services.galleries import GalleryService
from photo_proofing.services.imaging import WatermarkOptions
from photo_proofing.services.photographers import PhotographerService
from photo_proofing.services.pricing import PricingService
from photo_proofing.services.uploads import UploadService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    photographer_service: PhotographerService
    gallery_service: GalleryService
    access_service: GalleryAccessService
    pricing_service: PricingService
    upload_service: UploadService
    checkout_service: CheckoutService
    close_resources: Callable[[], Awaitable[None]]


def build_watermark(settings: Settings) -> WatermarkOptions | None:
    """Return watermark options when watermark text is configured."""
    if not settings.watermark_text:
        return None
    return WatermarkOptions(
        text=settings.watermark_text,
        position=settings.watermark_position,
        opacity=settings.watermark_opacity,
        font_size=settings.watermark_font_size,
        color=settings.watermark_color,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    gallery_repository = SupabaseGalleryRepository(supabase_client)
    image_repository = SupabaseImageRepository(supabase_client)
    order_repository = SupabaseOrderRepository(supabase_client)
    photographer_repository = SupabasePhotographerRepository(supabase_client)

    photographer_service = PhotographerService(
        identity_provider=SupabaseIdentityProvider(supabase_client),
        repository=photographer_repository,
    )
    gallery_service = GalleryService(
        gallery_repository=gallery_repository,
        image_repository=image_repository,
    )
    access_service = GalleryAccessService(
        gallery_repository=gallery_repository,
        image_repository=image_repository,
        photographer_repository=photographer_repository,
    )
    pricing_service = PricingService(
        gallery_service=gallery_service,
        image_repository=image_repository,
    )
    upload_service = UploadService(
        gallery_service=gallery_service,
        image_repository=image_repository,
        storage=SupabaseImageStorage(
            supabase_client, bucket=resolved_settings.storage_bucket
        ),
        allowed_types=parse_allowed_types(resolved_settings.allowed_upload_types),
        max_bytes=resolved_settings.max_upload_bytes,
        thumbnail_max_px=resolved_settings.thumbnail_max_px,
        watermark=build_watermark(resolved_settings),
    )
    checkout_service = CheckoutService(
        gallery_repository=gallery_repository,
        image_repository=image_repository,
        order_repository=order_repository,
        payment_client=StripeCheckoutClient(
            api_key=resolved_settings.stripe_secret_key,
            currency=resolved_settings.stripe_currency,
        ),
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        photographer_service=photographer_service,
        gallery_service=gallery_service,
        access_service=access_service,
        pricing_service=pricing_service,
        upload_service=upload_service,
        checkout_service=checkout_service,
        close_resources=close_resources,
    )

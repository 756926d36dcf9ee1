"""Shared test fixtures."""

import io
import threading
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from uuid import UUID, uuid4

import pytest
from PIL import Image

from photo_proofing.config import Settings, parse_allowed_types
from photo_proofing.containers import AppContainer
from photo_proofing.domain.galleries import GalleryDraft, GalleryRecord, ImageRecord
from photo_proofing.domain.models import Identity, PhotographerRecord
from photo_proofing.domain.orders import (
    OrderItemRecord,
    OrderItemSnapshot,
    OrderRecord,
    PaymentLineItem,
    PaymentSession,
)
from photo_proofing.services.access import GalleryAccessService
from photo_proofing.services.checkout import (
    CheckoutService,
    OrderRepository,
    PaymentSessionClient,
)
from photo_proofing.services.galleries import (
    GalleryRepository,
    GalleryService,
    ImageRepository,
)
from photo_proofing.services.photographers import (
    IdentityProvider,
    PhotographerRepository,
    PhotographerService,
)
from photo_proofing.services.pricing import PricingService
from photo_proofing.services.uploads import ImageStorage, UploadService

PHOTOGRAPHER_TOKEN = "photographer-token"
PHOTOGRAPHER_ID = UUID("11111111-1111-4111-8111-111111111111")


@dataclass
class FakeIdentityProvider(IdentityProvider):
    """Maps known tokens to identities."""

    identities: dict[str, Identity] = field(default_factory=dict)

    def get_identity(self, access_token: str) -> Identity | None:
        return self.identities.get(access_token)


@dataclass
class InMemoryPhotographerRepository(PhotographerRepository):
    """In-memory photographer repository for tests."""

    photographers: dict[UUID, PhotographerRecord] = field(default_factory=dict)

    def get_photographer(self, photographer_id: UUID) -> PhotographerRecord | None:
        return self.photographers.get(photographer_id)

    def create_photographer(self, identity: Identity) -> PhotographerRecord:
        record = PhotographerRecord(
            id=identity.user_id, email=identity.email, name=identity.name
        )
        self.photographers[record.id] = record
        return record


@dataclass
class InMemoryGalleryRepository(GalleryRepository):
    """In-memory gallery repository for tests."""

    galleries: dict[UUID, GalleryRecord] = field(default_factory=dict)
    order_counts: dict[UUID, int] = field(default_factory=dict)
    deleted: list[UUID] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def add(
        self, photographer_id: UUID = PHOTOGRAPHER_ID, **overrides
    ) -> GalleryRecord:
        values = {
            "id": uuid4(),
            "name": "Smith Wedding",
            "description": None,
            "photographer_id": photographer_id,
            "client_email": "client@example.com",
            "client_name": "Jane Smith",
            "access_code": f"code-{uuid4().hex[:12]}",
            "is_active": True,
            "expires_at": None,
            "views": 0,
            "created_at": datetime.now(tz=UTC)
            + timedelta(seconds=len(self.galleries)),
        }
        values.update(overrides)
        gallery = GalleryRecord(**values)
        self.galleries[gallery.id] = gallery
        return gallery

    def create_gallery(
        self, photographer_id: UUID, draft: GalleryDraft, access_code: str
    ) -> GalleryRecord:
        return self.add(
            photographer_id,
            name=draft.name,
            description=draft.description,
            client_email=draft.client_email,
            client_name=draft.client_name,
            expires_at=draft.expires_at,
            access_code=access_code,
        )

    def get_gallery(self, gallery_id: UUID) -> GalleryRecord | None:
        return self.galleries.get(gallery_id)

    def get_by_access_code(self, access_code: str) -> GalleryRecord | None:
        for gallery in self.galleries.values():
            if gallery.access_code == access_code:
                return gallery
        return None

    def access_code_exists(self, access_code: str) -> bool:
        return self.get_by_access_code(access_code) is not None

    def list_by_photographer(self, photographer_id: UUID) -> list[GalleryRecord]:
        owned = [
            gallery
            for gallery in self.galleries.values()
            if gallery.photographer_id == photographer_id
        ]
        return sorted(owned, key=lambda gallery: gallery.created_at, reverse=True)

    def update_gallery(
        self, gallery_id: UUID, changes: dict[str, object]
    ) -> GalleryRecord:
        updated = replace(self.galleries[gallery_id], **changes)
        self.galleries[gallery_id] = updated
        return updated

    def delete_gallery(self, gallery_id: UUID) -> None:
        self.galleries.pop(gallery_id, None)
        self.deleted.append(gallery_id)

    def increment_views(self, gallery_id: UUID) -> int:
        with self._lock:
            gallery = self.galleries[gallery_id]
            updated = replace(gallery, views=gallery.views + 1)
            self.galleries[gallery_id] = updated
            return updated.views

    def count_orders(self, gallery_id: UUID) -> int:
        return self.order_counts.get(gallery_id, 0)


@dataclass
class InMemoryImageRepository(ImageRepository):
    """In-memory image repository for tests."""

    images: dict[UUID, ImageRecord] = field(default_factory=dict)
    price_writes: list[tuple[UUID, UUID, Decimal]] = field(default_factory=list)
    fail_price_writes: bool = False

    def add(self, gallery_id: UUID, **overrides) -> ImageRecord:
        values = {
            "id": uuid4(),
            "gallery_id": gallery_id,
            "filename": "IMG_0001.jpg",
            "original_url": "https://cdn.example.com/original.jpg",
            "thumbnail_url": "https://cdn.example.com/thumb.jpg",
            "price": Decimal("0"),
            "size_bytes": 1024,
            "uploaded_at": datetime.now(tz=UTC)
            + timedelta(milliseconds=len(self.images)),
        }
        values.update(overrides)
        image = ImageRecord(**values)
        self.images[image.id] = image
        return image

    def create_image(  # noqa: PLR0913
        self,
        gallery_id: UUID,
        filename: str,
        original_url: str,
        thumbnail_url: str,
        size_bytes: int,
    ) -> ImageRecord:
        return self.add(
            gallery_id,
            filename=filename,
            original_url=original_url,
            thumbnail_url=thumbnail_url,
            size_bytes=size_bytes,
        )

    def list_images(self, gallery_id: UUID) -> list[ImageRecord]:
        owned = [
            image for image in self.images.values() if image.gallery_id == gallery_id
        ]
        return sorted(owned, key=lambda image: image.uploaded_at, reverse=True)

    def get_images(self, gallery_id: UUID, image_ids: list[UUID]) -> list[ImageRecord]:
        wanted = set(image_ids)
        return [
            image
            for image in self.images.values()
            if image.gallery_id == gallery_id and image.id in wanted
        ]

    def update_price(self, gallery_id: UUID, image_id: UUID, price: Decimal) -> bool:
        if self.fail_price_writes:
            raise RuntimeError("store unavailable")
        image = self.images.get(image_id)
        if image is None or image.gallery_id != gallery_id:
            return False
        self.images[image_id] = replace(image, price=price)
        self.price_writes.append((gallery_id, image_id, price))
        return True


@dataclass
class InMemoryOrderRepository(OrderRepository):
    """In-memory order repository for tests."""

    orders: dict[UUID, OrderRecord] = field(default_factory=dict)
    items: dict[UUID, list[OrderItemRecord]] = field(default_factory=dict)
    fail_attach: bool = False

    def add(self, gallery_id: UUID, **overrides) -> OrderRecord:
        values = {
            "id": uuid4(),
            "gallery_id": gallery_id,
            "client_email": None,
            "client_name": None,
            "total": Decimal("0"),
            "status": "pending",
            "payment_session_id": None,
            "created_at": datetime.now(tz=UTC),
        }
        values.update(overrides)
        order = OrderRecord(**values)
        self.orders[order.id] = order
        self.items.setdefault(order.id, [])
        return order

    def create_order(  # noqa: PLR0913
        self,
        gallery_id: UUID,
        client_email: str | None,
        client_name: str | None,
        total: Decimal,
        status: str,
        items: list[OrderItemSnapshot],
    ) -> OrderRecord:
        order = self.add(
            gallery_id,
            client_email=client_email,
            client_name=client_name,
            total=total,
            status=status,
        )
        self.items[order.id] = [
            OrderItemRecord(
                id=uuid4(),
                order_id=order.id,
                image_id=item.image_id,
                price=item.price,
                quantity=item.quantity,
            )
            for item in items
        ]
        return order

    def get_order(self, order_id: UUID) -> OrderRecord | None:
        return self.orders.get(order_id)

    def list_order_items(self, order_id: UUID) -> list[OrderItemRecord]:
        return list(self.items.get(order_id, []))

    def attach_payment_session(
        self, order_id: UUID, session_id: str, status: str
    ) -> None:
        if self.fail_attach:
            raise RuntimeError("store unavailable")
        self.orders[order_id] = replace(
            self.orders[order_id], payment_session_id=session_id, status=status
        )

    def update_status(self, order_id: UUID, status: str) -> None:
        self.orders[order_id] = replace(self.orders[order_id], status=status)

    def list_orders(self, status: str | None, limit: int) -> list[OrderRecord]:
        orders = [
            order
            for order in self.orders.values()
            if status is None or order.status == status
        ]
        orders.sort(key=lambda order: order.created_at, reverse=True)
        return orders[:limit]

    def list_stale_orders(
        self, status: str, created_before: datetime
    ) -> list[OrderRecord]:
        return [
            order
            for order in self.orders.values()
            if order.status == status and order.created_at < created_before
        ]


@dataclass
class InMemoryImageStorage(ImageStorage):
    """Keeps uploaded objects in a dict keyed by path."""

    objects: dict[str, tuple[bytes, str]] = field(default_factory=dict)

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        self.objects[path] = (content, content_type)
        return f"https://storage.example.com/{path}"


@dataclass
class FakePaymentClient(PaymentSessionClient):
    """Records checkout session requests and returns a fixed session."""

    fail: bool = False
    calls: list[dict[str, object]] = field(default_factory=list)

    async def create_session(  # noqa: PLR0913
        self,
        *,
        line_items: list[PaymentLineItem],
        success_url: str,
        cancel_url: str,
        customer_email: str | None,
        metadata: dict[str, str],
    ) -> PaymentSession:
        self.calls.append(
            {
                "line_items": line_items,
                "success_url": success_url,
                "cancel_url": cancel_url,
                "customer_email": customer_email,
                "metadata": metadata,
            }
        )
        if self.fail:
            raise RuntimeError("payment provider unavailable")
        return PaymentSession(
            id="cs_test_123", url="https://checkout.example.com/pay/cs_test_123"
        )


def image_bytes(
    image_format: str = "JPEG", size: tuple[int, int] = (640, 480)
) -> bytes:
    """Render a solid-color image in memory."""
    buffer = io.BytesIO()
    Image.new("RGB", size, (30, 90, 160)).save(buffer, format=image_format)
    return buffer.getvalue()


def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {PHOTOGRAPHER_TOKEN}"}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
        stripe_secret_key="sk_test_key",
        public_base_url="https://proofs.example.com",
        environment="local",
    )


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider(
        identities={
            PHOTOGRAPHER_TOKEN: Identity(
                user_id=PHOTOGRAPHER_ID,
                email="studio@example.com",
                name="Ana Studio",
            )
        }
    )


@pytest.fixture
def photographer_repository() -> InMemoryPhotographerRepository:
    return InMemoryPhotographerRepository()


@pytest.fixture
def gallery_repository() -> InMemoryGalleryRepository:
    return InMemoryGalleryRepository()


@pytest.fixture
def image_repository() -> InMemoryImageRepository:
    return InMemoryImageRepository()


@pytest.fixture
def order_repository() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()


@pytest.fixture
def storage() -> InMemoryImageStorage:
    return InMemoryImageStorage()


@pytest.fixture
def payment_client() -> FakePaymentClient:
    return FakePaymentClient()


@pytest.fixture
def gallery_service(
    gallery_repository: InMemoryGalleryRepository,
    image_repository: InMemoryImageRepository,
) -> GalleryService:
    return GalleryService(
        gallery_repository=gallery_repository, image_repository=image_repository
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    identity_provider: FakeIdentityProvider,
    photographer_repository: InMemoryPhotographerRepository,
    gallery_repository: InMemoryGalleryRepository,
    image_repository: InMemoryImageRepository,
    order_repository: InMemoryOrderRepository,
    storage: InMemoryImageStorage,
    payment_client: FakePaymentClient,
    gallery_service: GalleryService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        photographer_service=PhotographerService(
            identity_provider=identity_provider, repository=photographer_repository
        ),
        gallery_service=gallery_service,
        access_service=GalleryAccessService(
            gallery_repository=gallery_repository,
            image_repository=image_repository,
            photographer_repository=photographer_repository,
        ),
        pricing_service=PricingService(
            gallery_service=gallery_service, image_repository=image_repository
        ),
        upload_service=UploadService(
            gallery_service=gallery_service,
            image_repository=image_repository,
            storage=storage,
            allowed_types=parse_allowed_types(settings.allowed_upload_types),
            max_bytes=settings.max_upload_bytes,
        ),
        checkout_service=CheckoutService(
            gallery_repository=gallery_repository,
            image_repository=image_repository,
            order_repository=order_repository,
            payment_client=payment_client,
        ),
        close_resources=close_resources,
    )

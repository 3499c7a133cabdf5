# =============================================================================
# tests/test_services.py - Service Layer Tests
# =============================================================================
# This module contains tests for:
# - SessionService token resolution
# - EntityService ownership checks and column updates
# - StorageService path building and uploads
# - ImageService pipeline ordering
#
# Tests use the in-memory Supabase fake from conftest.py.
# =============================================================================

from unittest.mock import patch

import pytest

from app.config import Settings
from app.exceptions import (
    EntityUpdateError,
    FileTooLargeError,
    InvalidBucketTypeError,
    InvalidFileTypeError,
    InvalidImageKindError,
    NotAuthorizedError,
    SessionInvalidError,
    SessionMissingError,
    StorageUploadError,
)
from core.models import BucketType, ImageKind, SessionUser
from core.services import EntityService, ImageService, SessionService, StorageService


@pytest.fixture
def settings():
    return Settings(
        SUPABASE_URL="https://test-project.supabase.co",
        SUPABASE_SERVICE_KEY="test-service-key",
    )


@pytest.fixture
def service(settings, fake_supabase):
    return ImageService(settings)


# =============================================================================
# SessionService Tests
# =============================================================================

class TestSessionService:

    def test_resolves_user(self, fake_supabase):
        user = SessionService.resolve_user("token-u1")

        assert user == SessionUser(id="u1")

    @pytest.mark.parametrize("token", [None, "", "   "])
    def test_missing_token(self, fake_supabase, token):
        with pytest.raises(SessionMissingError):
            SessionService.resolve_user(token)

        assert fake_supabase.rpc_calls == []

    def test_unknown_token(self, fake_supabase):
        with pytest.raises(SessionInvalidError):
            SessionService.resolve_user("expired")

    def test_rpc_error(self, fake_supabase):
        fake_supabase.rpc_error = "connection reset"

        with pytest.raises(SessionInvalidError):
            SessionService.resolve_user("token-u1")


# =============================================================================
# EntityService Tests
# =============================================================================

class TestEntityService:

    def test_owner_passes(self, fake_supabase):
        row = EntityService.verify_owner(BucketType.COMMUNITIES, "C1", "u1")

        assert row["created_by"] == "u1"

    def test_business_owner_field(self, fake_supabase):
        row = EntityService.verify_owner(BucketType.BUSINESSES, "B1", "u1")

        assert row["owner_id"] == "u1"

    @pytest.mark.parametrize(
        "bucket, entity_id",
        [
            (BucketType.COMMUNITIES, "C2"),
            (BucketType.COMMUNITIES, "missing"),
            (BucketType.BUSINESSES, "C1"),
        ],
    )
    def test_denied(self, fake_supabase, bucket, entity_id):
        with pytest.raises(NotAuthorizedError) as exc_info:
            EntityService.verify_owner(bucket, entity_id, "u1")

        assert exc_info.value.status_code == 403

    def test_update_sets_column_and_timestamp(self, fake_supabase):
        values = EntityService.update_image_url(
            BucketType.BUSINESSES, "B1", ImageKind.LOGO, "https://cdn.test/B1/logo.png"
        )

        row = fake_supabase.row("businesses", "B1")
        assert row["logo_url"] == "https://cdn.test/B1/logo.png"
        assert row["updated_at"] == values["updated_at"]

    def test_update_failure(self, fake_supabase):
        fake_supabase.update_error = "permission denied for table businesses"

        with pytest.raises(EntityUpdateError) as exc_info:
            EntityService.update_image_url(
                BucketType.BUSINESSES, "B1", ImageKind.LOGO, "https://cdn.test/x.png"
            )

        assert exc_info.value.message == "permission denied for table businesses"


# =============================================================================
# StorageService Tests
# =============================================================================

class TestStorageService:

    def test_build_path(self):
        assert StorageService.build_image_path("C1", ImageKind.COVER, "photo.png") == "C1/cover.png"

    def test_build_path_default_extension(self):
        assert StorageService.build_image_path("B1", ImageKind.LOGO, "logo") == "B1/logo.jpg"

    def test_build_path_from_bare_extension(self):
        assert StorageService.build_image_path("C1", ImageKind.COVER, ".png") == "C1/cover.png"

    def test_build_path_is_deterministic(self):
        first = StorageService.build_image_path("C1", ImageKind.COVER, "a.png")
        second = StorageService.build_image_path("C1", ImageKind.COVER, "b.png")

        assert first == second

    def test_upload_uses_bucket_and_upsert(self, fake_supabase):
        path = StorageService.upload_image(BucketType.BUSINESSES, "B1/logo.gif", b"GIF89a", "image/gif")

        assert path == "B1/logo.gif"
        stored = fake_supabase.objects[("businesses", "B1/logo.gif")]
        assert stored["options"] == {"content-type": "image/gif", "upsert": "true"}

    def test_upload_failure(self, fake_supabase):
        fake_supabase.storage_error = "The resource already exists"

        with pytest.raises(StorageUploadError) as exc_info:
            StorageService.upload_image(BucketType.COMMUNITIES, "C1/cover.png", b"", "image/png")

        assert exc_info.value.message == "The resource already exists"


# =============================================================================
# ImageService Tests
# =============================================================================

class TestImageService:

    def upload(self, service, **overrides):
        kwargs = {
            "user": SessionUser(id="u1"),
            "bucket_type": "communities",
            "entity_id": "C1",
            "image_type": "cover",
            "filename": "photo.png",
            "content": b"\x89PNG",
            "content_type": "image/png",
        }
        kwargs.update(overrides)
        return service.upload_image(**kwargs)

    def test_happy_path(self, service, fake_supabase):
        result = self.upload(service)

        assert result.storage_path == "C1/cover.png"
        assert result.column == "cover_image_url"
        assert fake_supabase.row("communities", "C1")["cover_image_url"] == result.image_url

    def test_bucket_checked_before_file(self, service):
        with pytest.raises(InvalidBucketTypeError):
            self.upload(service, bucket_type="avatars", content_type="text/plain")

    def test_unknown_image_kind(self, service):
        with pytest.raises(InvalidImageKindError):
            self.upload(service, image_type="avatar")

    def test_size_checked_before_type(self, service, settings):
        with pytest.raises(FileTooLargeError):
            self.upload(
                service,
                content=b"\x00" * (settings.max_image_size_bytes + 1),
                content_type="text/plain",
            )

    def test_content_type_parameters_ignored(self, service, fake_supabase):
        self.upload(service, content_type="image/PNG; charset=binary")

        stored = fake_supabase.objects[("communities", "C1/cover.png")]
        assert stored["options"]["content-type"] == "image/png"

    def test_missing_content_type(self, service):
        with pytest.raises(InvalidFileTypeError):
            self.upload(service, content_type=None)

    def test_configured_limit(self, fake_supabase):
        small = ImageService(Settings(
            SUPABASE_URL="https://test-project.supabase.co",
            SUPABASE_SERVICE_KEY="test-service-key",
            MAX_IMAGE_SIZE_MB=1,
        ))

        with pytest.raises(FileTooLargeError):
            self.upload(small, content=b"\x00" * (1024 * 1024 + 1))

    def test_denied_before_storage(self, service, fake_supabase):
        with patch.object(StorageService, "upload_image") as upload:
            with pytest.raises(NotAuthorizedError):
                self.upload(service, entity_id="C2")

        upload.assert_not_called()

    def test_storage_failure_stops_pipeline(self, service, fake_supabase):
        fake_supabase.storage_error = "Payload too large"

        with pytest.raises(StorageUploadError):
            self.upload(service)

        assert fake_supabase.updates == []

"""Unit tests for the S3-backed image store."""

import re
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from restaurant_site_service.exceptions import ValidationError
from restaurant_site_service.repositories.image_store import ImageStore, generate_upload_key


@pytest.mark.unit
class TestGenerateUploadKey:
    """Test suite for generate_upload_key."""

    def test_key_format(self) -> None:
        key, content_type = generate_upload_key("Foto Pizza.PNG")

        assert re.fullmatch(r"gal_\d+_[0-9a-f]{12}\.png", key)
        assert content_type == "image/png"

    def test_keys_are_unique(self) -> None:
        first, _ = generate_upload_key("a.jpg")
        second, _ = generate_upload_key("a.jpg")

        assert first != second

    @pytest.mark.parametrize(
        ("filename", "extension", "content_type"),
        [
            ("a.jpg", "jpg", "image/jpeg"),
            ("a.jpeg", "jpeg", "image/jpeg"),
            ("a.webp", "webp", "image/webp"),
            ("no_extension", "jpg", "image/jpeg"),
            (None, "jpg", "image/jpeg"),
        ],
    )
    def test_content_types(self, filename: str | None, extension: str, content_type: str) -> None:
        key, result_type = generate_upload_key(filename)

        assert key.endswith(f".{extension}")
        assert result_type == content_type

    def test_rejects_other_extensions(self) -> None:
        with pytest.raises(ValidationError, match="Only jpg/jpeg/png/webp allowed"):
            generate_upload_key("menu.pdf")


@pytest.mark.unit
class TestImageStore:
    """Test suite for ImageStore."""

    @pytest.fixture
    def mock_s3(self) -> MagicMock:
        return MagicMock()

    @pytest.fixture
    def store(self, mock_s3: MagicMock) -> ImageStore:
        return ImageStore(s3_client=mock_s3, bucket_name="site-images")

    def test_put_object(self, store: ImageStore, mock_s3: MagicMock) -> None:
        store.put("gal_1_abc.png", b"\x89PNG", "image/png")

        mock_s3.put_object.assert_called_once_with(
            Bucket="site-images",
            Key="gal_1_abc.png",
            Body=b"\x89PNG",
            ContentType="image/png",
        )

    def test_get_existing_object(self, store: ImageStore, mock_s3: MagicMock) -> None:
        body = MagicMock()
        body.read.return_value = b"jpeg-bytes"
        mock_s3.get_object.return_value = {
            "Body": body,
            "ContentType": "image/jpeg",
            "ETag": '"abc123"',
        }

        image = store.get("gal_1_abc.jpg")

        assert image is not None
        assert image.body == b"jpeg-bytes"
        assert image.content_type == "image/jpeg"
        assert image.etag == '"abc123"'
        mock_s3.get_object.assert_called_once_with(Bucket="site-images", Key="gal_1_abc.jpg")

    def test_get_defaults_content_type(self, store: ImageStore, mock_s3: MagicMock) -> None:
        body = MagicMock()
        body.read.return_value = b"bytes"
        mock_s3.get_object.return_value = {"Body": body}

        image = store.get("legacy")

        assert image is not None
        assert image.content_type == "application/octet-stream"
        assert image.etag == ""

    def test_get_missing_key_returns_none(self, store: ImageStore, mock_s3: MagicMock) -> None:
        mock_s3.get_object.side_effect = ClientError(
            {"Error": {"Code": "NoSuchKey", "Message": "The specified key does not exist."}},
            "GetObject",
        )

        assert store.get("missing.jpg") is None

    def test_get_other_errors_propagate(self, store: ImageStore, mock_s3: MagicMock) -> None:
        mock_s3.get_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
            "GetObject",
        )

        with pytest.raises(ClientError):
            store.get("secret.jpg")

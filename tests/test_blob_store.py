import boto3
import pytest
from botocore.exceptions import EndpointConnectionError
from botocore.stub import Stubber

from app.core.blob_store import S3BlobStore
from app.core.config import Settings
from app.core.exceptions import StoreFailure
from app.core.startup import ensure_blob_container


def make_settings(**overrides):
    values = {
        "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
        "S3_BUCKET_NAME": "vehicle-images",
        "AWS_REGION": "us-east-1",
        "S3_VEHICLE_IMAGE_PREFIX": "veiculos",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


def test_object_url_defaults_to_the_bucket_endpoint():
    store = S3BlobStore(make_settings())
    assert store.object_url("veiculos/a.png") == "https://vehicle-images.s3.us-east-1.amazonaws.com/veiculos/a.png"


def test_object_url_with_custom_endpoint_and_public_base():
    store = S3BlobStore(make_settings(S3_ENDPOINT_URL="http://localhost:9000/"))
    assert store.object_url("veiculos/a.png") == "http://localhost:9000/vehicle-images/veiculos/a.png"

    store = S3BlobStore(make_settings(S3_PUBLIC_BASE_URL="https://cdn.example.com/"))
    assert store.object_url("veiculos/a.png") == "https://cdn.example.com/veiculos/a.png"


def test_object_key_without_prefix():
    store = S3BlobStore(make_settings(S3_VEHICLE_IMAGE_PREFIX=""))
    assert store.object_key("a.png") == "a.png"


def test_put_uploads_and_returns_url(s3_client):
    store = S3BlobStore(make_settings(), client=s3_client)
    with Stubber(s3_client) as stubber:
        stubber.add_response(
            "put_object",
            {},
            {
                "Bucket": "vehicle-images",
                "Key": "veiculos/corolla.png",
                "Body": b"png-bytes",
                "ContentType": "image/png",
                "CacheControl": "max-age=31536000",
            },
        )
        url = store.put("corolla.png", b"png-bytes", "image/png")
        stubber.assert_no_pending_responses()

    assert url == "https://vehicle-images.s3.us-east-1.amazonaws.com/veiculos/corolla.png"


def test_put_failure_is_a_store_failure(s3_client):
    store = S3BlobStore(make_settings(), client=s3_client)
    with Stubber(s3_client) as stubber:
        stubber.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)
        with pytest.raises(StoreFailure):
            store.put("corolla.png", b"png-bytes", "image/png")


def test_put_without_bucket_is_a_store_failure():
    store = S3BlobStore(make_settings(S3_BUCKET_NAME=""))
    assert store.enabled is False
    with pytest.raises(StoreFailure):
        store.put("corolla.png", b"png-bytes")


async def test_upload_runs_put_in_a_thread(s3_client):
    store = S3BlobStore(make_settings(S3_VEHICLE_IMAGE_PREFIX=""), client=s3_client)
    with Stubber(s3_client) as stubber:
        stubber.add_response("put_object", {})
        url = await store.upload("a.png", b"x", "image/png")

    assert url.endswith("/a.png")


def test_ensure_bucket_creates_missing_bucket(s3_client):
    store = S3BlobStore(make_settings(), client=s3_client)
    with Stubber(s3_client) as stubber:
        stubber.add_client_error("head_bucket", service_error_code="404", http_status_code=404)
        stubber.add_response("create_bucket", {}, {"Bucket": "vehicle-images"})
        store.ensure_bucket()
        stubber.assert_no_pending_responses()


def test_ensure_bucket_keeps_existing_bucket(s3_client):
    store = S3BlobStore(make_settings(), client=s3_client)
    with Stubber(s3_client) as stubber:
        stubber.add_response("head_bucket", {}, {"Bucket": "vehicle-images"})
        store.ensure_bucket()
        stubber.assert_no_pending_responses()


class UnreachableS3:
    def head_bucket(self, **kwargs):
        raise EndpointConnectionError(endpoint_url="http://s3.invalid")

    def create_bucket(self, **kwargs):
        raise AssertionError("create_bucket must not be called")


def test_ensure_bucket_unreachable_endpoint_is_a_store_failure():
    store = S3BlobStore(make_settings(), client=UnreachableS3())
    with pytest.raises(StoreFailure) as exc_info:
        store.ensure_bucket()
    assert "http://s3.invalid" in exc_info.value.message


async def test_bucket_provisioning_failure_does_not_raise(caplog):
    store = S3BlobStore(make_settings(), client=UnreachableS3())

    await ensure_blob_container(store)

    assert "Error creating bucket vehicle-images" in caplog.text

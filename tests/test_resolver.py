from unittest.mock import Mock

import pytest

from app.services.errors import InvalidRequest, ProcessingFailure, SourceNotFound, StorageFailure
from app.services.resolver import VariantResolver
from app.services.storage import StorageBackend


@pytest.fixture
def resolver(memory_storage):
    return VariantResolver(memory_storage)


@pytest.mark.parametrize("container_id,variant_id", [("", "cat.webp"), ("bucket", ""), ("", "")])
def test_missing_identifiers_rejected_before_storage(container_id, variant_id):
    storage = Mock(spec=StorageBackend)
    with pytest.raises(InvalidRequest):
        VariantResolver(storage).resolve(container_id, variant_id)
    storage.exists.assert_not_called()
    storage.read.assert_not_called()


def test_existing_variant_returned_unchanged(resolver, memory_storage):
    memory_storage.write("bucket", "cat_w100_h100.webp", b"cached-bytes", "image/webp")

    resolved = resolver.resolve("bucket", "cat_w100_h100.webp")

    assert resolved.content == b"cached-bytes"
    assert resolved.is_new is False


def test_existing_undimensioned_image_not_reprocessed(resolver, memory_storage, png_image):
    memory_storage.write("bucket", "cat.png", png_image, "image/png")

    resolved = resolver.resolve("bucket", "cat.png")

    assert resolved.content == png_image
    assert resolved.is_new is False


def test_missing_variant_derived_from_base(resolver, memory_storage, png_image, image_info):
    memory_storage.write("bucket", "albums/cat.webp", png_image, "image/png")

    resolved = resolver.resolve("bucket", "albums/cat_h100_w50.webp")

    assert resolved.is_new is True
    assert image_info(resolved.content) == ("WEBP", (50, 100))
    # Resolution never writes; that is the caller's job
    assert not memory_storage.exists("bucket", "albums/cat_h100_w50.webp")


def test_missing_variant_without_tokens_is_source_not_found():
    storage = Mock(spec=StorageBackend)
    storage.exists.return_value = False

    with pytest.raises(SourceNotFound):
        VariantResolver(storage).resolve("bucket", "cat.webp")
    storage.read.assert_not_called()


def test_missing_base_is_storage_failure(resolver):
    with pytest.raises(StorageFailure):
        resolver.resolve("bucket", "cat_w100.webp")


def test_existence_check_failure_propagates():
    storage = Mock(spec=StorageBackend)
    storage.exists.side_effect = StorageFailure("exists", "bucket", "cat_w1.webp", "timeout")

    with pytest.raises(StorageFailure):
        VariantResolver(storage).resolve("bucket", "cat_w1.webp")
    storage.read.assert_not_called()


def test_single_existence_check_per_request(png_image):
    storage = Mock(spec=StorageBackend)
    storage.exists.return_value = False
    storage.read.return_value = png_image

    VariantResolver(storage).resolve("bucket", "cat_w10.webp")

    storage.exists.assert_called_once_with("bucket", "cat_w10.webp")
    storage.read.assert_called_once_with("bucket", "cat.webp")


def test_corrupt_base_is_processing_failure(resolver, memory_storage):
    memory_storage.write("bucket", "cat.webp", b"garbage", "image/webp")

    with pytest.raises(ProcessingFailure):
        resolver.resolve("bucket", "cat_w100.webp")

import io

import pytest

from core.infrastructure.adapters.s3_adapter import S3Adapter


class TestS3Adapter:
    def test_missing_bucket_name(self, monkeypatch) -> None:
        monkeypatch.delenv("CONTENT_S3_BUCKET_NAME", raising=False)

        with pytest.raises(RuntimeError, match="CONTENT_S3_BUCKET_NAME"):
            S3Adapter()

    def test_bucket_from_environment(self, s3_bucket) -> None:
        assert S3Adapter().bucket == s3_bucket

    def test_upload_fileobj(self, s3_client, s3_bucket, sample_jpeg_binary) -> None:
        adapter = S3Adapter()

        adapter.upload_fileobj(
            key="Pictures/ObscuraSim/ent_1.jpg",
            fileobj=io.BytesIO(sample_jpeg_binary),
            content_type="image/jpeg",
            metadata={"entry_id": "ent_1"},
        )

        obj = s3_client.get_object(Bucket=s3_bucket, Key="Pictures/ObscuraSim/ent_1.jpg")
        assert obj["Body"].read() == sample_jpeg_binary
        assert obj["ContentType"] == "image/jpeg"
        assert obj["Metadata"] == {"entry_id": "ent_1"}

    def test_delete_object(self, s3_client, s3_bucket, s3_object_keys) -> None:
        s3_client.put_object(Bucket=s3_bucket, Key="k.jpg", Body=b"x")

        S3Adapter().delete_object(key="k.jpg")

        assert s3_object_keys() == []

"""
Unit tests for S3Adapter storage implementation.

Tests S3 listing, object read/write/delete, ACL grants, per-operation
client lifecycle and error propagation.
"""

import io
from datetime import datetime

import pytest
from botocore.exceptions import ClientError

from releasehub.storage.s3_adapter import S3Adapter, ALL_USERS_URI


OWNER = {"DisplayName": "releases", "ID": "abc123"}


def _client_error(code, operation="ListObjectsV2"):
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


@pytest.fixture
def adapter(s3_credentials, mock_s3_client):
    return S3Adapter(s3_credentials, bucket="releases", base_url="https://s3.eu-west-3.amazonaws.com")


class TestS3AdapterInitialization:
    """Tests for S3Adapter initialization and credential validation"""

    def test_init_with_valid_credentials(self, s3_credentials):
        adapter = S3Adapter(s3_credentials, bucket="releases")

        assert adapter.bucket == "releases"
        assert adapter.region == "eu-west-3"

    def test_default_region(self):
        adapter = S3Adapter(
            {"aws_access_key_id": "AKIA", "aws_secret_access_key": "secret"},
            bucket="releases"
        )

        assert adapter.region == S3Adapter.DEFAULT_REGION

    def test_init_missing_access_key_id(self):
        with pytest.raises(ValueError) as exc_info:
            S3Adapter({"aws_secret_access_key": "secret"}, bucket="releases")

        assert "aws_access_key_id" in str(exc_info.value)

    def test_init_missing_secret_access_key(self):
        with pytest.raises(ValueError) as exc_info:
            S3Adapter({"aws_access_key_id": "AKIA"}, bucket="releases")

        assert "aws_secret_access_key" in str(exc_info.value)

    def test_init_missing_bucket(self, s3_credentials):
        with pytest.raises(ValueError, match="bucket"):
            S3Adapter(s3_credentials, bucket="")


class TestS3AdapterListing:
    """Tests for list_files_with_metadata()."""

    def test_lists_objects_with_metadata(self, adapter, mock_s3_client):
        files = adapter.list_files_with_metadata()

        assert [(f.name, f.size) for f in files] == [("app-1.2.0.deb", 1024), ("app-1.2.0.msi", 2048)]
        assert files[0].last_modified == datetime(2024, 1, 1, 10, 0)
        mock_s3_client.list_objects_v2.assert_called_once_with(Bucket="releases")

    def test_follows_pagination(self, adapter, mock_s3_client):
        mock_s3_client.list_objects_v2.side_effect = [
            {
                "Contents": [{"Key": "app-1.0.0.deb", "Size": 1, "LastModified": datetime(2024, 1, 1)}],
                "IsTruncated": True,
                "NextContinuationToken": "token-2",
            },
            {
                "Contents": [{"Key": "app-1.1.0.deb", "Size": 2, "LastModified": datetime(2024, 1, 2)}],
                "IsTruncated": False,
            },
        ]

        files = adapter.list_files_with_metadata()

        assert [f.name for f in files] == ["app-1.0.0.deb", "app-1.1.0.deb"]
        second_call = mock_s3_client.list_objects_v2.call_args_list[1]
        assert second_call.kwargs == {"Bucket": "releases", "ContinuationToken": "token-2"}

    def test_skips_directory_markers(self, adapter, mock_s3_client):
        mock_s3_client.list_objects_v2.return_value = {
            "Contents": [
                {"Key": "old/", "Size": 0, "LastModified": datetime(2024, 1, 1)},
                {"Key": "app-1.0.0.deb", "Size": 5, "LastModified": datetime(2024, 1, 1)},
            ],
            "IsTruncated": False,
        }

        assert [f.name for f in adapter.list_files_with_metadata()] == ["app-1.0.0.deb"]

    def test_empty_bucket(self, adapter, mock_s3_client):
        mock_s3_client.list_objects_v2.return_value = {"IsTruncated": False}

        assert adapter.list_files_with_metadata() == []

    def test_error_propagates_and_client_closed(self, adapter, mock_s3_client):
        mock_s3_client.list_objects_v2.side_effect = _client_error("AccessDenied")

        with pytest.raises(ClientError):
            adapter.list_files_with_metadata()

        mock_s3_client.close.assert_called_once()

    def test_no_retry_on_transient_error(self, adapter, mock_s3_client):
        mock_s3_client.list_objects_v2.side_effect = _client_error("SlowDown")

        with pytest.raises(ClientError):
            adapter.list_files_with_metadata()

        assert mock_s3_client.list_objects_v2.call_count == 1


class TestS3AdapterObjects:
    """Tests for open_stream(), put(), delete() and set_public_read()."""

    def test_open_stream_reads_body_before_closing_client(self, adapter, mock_s3_client):
        body = io.BytesIO(b"binary content")
        mock_s3_client.get_object.return_value = {"Body": body}

        stream = adapter.open_stream("app-1.2.0.deb")

        assert stream.read() == b"binary content"
        assert body.closed
        mock_s3_client.get_object.assert_called_once_with(Bucket="releases", Key="app-1.2.0.deb")
        mock_s3_client.close.assert_called_once()

    def test_open_stream_missing_key(self, adapter, mock_s3_client):
        mock_s3_client.get_object.side_effect = _client_error("NoSuchKey", "GetObject")

        with pytest.raises(ClientError):
            adapter.open_stream("app-9.9.9.deb")

    def test_put(self, adapter, mock_s3_client):
        adapter.put("app-2.0.0.deb", b"abc")

        mock_s3_client.put_object.assert_called_once_with(
            Bucket="releases", Key="app-2.0.0.deb", Body=b"abc", ContentLength=3
        )
        mock_s3_client.close.assert_called_once()

    def test_delete(self, adapter, mock_s3_client):
        adapter.delete("app-2.0.0.deb")

        mock_s3_client.delete_object.assert_called_once_with(Bucket="releases", Key="app-2.0.0.deb")

    def test_set_public_read_appends_all_users_grant(self, adapter, mock_s3_client):
        owner_grant = {
            "Grantee": {"Type": "CanonicalUser", "ID": "abc123"},
            "Permission": "FULL_CONTROL",
        }
        mock_s3_client.get_object_acl.return_value = {"Owner": OWNER, "Grants": [owner_grant]}

        adapter.set_public_read("app-2.0.0.deb")

        mock_s3_client.put_object_acl.assert_called_once_with(
            Bucket="releases",
            Key="app-2.0.0.deb",
            AccessControlPolicy={
                "Grants": [
                    owner_grant,
                    {"Grantee": {"Type": "Group", "URI": ALL_USERS_URI}, "Permission": "READ"},
                ],
                "Owner": OWNER,
            },
        )

    def test_set_public_read_does_not_duplicate_grant(self, adapter, mock_s3_client):
        public_grant = {"Grantee": {"Type": "Group", "URI": ALL_USERS_URI}, "Permission": "READ"}
        mock_s3_client.get_object_acl.return_value = {"Owner": OWNER, "Grants": [public_grant]}

        adapter.set_public_read("app-2.0.0.deb")

        policy = mock_s3_client.put_object_acl.call_args.kwargs["AccessControlPolicy"]
        assert policy["Grants"] == [public_grant]

    def test_public_location(self, adapter):
        assert adapter.public_location("app-1.2.0.deb") == (
            "https://s3.eu-west-3.amazonaws.com/releases/app-1.2.0.deb"
        )

    def test_client_created_per_operation(self, adapter, mock_s3_client):
        import boto3

        adapter.delete("a-1.0.0.deb")
        adapter.delete("b-1.0.0.deb")

        assert boto3.client.call_count == 2
        assert mock_s3_client.close.call_count == 2


class TestS3AdapterConnection:
    """Tests for test_connection()."""

    def test_success(self, adapter, mock_s3_client):
        success, message = adapter.test_connection()

        assert success is True
        assert "releases" in message
        mock_s3_client.head_bucket.assert_called_once_with(Bucket="releases")

    def test_access_denied(self, adapter, mock_s3_client):
        mock_s3_client.head_bucket.side_effect = _client_error("403", "HeadBucket")

        success, message = adapter.test_connection()

        assert success is False
        assert "Access denied" in message

    def test_missing_bucket(self, adapter, mock_s3_client):
        mock_s3_client.head_bucket.side_effect = _client_error("404", "HeadBucket")

        success, message = adapter.test_connection()

        assert success is False
        assert "does not exist" in message

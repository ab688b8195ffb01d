import pytest

from shapegen.codegen.core.naming import (
    capitalize_first,
    deserializer_name,
    error_type_name,
    escape_doc,
    generate_field_name,
    method_name,
    mutate_type_name,
    serializer_name,
    to_snake_case,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("QueueUrl", "queue_url"),
        ("SSEKMSKeyId", "ssekms_key_id"),
        ("DBInstanceIdentifier", "db_instance_identifier"),
        ("x-amz-meta", "x_amz_meta"),
        ("already_snake", "already_snake"),
        ("3Things", "_3_things"),
    ],
)
def test_to_snake_case(name, expected):
    assert to_snake_case(name) == expected


def test_to_snake_case_of_nothing_usable():
    assert to_snake_case("--") == "field"


def test_capitalize_first():
    assert capitalize_first("bucket") == "Bucket"
    assert capitalize_first("eTag") == "ETag"
    assert capitalize_first("") == ""


# ---------------------------------------------------------------------------
# Field names
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("name", ["type", "Type", "from", "lambda", "str", "bytes"])
def test_reserved_field_names_are_escaped(name):
    escaped = generate_field_name(name)
    assert escaped.endswith("_")
    assert escaped == f"{to_snake_case(name)}_"


def test_regular_field_names_are_snake_case():
    assert generate_field_name("MaxResults") == "max_results"


def test_method_name():
    assert method_name("ListQueues") == "list_queues"
    assert method_name("GetBucketACL") == "get_bucket_acl"


# ---------------------------------------------------------------------------
# Type names
# ---------------------------------------------------------------------------


def test_mutate_type_name_capitalizes_and_drops_underscores():
    assert mutate_type_name("string") == "String"
    assert mutate_type_name("Cache_Behavior") == "CacheBehavior"


def test_mutate_type_name_applies_collision_table():
    assert mutate_type_name("Error") == "S3Error"
    assert mutate_type_name("CancelSpotFleetRequests") == "EC2CancelSpotFleetRequests"


@pytest.mark.parametrize("name", ["QueueUrl", "ListQueuesRequest", "Blob", "TagSet"])
def test_mutate_type_name_keeps_canonical_names(name):
    assert mutate_type_name(name) == name


@pytest.mark.parametrize(
    "name", ["queueUrl", "Cache_Behavior", "Error", "CancelSpotFleetRequests", "String"]
)
def test_mutate_type_name_is_idempotent(name):
    once = mutate_type_name(name)
    assert mutate_type_name(once) == once


def test_error_type_name():
    assert error_type_name("QueueDoesNotExist") == "QueueDoesNotExistError"


def test_codec_function_names():
    assert serializer_name("ListQueuesRequest") == "serialize_list_queues_request"
    assert deserializer_name("TagSet") == "deserialize_tag_set"


def test_escape_doc():
    assert escape_doc('Say "hi" \\o/') == 'Say \\"hi\\" \\\\o/'

import dataclasses
import json
import typing as t

import pytest

from shapegen.runtime import serialization as serde


@serde.deserializable
@dataclasses.dataclass(kw_only=True)
class Tag:
    key: str = serde.wire("Key")
    value: t.Optional[str] = serde.wire("Value", default=None)


@serde.serializable
@serde.deserializable
@dataclasses.dataclass(kw_only=True)
class Item:
    name: str = serde.wire("Name")
    size: t.Optional[int] = serde.wire("Size", default=None)
    data: t.Optional[bytes] = serde.wire("Data", default=None, blob=True)
    enabled: t.Optional[bool] = serde.wire("Enabled", default=None, skip_none=True)
    tags: t.Optional[t.List[str]] = serde.wire("Tags", default=None)
    labels: t.Optional[t.Dict[str, int]] = serde.wire("Labels", default=None)


@serde.deserializable
@dataclasses.dataclass(kw_only=True)
class Listing:
    items: t.List[Tag] = serde.wire("Items")
    total: t.Optional[float] = serde.wire("Total", default=None)


@dataclasses.dataclass
class Plain:
    name: str


def test_to_json_uses_wire_names():
    body = serde.to_json(Item(name="a", size=3, tags=["x"], labels={"l": 1}))
    assert json.loads(body) == {
        "Name": "a",
        "Size": 3,
        "Data": None,
        "Tags": ["x"],
        "Labels": {"l": 1},
    }


def test_to_json_encodes_blobs_and_skips_none_booleans():
    data = json.loads(serde.to_json(Item(name="a", data=b"hi", enabled=False)))
    assert data["Data"] == "aGk="
    assert data["Enabled"] is False
    assert "Enabled" not in json.loads(serde.to_json(Item(name="a")))


def test_to_json_exclude():
    data = json.loads(serde.to_json(Item(name="a", size=1), exclude=("Name",)))
    assert "Name" not in data
    assert data["Size"] == 1


def test_unmarked_records_are_rejected():
    with pytest.raises(TypeError, match="not serializable"):
        serde.to_json(Plain(name="a"))
    with pytest.raises(TypeError, match="not serializable"):
        serde.to_json(Tag(key="k"))


def test_from_json_nested():
    body = b'{"Items": [{"Key": "a", "Value": "1"}, {"Key": "b"}], "Total": 2}'
    listing = serde.from_json(Listing, body)
    assert listing == Listing(items=[Tag(key="a", value="1"), Tag(key="b")], total=2.0)
    assert isinstance(listing.total, float)


def test_from_json_scalars():
    body = json.dumps(
        {"Name": "a", "Size": "7", "Data": "aGk=", "Enabled": "true", "Labels": {"x": 2}}
    ).encode()
    item = serde.from_json(Item, body)
    assert item.size == 7
    assert item.data == b"hi"
    assert item.enabled is True
    assert item.labels == {"x": 2}


def test_from_json_extra_values_override_body():
    item = serde.from_json(Item, b'{"Name": "a"}', extra={"Size": 9, "Tags": None})
    assert item.size == 9
    assert item.tags is None


def test_empty_body_parses_as_object():
    assert serde.from_json(Tag, b"  ", extra={"Key": "k"}) == Tag(key="k")


def test_missing_required_member():
    with pytest.raises(serde.DeserializationError, match="'Key'"):
        serde.from_json(Tag, b"{}")


def test_invalid_json():
    with pytest.raises(serde.DeserializationError, match="Invalid JSON"):
        serde.from_json(Tag, b"{oops")


def test_expected_object():
    with pytest.raises(serde.DeserializationError, match="Expected an object"):
        serde.from_json(Tag, b"[1, 2]")


@pytest.mark.parametrize(
    "value, expected",
    [(True, "true"), (False, "false"), (b"hi", "aGk="), (3.0, "3"), (2.5, "2.5"), (7, "7")],
)
def test_format_scalar(value, expected):
    assert serde.format_scalar(value) == expected

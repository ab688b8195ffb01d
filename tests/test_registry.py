import pytest

from shapegen.codegen.core.error_types import JsonErrorTypes, XmlErrorTypes
from shapegen.codegen.core.generator import UnsupportedProtocolError
from shapegen.codegen.protocols import (
    JsonGenerator,
    QueryGenerator,
    RestJsonGenerator,
    RestXmlGenerator,
)
from shapegen.codegen.registry import (
    ProtocolRegistry,
    RegistryError,
    get_protocol_pair,
    create_registry,
    is_protocol_supported,
    list_protocols,
)


@pytest.mark.parametrize(
    "protocol, generator_class, error_class",
    [
        ("json", JsonGenerator, JsonErrorTypes),
        ("query", QueryGenerator, XmlErrorTypes),
        ("ec2", QueryGenerator, XmlErrorTypes),
        ("rest-json", RestJsonGenerator, JsonErrorTypes),
        ("rest-xml", RestXmlGenerator, XmlErrorTypes),
    ],
)
def test_builtin_pairs(protocol, generator_class, error_class):
    pair = get_protocol_pair(protocol)
    assert pair.protocol is generator_class
    assert pair.error_types is error_class


def test_ec2_is_an_alias_of_query():
    assert get_protocol_pair("ec2") == get_protocol_pair("query")
    assert create_registry().get_aliases("query") == ["ec2"]


@pytest.mark.parametrize("protocol", ["JSON", "EC2", "Rest-Json"])
def test_lookup_is_exact(protocol):
    with pytest.raises(UnsupportedProtocolError):
        get_protocol_pair(protocol)
    assert not is_protocol_supported(protocol)


def test_registries_are_independent():
    registry = create_registry()
    registry.unregister("json")
    assert not registry.is_supported("json")
    assert create_registry().is_supported("json")
    assert get_protocol_pair("json").protocol is JsonGenerator


def test_unknown_protocol():
    with pytest.raises(UnsupportedProtocolError, match="smithy-rpc-v2-cbor"):
        get_protocol_pair("smithy-rpc-v2-cbor")
    assert not is_protocol_supported("smithy-rpc-v2-cbor")


def test_list_protocols_includes_aliases():
    assert list_protocols() == ["ec2", "json", "query", "rest-json", "rest-xml"]


def test_pair_create_shares_config_and_engine():
    generator, error_types = get_protocol_pair("json").create()
    assert error_types.config is generator.config
    assert error_types.template_engine is generator.template_engine


# ---------------------------------------------------------------------------
# Local registries
# ---------------------------------------------------------------------------


def test_register_rejects_wrong_classes():
    registry = ProtocolRegistry()
    with pytest.raises(RegistryError):
        registry.register("json", object, JsonErrorTypes)
    with pytest.raises(RegistryError):
        registry.register("json", JsonGenerator, object)


def test_register_keeps_first_unless_replaced():
    registry = ProtocolRegistry()
    registry.register("json", JsonGenerator, JsonErrorTypes)
    registry.register("json", RestJsonGenerator, JsonErrorTypes)
    assert registry.get_pair("json").protocol is JsonGenerator

    registry.register("json", RestJsonGenerator, JsonErrorTypes, replace=True)
    assert registry.get_pair("json").protocol is RestJsonGenerator


def test_alias_conflicts():
    registry = ProtocolRegistry()
    registry.register("json", JsonGenerator, JsonErrorTypes)
    with pytest.raises(RegistryError, match="conflicts"):
        registry.register("query", QueryGenerator, XmlErrorTypes, aliases=["json"])


def test_unregister_removes_aliases():
    registry = ProtocolRegistry()
    registry.register("query", QueryGenerator, XmlErrorTypes, aliases=["ec2"])
    registry.unregister("query")
    assert not registry.is_supported("ec2")
    assert registry.list_all_names() == []

from shapegen.codegen.core.config import GeneratorConfig
from shapegen.codegen.core.error_types import (
    ErrorTypeGenerator,
    JsonErrorTypes,
    XmlErrorTypes,
)


def test_fallback_names(query_service):
    assert ErrorTypeGenerator.fallback_names(query_service) == [
        "QueueClientHttpDispatchError",
        "QueueClientCredentialsError",
        "QueueClientUnknownError",
    ]


def test_error_variants(rest_json_service):
    (variant,) = JsonErrorTypes().error_variants(rest_json_service)
    assert variant == {
        "name": "NotFoundExceptionError",
        "code": "NotFoundException",
        "documentation": "The widget does not exist.",
    }


def test_error_variant_documentation_can_be_disabled(rest_json_service):
    generator = JsonErrorTypes(GeneratorConfig(add_comments=False))
    (variant,) = generator.error_variants(rest_json_service)
    assert variant["documentation"] is None


def test_generated_error_classes(query_service):
    code = XmlErrorTypes().generate_error_types(query_service)

    assert "class QueueClientError(Exception):" in code
    assert "class QueueDoesNotExistError(QueueClientError):" in code
    assert 'code = "AWS.SimpleQueueService.NonExistentQueue"' in code
    for name in ErrorTypeGenerator.fallback_names(query_service):
        assert f"class {name}(QueueClientError):" in code
    assert '"AWS.SimpleQueueService.NonExistentQueue": QueueDoesNotExistError,' in code


def test_parse_function_depends_on_protocol_family(json_service):
    assert "_errors.parse_json_error(response)" in JsonErrorTypes().generate_error_types(
        json_service
    )
    assert "_errors.parse_xml_error(response)" in XmlErrorTypes().generate_error_types(
        json_service
    )


def test_service_without_exceptions_still_gets_fallbacks(json_service):
    code = JsonErrorTypes().generate_error_types(json_service)
    assert "class ThingServiceClientUnknownError(ThingServiceClientError):" in code
    assert "ERROR_CODES: _t.Dict[str, _t.Type[ThingServiceClientError]] = {\n}" in code

"""Protocol generators: one per wire protocol."""

from .json_generator import JsonGenerator
from .query_generator import QueryGenerator
from .rest_json_generator import RestJsonGenerator
from .rest_xml_generator import RestXmlGenerator

__all__ = ["JsonGenerator", "QueryGenerator", "RestJsonGenerator", "RestXmlGenerator"]

import copy
import importlib.util
import itertools
import sys

import pytest

from shapegen.codegen.core.service import Service
from shapegen.runtime.request import DispatchSignedRequest, HttpResponse

_module_counter = itertools.count()


JSON_SERVICE = {
    "version": "2.0",
    "metadata": {
        "apiVersion": "2020-01-01",
        "endpointPrefix": "things",
        "jsonVersion": "1.1",
        "protocol": "json",
        "serviceFullName": "Thing Service",
        "signatureVersion": "v4",
        "targetPrefix": "ThingService_20200101",
    },
    "operations": {
        "GetThing": {
            "name": "GetThing",
            "http": {"method": "POST", "requestUri": "/"},
            "input": {"shape": "GetThingRequest"},
            "output": {"shape": "GetThingResult"},
            "documentation": "Returns one thing.",
        }
    },
    "shapes": {
        "GetThingRequest": {
            "type": "structure",
            "required": ["id"],
            "members": {
                "id": {"shape": "String"},
                "type": {"shape": "String"},
            },
        },
        "GetThingResult": {
            "type": "structure",
            "required": ["value"],
            "members": {"value": {"shape": "String"}},
        },
        "String": {"type": "string"},
    },
}


QUERY_SERVICE = {
    "metadata": {
        "apiVersion": "2012-11-05",
        "endpointPrefix": "queue",
        "protocol": "query",
        "serviceAbbreviation": "Amazon Queue",
        "serviceFullName": "Amazon Simple Queue Service",
        "signatureVersion": "v4",
        "xmlNamespace": "http://queue.amazonaws.com/doc/2012-11-05/",
    },
    "operations": {
        "ListQueues": {
            "name": "ListQueues",
            "http": {"method": "POST", "requestUri": "/"},
            "input": {"shape": "ListQueuesRequest"},
            "output": {
                "shape": "ListQueuesResult",
                "resultWrapper": "ListQueuesResult",
            },
            "errors": [{"shape": "QueueDoesNotExist"}],
        },
        "PurgeAll": {
            "name": "PurgeAll",
            "http": {"method": "POST", "requestUri": "/"},
        },
    },
    "shapes": {
        "ListQueuesRequest": {
            "type": "structure",
            "members": {
                "QueueNamePrefix": {"shape": "String"},
                "Names": {"shape": "StringList"},
                "Attributes": {"shape": "AttributeMap"},
                "MaxResults": {"shape": "Integer"},
            },
        },
        "ListQueuesResult": {
            "type": "structure",
            "required": ["Count"],
            "members": {
                "QueueUrls": {"shape": "QueueUrlList"},
                "Count": {"shape": "Integer"},
                "Truncated": {"shape": "Boolean"},
            },
        },
        "QueueUrlList": {
            "type": "list",
            "member": {"shape": "String", "locationName": "QueueUrl"},
            "flattened": True,
        },
        "StringList": {"type": "list", "member": {"shape": "String"}},
        "AttributeMap": {
            "type": "map",
            "key": {"shape": "String", "locationName": "Name"},
            "value": {"shape": "String", "locationName": "Value"},
            "flattened": True,
        },
        "QueueDoesNotExist": {
            "type": "structure",
            "members": {},
            "error": {"code": "AWS.SimpleQueueService.NonExistentQueue"},
            "exception": True,
        },
        "Boolean": {"type": "boolean"},
        "Integer": {"type": "integer"},
        "String": {"type": "string"},
    },
}


EC2_SERVICE = {
    "metadata": {
        "apiVersion": "2016-11-15",
        "endpointPrefix": "ec2",
        "protocol": "ec2",
        "serviceAbbreviation": "Amazon EC2",
        "serviceFullName": "Amazon Elastic Compute Cloud",
    },
    "operations": {
        "DescribeHosts": {
            "name": "DescribeHosts",
            "input": {"shape": "DescribeHostsRequest"},
            "output": {"shape": "DescribeHostsResult"},
        },
    },
    "shapes": {
        "DescribeHostsRequest": {
            "type": "structure",
            "members": {
                "HostIds": {"shape": "HostIdList", "locationName": "hostId"},
            },
        },
        "DescribeHostsResult": {
            "type": "structure",
            "members": {
                "Hosts": {"shape": "HostList", "locationName": "hostSet"},
            },
        },
        "HostIdList": {
            "type": "list",
            "member": {"shape": "String", "locationName": "item"},
        },
        "HostList": {
            "type": "list",
            "member": {"shape": "Host", "locationName": "item"},
        },
        "Host": {
            "type": "structure",
            "members": {"HostId": {"shape": "String", "locationName": "hostId"}},
        },
        "String": {"type": "string"},
    },
}


REST_JSON_SERVICE = {
    "metadata": {
        "apiVersion": "2015-07-09",
        "endpointPrefix": "widgets",
        "protocol": "rest-json",
        "serviceFullName": "AWS Widget Store",
        "signingName": "widgetstore",
    },
    "operations": {
        "GetWidget": {
            "name": "GetWidget",
            "http": {"method": "GET", "requestUri": "/widgets/{WidgetId}"},
            "input": {"shape": "GetWidgetRequest"},
            "output": {"shape": "GetWidgetResponse"},
            "errors": [{"shape": "NotFoundException"}],
        },
        "PutWidget": {
            "name": "PutWidget",
            "http": {"method": "PUT", "requestUri": "/widgets/{WidgetId}"},
            "input": {"shape": "PutWidgetRequest"},
        },
    },
    "shapes": {
        "GetWidgetRequest": {
            "type": "structure",
            "required": ["WidgetId"],
            "members": {
                "WidgetId": {
                    "shape": "String",
                    "location": "uri",
                    "locationName": "WidgetId",
                },
                "Verbose": {
                    "shape": "Boolean",
                    "location": "querystring",
                    "locationName": "verbose",
                },
                "RequestToken": {
                    "shape": "String",
                    "location": "header",
                    "locationName": "X-Request-Token",
                },
            },
        },
        "GetWidgetResponse": {
            "type": "structure",
            "members": {
                "Name": {"shape": "String"},
                "Weight": {"shape": "Double"},
                "Created": {"shape": "Timestamp"},
                "ETag": {
                    "shape": "String",
                    "location": "header",
                    "locationName": "ETag",
                },
            },
        },
        "PutWidgetRequest": {
            "type": "structure",
            "required": ["WidgetId"],
            "members": {
                "WidgetId": {
                    "shape": "String",
                    "location": "uri",
                    "locationName": "WidgetId",
                },
                "Name": {"shape": "String"},
                "Data": {"shape": "Blob"},
                "Legacy": {"shape": "String", "deprecated": True},
            },
        },
        "NotFoundException": {
            "type": "structure",
            "members": {"message": {"shape": "String"}},
            "exception": True,
            "documentation": "The widget does not exist.",
        },
        "Blob": {"type": "blob"},
        "Boolean": {"type": "boolean"},
        "Double": {"type": "double"},
        "String": {"type": "string"},
        "Timestamp": {"type": "timestamp"},
    },
}


REST_XML_SERVICE = {
    "metadata": {
        "apiVersion": "2006-03-01",
        "endpointPrefix": "buckets",
        "protocol": "rest-xml",
        "serviceAbbreviation": "Amazon Buckets",
        "serviceFullName": "Amazon Bucket Storage",
    },
    "operations": {
        "GetObject": {
            "name": "GetObject",
            "http": {"method": "GET", "requestUri": "/{Bucket}/{Key+}"},
            "input": {"shape": "GetObjectRequest"},
            "output": {"shape": "GetObjectOutput"},
        },
        "PutTagging": {
            "name": "PutTagging",
            "http": {"method": "PUT", "requestUri": "/{Bucket}?tagging"},
            "input": {"shape": "PutTaggingRequest"},
        },
        "ListTags": {
            "name": "ListTags",
            "http": {"method": "GET", "requestUri": "/{Bucket}?tagging"},
            "input": {"shape": "ListTagsRequest"},
            "output": {"shape": "ListTagsOutput"},
        },
    },
    "shapes": {
        "GetObjectRequest": {
            "type": "structure",
            "required": ["Bucket", "Key"],
            "members": {
                "Bucket": {"shape": "String", "location": "uri", "locationName": "Bucket"},
                "Key": {"shape": "String", "location": "uri", "locationName": "Key"},
            },
        },
        "GetObjectOutput": {
            "type": "structure",
            "members": {
                "Body": {"shape": "Blob"},
                "ContentLength": {
                    "shape": "Long",
                    "location": "header",
                    "locationName": "Content-Length",
                },
                "Metadata": {
                    "shape": "MetadataMap",
                    "location": "headers",
                    "locationName": "x-amz-meta-",
                },
            },
            "payload": "Body",
        },
        "PutTaggingRequest": {
            "type": "structure",
            "required": ["Bucket", "Tagging"],
            "members": {
                "Bucket": {"shape": "String", "location": "uri", "locationName": "Bucket"},
                "Tagging": {"shape": "Tagging", "locationName": "Tagging"},
            },
            "payload": "Tagging",
        },
        "ListTagsRequest": {
            "type": "structure",
            "required": ["Bucket"],
            "members": {
                "Bucket": {"shape": "String", "location": "uri", "locationName": "Bucket"},
            },
        },
        "ListTagsOutput": {
            "type": "structure",
            "required": ["TagSet"],
            "members": {"TagSet": {"shape": "TagSet"}},
        },
        "Tagging": {
            "type": "structure",
            "required": ["TagSet"],
            "members": {"TagSet": {"shape": "TagSet"}},
        },
        "TagSet": {"type": "list", "member": {"shape": "Tag", "locationName": "Tag"}},
        "Tag": {
            "type": "structure",
            "required": ["Key", "Value"],
            "members": {
                "Key": {"shape": "String"},
                "Value": {"shape": "String"},
            },
        },
        "Error": {
            "type": "structure",
            "members": {"Code": {"shape": "String"}, "Message": {"shape": "String"}},
        },
        "MetadataMap": {
            "type": "map",
            "key": {"shape": "String"},
            "value": {"shape": "String"},
        },
        "Blob": {"type": "blob"},
        "Long": {"type": "long"},
        "String": {"type": "string"},
    },
}


@pytest.fixture
def json_service_dict():
    return copy.deepcopy(JSON_SERVICE)


@pytest.fixture
def json_service():
    return Service.from_dict(copy.deepcopy(JSON_SERVICE))


@pytest.fixture
def query_service():
    return Service.from_dict(copy.deepcopy(QUERY_SERVICE))


@pytest.fixture
def ec2_service():
    return Service.from_dict(copy.deepcopy(EC2_SERVICE))


@pytest.fixture
def rest_json_service():
    return Service.from_dict(copy.deepcopy(REST_JSON_SERVICE))


@pytest.fixture
def rest_xml_service():
    return Service.from_dict(copy.deepcopy(REST_XML_SERVICE))


@pytest.fixture
def all_services(json_service, query_service, ec2_service, rest_json_service, rest_xml_service):
    return [json_service, query_service, ec2_service, rest_json_service, rest_xml_service]


@pytest.fixture
def load_module(tmp_path):
    """Import generated source as a real module registered in sys.modules."""
    loaded = []

    def _load(source: str):
        name = f"generated_client_{next(_module_counter)}"
        path = tmp_path / f"{name}.py"
        path.write_text(source, encoding="utf-8")

        spec = importlib.util.spec_from_file_location(name, path)
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        loaded.append(name)
        spec.loader.exec_module(module)
        return module

    yield _load

    for name in loaded:
        sys.modules.pop(name, None)


class FakeDispatcher(DispatchSignedRequest):
    """Returns canned responses and records what was sent."""

    def __init__(self, *responses: HttpResponse, error: Exception = None):
        self.responses = list(responses)
        self.error = error
        self.requests = []
        self.timeouts = []

    def dispatch(self, request, timeout=None):
        self.requests.append(request)
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


@pytest.fixture
def fake_dispatcher():
    return FakeDispatcher

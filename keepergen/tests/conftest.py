"""Unit tests configuration file and descriptor builders."""

import pytest
from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

INDEX_FIELD_NUMBER = 53535


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


def _varint(value):
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _string_field(number, value):
    if isinstance(value, str):
        value = value.encode("utf-8")
    return _varint(number << 3 | 2) + _varint(len(value)) + value


def _options(*raw_fields, deprecated=None):
    """Build MessageOptions holding ``raw_fields`` as unknown fields."""
    options = descriptor_pb2.MessageOptions()
    if deprecated is not None:
        options.deprecated = deprecated
    options.MergeFromString(b"".join(raw_fields))
    return options


def _index_options(index_field):
    return _options(_string_field(INDEX_FIELD_NUMBER, index_field))


def _proto_file(name, messages, package="blog"):
    """Build a FileDescriptorProto with source code info.

    ``messages`` is a list of ``(type_name, options)``; ``options`` may be None.
    Locations are emitted the way protoc does: the file, the package, then
    each message followed by its name.
    """
    proto_file = descriptor_pb2.FileDescriptorProto(name=name, package=package, syntax="proto3")
    proto_file.source_code_info.location.add(path=[])
    proto_file.source_code_info.location.add(path=[2])

    for i, (type_name, options) in enumerate(messages):
        message = proto_file.message_type.add(name=type_name)
        if options is not None:
            message.options.CopyFrom(options)
        proto_file.source_code_info.location.add(path=[4, i])
        proto_file.source_code_info.location.add(path=[4, i, 1])

    return proto_file


def _request(files, parameter="repo=acme,project=chain,module=blog"):
    request = plugin_pb2.CodeGeneratorRequest(parameter=parameter)
    request.file_to_generate.extend(f.name for f in files)
    request.proto_file.extend(files)
    return request


@pytest.fixture
def string_field():
    return _string_field


@pytest.fixture
def varint():
    return _varint


@pytest.fixture
def make_options():
    return _options


@pytest.fixture
def index_options():
    return _index_options


@pytest.fixture
def proto_file():
    return _proto_file


@pytest.fixture
def make_request():
    return _request

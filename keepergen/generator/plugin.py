"""protoc plugin boundary: request in, response out."""

import logging
from typing import BinaryIO

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2
from google.protobuf.message import DecodeError as ProtobufDecodeError
from google.protobuf.message import EncodeError as ProtobufEncodeError

from .config import GeneratorConfig
from .errors import DecodeError, EncodingError
from .keeper import generate

logger = logging.getLogger("keepergen")


def decode_request(data: bytes) -> plugin_pb2.CodeGeneratorRequest:
    """Parse a serialized CodeGeneratorRequest."""
    request = plugin_pb2.CodeGeneratorRequest()
    try:
        request.ParseFromString(data)
    except ProtobufDecodeError as e:
        raise DecodeError(f"Failed to decode CodeGeneratorRequest: {e}") from e
    return request


def decode_descriptor_set(data: bytes) -> descriptor_pb2.FileDescriptorSet:
    """Parse a serialized FileDescriptorSet, as written by ``protoc --descriptor_set_out``."""
    descriptor_set = descriptor_pb2.FileDescriptorSet()
    try:
        descriptor_set.ParseFromString(data)
    except ProtobufDecodeError as e:
        raise DecodeError(f"Failed to decode FileDescriptorSet: {e}") from e
    return descriptor_set


def encode_response(response: plugin_pb2.CodeGeneratorResponse) -> bytes:
    """Serialize a CodeGeneratorResponse."""
    try:
        return response.SerializeToString()
    except ProtobufEncodeError as e:
        raise EncodingError(f"Failed to encode CodeGeneratorResponse: {e}") from e


def run(
    request: plugin_pb2.CodeGeneratorRequest,
    overrides: dict[str, str | None] | None = None,
) -> plugin_pb2.CodeGeneratorResponse:
    """Generate the keeper file for a request."""
    if request.HasField("compiler_version"):
        version = request.compiler_version
        logger.debug(
            "Invoked by protoc %d.%d.%d%s",
            version.major,
            version.minor,
            version.patch,
            f"-{version.suffix}" if version.suffix else "",
        )

    config = GeneratorConfig.from_parameter(request.parameter, overrides)
    artifact = generate(request.proto_file, config)

    response = plugin_pb2.CodeGeneratorResponse(
        supported_features=plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL,
    )
    response.file.add(name=artifact.name, content=artifact.content)
    return response


def main(stdin: BinaryIO, stdout: BinaryIO) -> None:
    """Read a request from ``stdin`` and write the response to ``stdout``.

    Nothing is written unless generation succeeds.
    """
    request = decode_request(stdin.read())
    data = encode_response(run(request))
    stdout.write(data)
    stdout.flush()

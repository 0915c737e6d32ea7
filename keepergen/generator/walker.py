"""Walk file descriptors for top-level message declarations."""

import logging
from collections.abc import Iterable, Iterator

from google.protobuf import descriptor_pb2

from .errors import DescriptorError

logger = logging.getLogger("keepergen")

MESSAGE_TYPE_FIELD_NUMBER = descriptor_pb2.FileDescriptorProto.MESSAGE_TYPE_FIELD_NUMBER


def iter_messages(
    files: Iterable[descriptor_pb2.FileDescriptorProto],
) -> Iterator[tuple[str, descriptor_pb2.MessageOptions]]:
    """Yield ``(type_name, options)`` for each top-level message with options.

    Messages are found through the file's source code info: a location path
    ``[4, i]`` is the declaration of ``message_type[i]``. Files are visited in
    order, messages in location order. Messages without options are skipped.
    """
    for proto_file in files:
        locations = proto_file.source_code_info.location
        if not locations:
            logger.warning("%s has no source code info, skipping", proto_file.name)
            continue

        logger.debug("Scanning %s", proto_file.name)
        for location in locations:
            path = location.path
            if len(path) != 2 or path[0] != MESSAGE_TYPE_FIELD_NUMBER:
                continue

            index = path[1]
            if not 0 <= index < len(proto_file.message_type):
                raise DescriptorError(
                    f"{proto_file.name}: location {list(path)} refers to message {index}, "
                    f"but only {len(proto_file.message_type)} are declared"
                )

            message = proto_file.message_type[index]
            if not message.HasField("options"):
                logger.debug("%s has no options", message.name)
                continue

            yield message.name, message.options

"""Go keeper code generator for indexed message types."""

import logging
from collections.abc import Iterable, Iterator

from google.protobuf import descriptor_pb2
from jinja2 import Environment, PackageLoader

from .annotations import extract_index
from .config import GeneratorConfig
from .errors import AssemblerStateError
from .types import KEEPER_FILENAME, GeneratedArtifact, GeneratedBlock, IndexedMessage
from .walker import iter_messages

logger = logging.getLogger("keepergen")

env = Environment(
    loader=PackageLoader("keepergen.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

header_template = env.get_template("keeper/header.go.j2")
key_template = env.get_template("keeper/key.go.j2")
unmarshal_template = env.get_template("keeper/unmarshal.go.j2")
marshal_template = env.get_template("keeper/marshal.go.j2")
get_template = env.get_template("keeper/get.go.j2")
set_template = env.get_template("keeper/set.go.j2")


def render_header(config: GeneratorConfig) -> str:
    """Render the package clause and imports of the keeper file."""
    return header_template.render(repo=config.repo, project=config.project, module=config.module)


def store_key_prefix(type_name: str) -> str:
    """Return the store key prefix under which ``type_name`` values are kept."""
    return f"IndexedTypes-{type_name}-"


def emit_block(type_name: str, index_field: str) -> GeneratedBlock:
    """Render the accessors for one indexed message type."""
    return GeneratedBlock(
        type_name=type_name,
        index_field=index_field,
        key_builder=key_template.render(
            type_name=type_name, key_prefix=store_key_prefix(type_name)
        ),
        decoder=unmarshal_template.render(type_name=type_name),
        encoder=marshal_template.render(type_name=type_name),
        getter=get_template.render(type_name=type_name),
        setter=set_template.render(type_name=type_name, index_field=index_field),
    )


def iter_indexed_messages(
    files: Iterable[descriptor_pb2.FileDescriptorProto],
) -> Iterator[IndexedMessage]:
    """Yield the messages carrying the index option, in declaration order."""
    for type_name, options in iter_messages(files):
        index_field, found = extract_index(options)
        if found:
            yield IndexedMessage(type_name=type_name, index_field=index_field)


class ArtifactAssembler:
    """Accumulates the header and accessor blocks into the keeper file.

    The header is written on construction. Blocks are appended in the order
    messages are visited. ``finalize`` produces the artifact once; the
    assembler cannot be reused afterwards.
    """

    def __init__(self, config: GeneratorConfig, filename: str = KEEPER_FILENAME) -> None:
        self.filename = filename
        self._parts: list[str] = [render_header(config)]
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    def append(self, block: GeneratedBlock) -> None:
        if self._finalized:
            raise AssemblerStateError(f"{self.filename} is already finalized")
        self._parts.append(block.render())

    def finalize(self) -> GeneratedArtifact:
        if self._finalized:
            raise AssemblerStateError(f"{self.filename} is already finalized")
        self._finalized = True
        return GeneratedArtifact(name=self.filename, content="".join(self._parts))


def generate(
    files: Iterable[descriptor_pb2.FileDescriptorProto], config: GeneratorConfig
) -> GeneratedArtifact:
    """Generate the keeper file for every indexed message in ``files``.

    Any MalformedAnnotation aborts the whole run; no partial artifact is
    returned.
    """
    assembler = ArtifactAssembler(config)

    for message in iter_indexed_messages(files):
        logger.debug(
            "Generating accessors for %s indexed by %s", message.type_name, message.index_field
        )
        assembler.append(emit_block(message.type_name, message.index_field))

    return assembler.finalize()

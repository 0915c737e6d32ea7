"""Type definitions for keeper code generation."""

from dataclasses import dataclass

from dataclasses_json import DataClassJsonMixin

KEEPER_FILENAME = "keeper.pb.go"


@dataclass(frozen=True)
class IndexedMessage(DataClassJsonMixin):
    """A message type annotated with the index option."""

    type_name: str
    index_field: str


@dataclass(frozen=True)
class GeneratedBlock(DataClassJsonMixin):
    """The five accessor fragments generated for one indexed message.

    Fragments are kept separately, in emission order:
    key builder, decoder, encoder, getter, setter.
    """

    type_name: str
    index_field: str
    key_builder: str
    decoder: str
    encoder: str
    getter: str
    setter: str

    @property
    def fragments(self) -> tuple[str, str, str, str, str]:
        return (self.key_builder, self.decoder, self.encoder, self.getter, self.setter)

    def render(self) -> str:
        """Concatenate the fragments in emission order."""
        return "".join(self.fragments)


@dataclass(frozen=True)
class GeneratedArtifact(DataClassJsonMixin):
    """One named unit of generated source returned to protoc."""

    name: str
    content: str

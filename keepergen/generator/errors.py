"""Exception hierarchy for keepergen.

Every failure aborts the run. The CLI catches KeeperGenError at the
process boundary and exits non-zero without writing a response.
"""


class KeeperGenError(RuntimeError):
    """Base exception for all keepergen errors."""


class DecodeError(KeeperGenError):
    """The incoming CodeGeneratorRequest could not be parsed."""


class EncodingError(KeeperGenError):
    """The outgoing CodeGeneratorResponse could not be serialized."""


class ConfigurationError(KeeperGenError):
    """Plugin parameters are missing, empty, duplicated or unknown."""


class MalformedAnnotation(KeeperGenError):
    """A message carries an index option that cannot be read.

    Raised for option tokens with the wrong arity, non-numeric field
    numbers, improperly quoted values, or wire payloads where the index
    field is not a non-empty UTF-8 string.
    """


class DescriptorError(KeeperGenError):
    """A source location does not resolve to a declared message."""


class AssemblerStateError(KeeperGenError):
    """The artifact assembler was used after it was finalized."""

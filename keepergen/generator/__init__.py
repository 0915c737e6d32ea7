"""Keeper store accessor generator."""

from .annotations import INDEX_FIELD_NUMBER as INDEX_FIELD_NUMBER
from .annotations import extract_index as extract_index
from .annotations import parse_index as parse_index
from .config import GeneratorConfig as GeneratorConfig
from .errors import *
from .keeper import ArtifactAssembler as ArtifactAssembler
from .keeper import emit_block as emit_block
from .keeper import generate as generate
from .keeper import iter_indexed_messages as iter_indexed_messages
from .types import *
from .walker import iter_messages as iter_messages

"""Generator configuration read from the protoc plugin parameter."""

from __future__ import annotations

from dataclasses import dataclass, fields

from dataclasses_json import DataClassJsonMixin

from .errors import ConfigurationError


@dataclass(frozen=True)
class GeneratorConfig(DataClassJsonMixin):
    """Identifiers used to build the keeper header.

    The generated file imports ``github.com/<repo>/<project>/x/<module>/types``.
    All three values are required; there are no defaults.
    """

    repo: str
    project: str
    module: str

    def __post_init__(self) -> None:
        for name in self.keys():
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(f"{name} must be a non-empty string")

    @classmethod
    def keys(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_parameter(
        cls, parameter: str, overrides: dict[str, str | None] | None = None
    ) -> GeneratorConfig:
        """Build a config from a ``key=value,key=value`` parameter string.

        Args:
            parameter: The raw ``CodeGeneratorRequest.parameter`` value.
            overrides: Values taking precedence over the parameter string.
                ``None`` values are ignored.
        """
        values = parse_parameter(parameter)
        for key, value in (overrides or {}).items():
            if value is not None:
                values[key] = value

        unknown = sorted(set(values) - set(cls.keys()))
        if unknown:
            raise ConfigurationError(f"Unknown parameter(s): {', '.join(unknown)}")

        missing = [key for key in cls.keys() if key not in values]
        if missing:
            raise ConfigurationError(f"Missing required parameter(s): {', '.join(missing)}")

        return cls(**values)


def parse_parameter(parameter: str) -> dict[str, str]:
    """Split a protoc parameter string into a dict."""
    values: dict[str, str] = {}
    for item in parameter.split(","):
        item = item.strip()
        if not item:
            continue
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigurationError(f"Invalid parameter: {item!r} (expected key=value)")
        if key in values:
            raise ConfigurationError(f"Duplicate parameter: {key}")
        values[key] = value.strip()
    return values

"""Parser configuration options."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Names the grammar resolves besides catalog functions."""

    # variable name -> data type
    variables: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    allow_unknown_triggers: bool = False

    @staticmethod
    def with_variables(variables: Mapping[str, str]) -> "ParserOptions":
        return ParserOptions(variables=MappingProxyType(dict(variables)))

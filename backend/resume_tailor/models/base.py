from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


def _none_to_empty(value: Any) -> Any:
    """Missing/null text becomes "" so renderers never see None."""
    return "" if value is None else value


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


def _none_to_dict(value: Any) -> Any:
    return {} if value is None else value


# Required text field: null → "", wrong type still rejected
Text = Annotated[str, BeforeValidator(_none_to_empty)]

# Required list of strings: null → [], non-list / non-string items still rejected
TextList = Annotated[list[str], BeforeValidator(_none_to_list)]


class CamelModel(BaseModel):
    """Base for wire models: snake_case attributes, camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

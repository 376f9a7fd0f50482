"""Base Pydantic schemas with strict validation."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StrictBaseModel(BaseModel):
    """Base model that forbids extra fields.

    All API request/response models should inherit from this class
    to ensure strict contract enforcement between clients and the API.

    When to use BaseModel instead:
        - Settings/config models that need extra="ignore" for env vars
    """

    model_config = ConfigDict(extra="forbid")


class CamelCaseModel(StrictBaseModel):
    """Strict model whose wire names are camelCase.

    Tool arguments arrive as ``ohlcData``, ``fastPeriod`` and so on. Fields are
    declared in snake_case and accept either spelling on input; responses are
    serialized with the camelCase aliases.

    Usage:
        class MyArguments(CamelCaseModel):
            fast_period: int  # "fastPeriod" on the wire
    """

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

"""Type builders for typed generation, exported as ``polyfact.t``.

Example:
    >>> from polyfact import t
    >>> Review = t.model(
    ...     "Review",
    ...     sentiment=t.literal("positive", "negative"),
    ...     score=t.described(t.number, "Score between 0 and 10"),
    ...     tags=t.array(t.string),
    ... )
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, create_model

string = str
number = float
integer = int
boolean = bool


def array(item: Any) -> Any:
    """List of ``item``."""
    return list[item]


def optional(tp: Any) -> Any:
    """``tp`` or null."""
    return tp | None


def literal(*values: Any) -> Any:
    """One of the given constant values."""
    if not values:
        raise ValueError("literal() needs at least one value")
    return Literal[values]


def described(tp: Any, description: str) -> Any:
    """Attach a description shown to the model in the JSON schema."""
    return Annotated[tp, Field(description=description)]


def model(name: str, /, **fields: Any) -> type[BaseModel]:
    """Build a pydantic model with the given required fields."""
    return create_model(name, **{key: (tp, ...) for key, tp in fields.items()})

import inspect
from typing import Any, Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from glue_di.domain.enums import BindingKind

Factory = Callable[[Any], Any]


class Registration(BaseModel):
    """Value object representing a binding in the registry.

    Attributes:
        dependency_type: The token being registered.
        factory: Function receiving the requested token and returning an instance.
        kind: How the factory produces its instance.
        implementation: Concrete type for singleton/transient bindings.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    dependency_type: Any = Field(..., description="The dependency token being registered.")
    factory: Factory = Field(..., description="Factory invoked with the requested token.")
    kind: BindingKind = Field(default=BindingKind.FUNCTION, description="How the instance is produced.")
    implementation: Optional[type] = Field(
        default=None,
        description="Concrete type constructed by singleton and transient bindings.",
    )


class ParameterPlan(BaseModel):
    """A constructor parameter together with the token used to resolve it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="Parameter name in the constructor signature.")
    dependency_type: Any = Field(..., description="Token resolved for this parameter.")
    keyword_only: bool = Field(default=False, description="Whether the argument is passed by keyword.")


class ConstructorPlan(BaseModel):
    """The single public constructor of a type and its ordered parameters.

    Recomputed for every construction; never cached.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    dependency_type: type = Field(..., description="The concrete type to construct.")
    signature: inspect.Signature = Field(..., description="The constructor signature.")
    parameters: List[ParameterPlan] = Field(
        default_factory=list,
        description="Parameters to resolve, in declaration order.",
    )

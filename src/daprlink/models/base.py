"""Base Pydantic model configuration for daprlink models.

All daprlink models inherit from DaprLinkBaseModel:
- Immutability (frozen=True): endpoints and trace snapshots never change
  once a component holds them
- Strict validation (extra="forbid") to catch typos and invalid fields
- Flexible field naming (populate_by_name=True) for alias support
"""

from pydantic import BaseModel, ConfigDict


class DaprLinkBaseModel(BaseModel):
    """Base model for all daprlink value objects.

    Example:
        >>> from pydantic import Field
        >>> class Target(DaprLinkBaseModel):
        ...     app_id: str
        ...     port: int = Field(default=3500, gt=0)
        >>>
        >>> target = Target(app_id="orders")
        >>> target.port
        3500
        >>> target.port = 80  # Raises ValidationError (frozen)
        Traceback (most recent call last):
        ...
        pydantic_core._pydantic_core.ValidationError: ...
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        validate_default=True,
    )

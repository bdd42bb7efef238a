"""
Base model shared by the Jira and Confluence projections.

Every model is built from a raw API payload with ``from_api_response`` and
rendered back out with ``to_simplified_dict``.
"""

from typing import Any, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound="ApiModel")


class ApiModel(BaseModel):
    """
    Base model for all API models with common conversion methods.
    """

    @classmethod
    def from_api_response(cls: type[T], data: dict[str, Any], **kwargs: Any) -> T:
        """
        Convert an API response to a model instance.

        Args:
            data: The API response data
            **kwargs: Additional context parameters

        Returns:
            An instance of the model

        Raises:
            NotImplementedError: If the subclass does not implement this method
        """
        raise NotImplementedError("Subclasses must implement from_api_response")

    def to_simplified_dict(self) -> dict[str, Any]:
        """
        Convert the model to a simplified dictionary for tool responses.
        """
        return self.model_dump(exclude_none=True)


def get_path(data: Any, *keys: str) -> Any:
    """Walk nested dictionaries, returning None as soon as a key is missing."""
    current = data
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def as_text(value: Any, default: str) -> str:
    """Render a scalar JSON value as text, using ``default`` for null/absent."""
    if value is None or isinstance(value, dict | list):
        return default
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)

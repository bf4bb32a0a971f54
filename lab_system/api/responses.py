"""
Helpers for OpenAPI ``responses`` entries.
"""

from typing import Any, Dict, Optional, Type

from pydantic import BaseModel


def json_response(
    model: Type[BaseModel], description: str, example: Optional[Any] = None
) -> Dict[str, Any]:
    """A JSON response entry for ``APIRouter`` ``responses=`` mappings."""
    entry: Dict[str, Any] = {"model": model, "description": description}
    if example is not None:
        entry["content"] = {"application/json": {"example": example}}
    return entry

"""Error response body returned by every failing endpoint."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorResult(BaseModel):
    """
    Structured error body.

    Example:
        ```json
        {"statusCode": 404, "error": true, "errormessage": "Table 7 not found"}
        ```
    """

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(
        ...,
        alias="statusCode",
        description="HTTP status code",
        json_schema_extra={"example": 404},
    )
    error: bool = Field(default=True, description="Always true for errors")
    errormessage: str = Field(
        ...,
        description="Human-readable explanation",
        json_schema_extra={"example": "Table 7 not found"},
    )
    details: list[dict[str, Any]] | None = Field(
        default=None,
        description="Field-level problems (request validation only)",
    )

    def to_content(self) -> dict[str, Any]:
        """Serialize with wire names, leaving out empty details."""
        return self.model_dump(by_alias=True, exclude_none=True)

from pydantic import BaseModel


class ValidationError(BaseModel):
    """Individual field error"""
    field: str
    message: str
    value: str | None = None  # offending input, when there is one


class ErrorResponse(BaseModel):
    """Body of every 4xx produced by request binding"""
    code: int
    message: str
    errors: list[ValidationError] = []

    def to_json(self) -> dict:
        body = self.model_dump(exclude_none=True)
        if not self.errors:
            body.pop("errors")
        return body


class ValidResponse(BaseModel):
    status: str = "valid"
    data: dict

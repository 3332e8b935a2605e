from fastapi import APIRouter, Depends

from reqbind.api.binding import bind
from reqbind.binding.descriptors import FieldConfig
from reqbind.binding.pipeline import RequestBinder
from reqbind.binding.schema import TypedRecord
from reqbind.binding.sources import SourceKind
from reqbind.core.validator import get_validator
from reqbind.schemas.request import GENERIC_REQUEST
from reqbind.schemas.validation import ValidResponse

router = APIRouter(tags=["search"])

search_binder = RequestBinder(
    GENERIC_REQUEST,
    [
        FieldConfig(
            "Tags",
            SourceKind.QUERY,
            required=True,
            rules="required,min=1,max=5,dive,in=tech,sports,politics",
        ),
        FieldConfig("Rating", SourceKind.QUERY, default="5", rules="omitempty,min=1,max=5"),
        FieldConfig("Active", SourceKind.QUERY),
    ],
    validator=get_validator(),
    group="search",
)


@router.get("/search", response_model=ValidResponse)
def search(record: TypedRecord = Depends(bind(search_binder))):
    """Echo the bound search filters."""
    return ValidResponse(data=record.as_dict())

from fastapi import APIRouter, Depends, status

from reqbind.api.binding import bind
from reqbind.binding.descriptors import FieldConfig
from reqbind.binding.pipeline import RequestBinder
from reqbind.binding.schema import TypedRecord
from reqbind.binding.sources import SourceKind
from reqbind.core.validator import get_validator
from reqbind.schemas.request import GENERIC_REQUEST
from reqbind.schemas.validation import ValidResponse

router = APIRouter(prefix="/users", tags=["users"])

create_user_binder = RequestBinder(
    GENERIC_REQUEST,
    [
        FieldConfig("Name", SourceKind.BODY, required=True, rules="required,min=3,max=50"),
        FieldConfig("Email", SourceKind.BODY, required=True, rules="required,email"),
        FieldConfig("Tags", SourceKind.BODY, rules="omitempty,unique,dive,min=2,max=20"),
        FieldConfig("Role", SourceKind.BODY, rules="omitempty,in=user,admin,moderator"),
    ],
    validator=get_validator(),
    group="create",
)

update_user_binder = RequestBinder(
    GENERIC_REQUEST,
    [
        FieldConfig("UserID", SourceKind.PATH, required=True, rules="required,min=1,update"),
        FieldConfig("Name", SourceKind.BODY, rules="omitempty,min=3,max=50"),
        FieldConfig("IDs", SourceKind.QUERY, rules="omitempty,unique,dive,min=1"),
    ],
    validator=get_validator(),
    group="update",
)


@router.post("", response_model=ValidResponse, status_code=status.HTTP_201_CREATED)
def create_user(record: TypedRecord = Depends(bind(create_user_binder))):
    return ValidResponse(data=record.as_dict())


@router.put("/{user_id}", response_model=ValidResponse)
def update_user(record: TypedRecord = Depends(bind(update_user_binder))):
    return ValidResponse(data=record.as_dict())

from reqbind.binding.descriptors import FieldConfig
from reqbind.binding.pipeline import BadRequest, Unprocessable, Valid, process
from reqbind.binding.sources import SourceKind
from reqbind.schemas.request import GENERIC_REQUEST
from tests.helpers import errors_of, make_binder, make_sources


def test_short_name_in_body_is_unprocessable():
    binder = make_binder(
        [FieldConfig("Name", SourceKind.BODY, required=True, rules="required,min=3,max=50")],
        group="create",
    )
    outcome = binder.process(make_sources(body={"name": "Al"}))

    assert isinstance(outcome, Unprocessable)
    assert outcome.status_code == 422
    assert outcome.error.code == 422
    assert outcome.error.message == "Validation failed"
    assert errors_of(outcome) == [("Name", "Minimum 3 characters required")]


def test_query_tag_outside_allowed_set_is_unprocessable():
    binder = make_binder(
        [
            FieldConfig(
                "Tags",
                SourceKind.QUERY,
                required=True,
                rules="min=1,max=5,dive,in=tech,sports,politics",
            )
        ],
        group="search",
    )
    outcome = binder.process(make_sources(query={"tags": "tech,music"}))

    assert isinstance(outcome, Unprocessable)
    assert len(outcome.error.errors) == 1
    err = outcome.error.errors[0]
    assert err.message == "Invalid element: Must be one of: tech, sports, politics"
    assert err.value == "music"


def test_missing_path_param_is_bad_request():
    binder = make_binder(
        [FieldConfig("UserID", SourceKind.PATH, required=True, rules="required,min=1")],
        group="update",
    )
    outcome = binder.process(make_sources(path={}))

    assert isinstance(outcome, BadRequest)
    assert outcome.status_code == 400
    assert outcome.error.message == "Invalid request data"
    assert errors_of(outcome) == [("UserID", "This field is required")]


def test_all_valid_returns_coerced_record():
    binder = make_binder(
        [
            FieldConfig("UserID", SourceKind.PATH, required=True, rules="required,min=1"),
            FieldConfig("Name", SourceKind.BODY, rules="omitempty,min=3,max=50"),
            FieldConfig("IDs", SourceKind.QUERY, rules="omitempty,unique,dive,min=1"),
            FieldConfig("Rating", SourceKind.QUERY, default="5", rules="omitempty,min=1,max=5"),
        ],
        group="update",
    )
    outcome = binder.process(
        make_sources(body={"name": "Alice"}, query={"ids": "3, 4"}, path={"user_id": "42"})
    )

    assert isinstance(outcome, Valid)
    assert outcome.status_code == 200
    record = outcome.record
    assert record["UserID"] == 42
    assert record["Name"] == "Alice"
    assert record["IDs"] == [3, 4]
    assert record["Rating"] == 5
    assert record["Tags"] == []


def test_required_absent_gives_single_error_without_coercion_error():
    binder = make_binder(
        [
            FieldConfig("IDs", SourceKind.QUERY, required=True, rules="required,dive,min=1"),
            FieldConfig("Rating", SourceKind.QUERY, required=True),
        ]
    )
    outcome = binder.process(make_sources(query={}))
    assert isinstance(outcome, BadRequest)
    assert errors_of(outcome) == [
        ("IDs", "This field is required"),
        ("Rating", "This field is required"),
    ]


def test_extraction_errors_skip_validation():
    binder = make_binder(
        [
            FieldConfig("Name", SourceKind.QUERY, rules="min=10"),
            FieldConfig("Rating", SourceKind.QUERY, rules="min=1"),
        ]
    )
    outcome = binder.process(make_sources(query={"name": "short", "rating": "x"}))
    # Name would fail min=10, but validation never runs
    assert isinstance(outcome, BadRequest)
    assert errors_of(outcome) == [("Rating", "must be a valid integer")]
    assert outcome.error.errors[0].value == "x"


def test_validation_errors_batched_across_fields():
    binder = make_binder(
        [
            FieldConfig("Name", SourceKind.BODY, rules="required,min=3"),
            FieldConfig("Email", SourceKind.BODY, rules="required,email"),
            FieldConfig("Tags", SourceKind.BODY, rules="omitempty,unique"),
        ],
        group="create",
    )
    outcome = binder.process(make_sources(body={"name": "Al", "email": "bad", "tags": ["a", "a"]}))
    assert isinstance(outcome, Unprocessable)
    assert errors_of(outcome) == [
        ("Name", "Minimum 3 characters required"),
        ("Email", "Invalid email format"),
        ("Tags", "Contains duplicate values"),
    ]


def test_module_level_process_matches_binder(validator):
    binder = make_binder([FieldConfig("Rating", SourceKind.QUERY, rules="max=5")], validator=validator)
    sources = make_sources(query={"rating": "7"})
    outcome = process(GENERIC_REQUEST, binder.descriptors, None, sources, validator=validator)
    assert outcome == binder.process(sources)
    assert errors_of(outcome) == [("Rating", "Maximum value is 5")]


def test_outcome_status_codes_match_http_constants():
    from fastapi import status

    from reqbind.schemas.validation import ErrorResponse

    error = ErrorResponse(code=status.HTTP_400_BAD_REQUEST, message="Invalid request")
    assert BadRequest(error).status_code == status.HTTP_400_BAD_REQUEST
    assert Valid(GENERIC_REQUEST.new_record()).status_code == status.HTTP_200_OK
    assert Unprocessable(error).status_code == 422

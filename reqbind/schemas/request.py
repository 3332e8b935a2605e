from reqbind.binding.coercion import FieldKind
from reqbind.binding.schema import FieldSpec, RecordSchema
from reqbind.binding.sources import SourceKind

BODY, QUERY, PATH = SourceKind.BODY, SourceKind.QUERY, SourceKind.PATH


# Every field any endpoint can bind, with its wire key per source.
GENERIC_REQUEST = RecordSchema(
    "GenericRequest",
    [
        FieldSpec("Name", FieldKind.STRING, {BODY: "name", QUERY: "name", PATH: "name"}),
        FieldSpec("Email", FieldKind.STRING, {BODY: "email", QUERY: "email"}),
        FieldSpec("Tags", FieldKind.STRING_LIST, {BODY: "tags", QUERY: "tags"}),
        FieldSpec("IDs", FieldKind.UNSIGNED_INT_LIST, {BODY: "ids", QUERY: "ids"}),
        FieldSpec("UserID", FieldKind.UNSIGNED_INT, {BODY: "user_id", PATH: "user_id"}),
        FieldSpec("Rating", FieldKind.INT, {BODY: "rating", QUERY: "rating"}),
        FieldSpec("Role", FieldKind.STRING, {BODY: "role", QUERY: "role"}),
        FieldSpec("Active", FieldKind.BOOL, {BODY: "active", QUERY: "active"}),
    ],
)

"""Translation of backend schema errors into actionable messages."""

from menuscan.domain.shared.errors import BackendError, SchemaMismatchError

FOOD_CREATE_ATTRIBUTES = (
    "name (string), ingredients (string[]), cookTimeMinutes (integer), "
    "price (double), imageFileId (string), available (boolean), "
    "restaurantUserId (string)"
)
FOOD_UPDATE_ATTRIBUTES = (
    "name (string), ingredients (string[]), cookTimeMinutes (integer), "
    "price (double), available (boolean)"
)


def is_unknown_attribute_error(error: BackendError) -> bool:
    """Backend rejected a write because the collection lacks an attribute."""
    return (
        "Invalid document structure" in error.message
        and "unknown attribute" in error.message
    )


def is_missing_query_attribute_error(error: BackendError) -> bool:
    """Backend rejected a query on an attribute the collection lacks."""
    return "Attribute not found in schema" in error.message


def food_write_schema_error(error: BackendError, attributes: str) -> SchemaMismatchError:
    return SchemaMismatchError(
        "Foods collection schema does not match the fields this app sends. "
        f"Add these attributes to the foods collection: {attributes}.",
        status_code=error.status_code,
    )


def food_query_schema_error(error: BackendError) -> SchemaMismatchError:
    return SchemaMismatchError(
        "Foods collection is missing required attribute 'restaurantUserId'. "
        "Add it to the foods collection attributes, then try again.",
        status_code=error.status_code,
    )
